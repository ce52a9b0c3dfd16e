"""Migration of course details URLs from the organization-based API paths."""

from __future__ import annotations

import logging

import click

from tmc_submitter.models import CourseInfo
from tmc_submitter.types import FetchExercises, SaveCourseInfo

logger = logging.getLogger(__name__)


def api_url_is_outdated(details_url: str, api_version: int) -> bool:
    """Return whether a details URL does not point at the current API version."""
    return f"v{api_version}" not in details_url


def get_updated_details_url(details_url: str, api_version: int) -> str:
    """Rewrite an ``/org/<slug>/courses/...`` URL to the versioned core API path.

    Args:
        details_url: Details URL stored in the course manifest.
        api_version: Current server API version.

    Returns:
        ``<prefix>/api/v<version>/core/courses/...``, or the URL unchanged when it
        contains no ``/org`` segment (or no ``/courses`` segment after it).
    """
    i_org = details_url.find("/org")
    if i_org == -1:
        return details_url
    i_courses = details_url.find("/courses", i_org)
    if i_courses == -1:
        return details_url
    return details_url[:i_org] + f"/api/v{api_version}/core" + details_url[i_courses:]


def update_course_and_exercises(
    info: CourseInfo,
    fetch: FetchExercises,
    save: SaveCourseInfo,
    api_version: int,
) -> bool:
    """Migrate the course details URL and refresh all exercises from the server.

    The manifest is only written when the refreshed exercise list was fetched.

    Args:
        info: Course manifest, mutated in place on success.
        fetch: Fetches the exercise list of a course, None on failure.
        save: Persists the manifest.
        api_version: Current server API version.

    Returns:
        True if the course was migrated and saved.
    """
    course = info.course
    old_url = course.details_url
    course.details_url = get_updated_details_url(old_url, api_version)
    logger.debug("Migrating details url of %s: %s -> %s", info.course_name, old_url, course.details_url)

    exercises = fetch(course)
    if exercises is None:
        course.details_url = old_url
        click.echo(f"Failed to update urls for exercises of course {info.course_name}")
        return False

    course.set_exercises(exercises)
    try:
        save(info)
    except OSError as e:
        logger.error("Saving migrated course config of %s failed: %s", info.course_name, e)
        click.echo(f"Failed to update config file for course {info.course_name}", err=True)
        return False
    return True
