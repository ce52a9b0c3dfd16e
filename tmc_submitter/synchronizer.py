"""Reconciling the course manifest with the server's exercise list."""

from __future__ import annotations

import logging

import click

from tmc_submitter.models import CourseInfo, Exercise
from tmc_submitter.types import FetchExercises, SaveCourseInfo

logger = logging.getLogger(__name__)


def update_course_json(
    submitted: list[Exercise],
    info: CourseInfo,
    fetch: FetchExercises,
    save: SaveCourseInfo,
) -> bool:
    """Fetch exercise statuses from the server and update the manifest accordingly.

    Only exercises of the submitted batch are touched. Exercises the server no
    longer lists are reported and kept as they are locally.

    Args:
        submitted: Exercises submitted in this invocation.
        info: Course manifest, mutated in place.
        fetch: Fetches the exercise list of a course, None on failure.
        save: Persists the manifest.

    Returns:
        False if the server's exercise list could not be fetched (nothing is written)
        or the manifest could not be saved.
    """
    server_exercises = fetch(info.course)
    if server_exercises is None:
        click.echo(f"Failed to update config file for course {info.course_name}")
        return False

    by_name = {exercise.name: exercise for exercise in server_exercises}
    for exercise in submitted:
        updated = by_name.get(exercise.name)
        if updated is None:
            click.echo(
                f"Failed to update config file for exercise {exercise.name}. "
                "The exercise doesn't exist in server anymore."
            )
            continue
        if updated.completed:
            info.remove_local_completed(updated.name)
        info.replace_old_exercise(updated)

    try:
        save(info)
    except OSError as e:
        logger.error("Saving course config of %s failed: %s", info.course_name, e)
        click.echo(f"Failed to update config file for course {info.course_name}", err=True)
        return False
    logger.debug("Synchronized %d submitted exercise(s) of %s", len(submitted), info.course_name)
    return True
