"""HTTP transport for the grading server."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

import click
import requests
from pydantic import BaseModel
from tqdm import tqdm

from tmc_submitter.configs import Settings
from tmc_submitter.models import Course, Exercise, SubmissionResult
from tmc_submitter.packager import compress_exercise
from tmc_submitter.workdir import exercise_directory

logger = logging.getLogger(__name__)

PROCESSING_STATUS = "processing"


class _CourseDetailsResponse(BaseModel):
    course: Course


def _json_object(response: requests.Response) -> dict[str, Any]:
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class TmcClient:
    """Blocking client for the course, submission and feedback endpoints.

    Every public method reports its own failures and returns None/False instead
    of raising, so callers can treat them as plain capabilities.

    Args:
        settings: User settings with server credentials and timeouts.
        course_directory: Local course directory holding the exercise sources.
        session: Optional preconfigured requests session.
    """

    def __init__(
        self,
        settings: Settings,
        course_directory: Path,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings
        self.course_directory = course_directory
        self.session = session or requests.Session()
        if settings.access_token:
            self.session.headers["Authorization"] = f"Bearer {settings.access_token}"
        if settings.proxy:
            self.session.proxies = {"http": settings.proxy, "https": settings.proxy}

    def _params(self) -> dict[str, str]:
        return {
            "client": self.settings.client_name,
            "client_version": self.settings.client_version,
        }

    def _get_json(self, url: str) -> dict[str, Any]:
        response = self.session.get(url, params=self._params(), timeout=self.settings.request_timeout_seconds)
        response.raise_for_status()
        return _json_object(response)

    def get_course_exercises(self, course: Course) -> list[Exercise] | None:
        """Fetch the canonical exercise list of a course.

        Args:
            course: Course whose details URL is queried.

        Returns:
            Exercises reported by the server, or None if the request failed.
        """
        try:
            data = self._get_json(course.details_url)
            return _CourseDetailsResponse.model_validate(data).course.exercises
        except (requests.RequestException, ValueError) as e:
            logger.debug("Fetching %s failed", course.details_url, exc_info=True)
            click.echo(f"Warning: Failed to fetch exercises of course {course.name}: {e}", err=True)
            return None

    def submit_exercise(self, exercise: Exercise) -> SubmissionResult | None:
        """Upload an exercise and wait until the server has graded it.

        Args:
            exercise: Exercise to submit; its sources are read from the course directory.

        Returns:
            The graded result, or None on any transport failure or timeout.
        """
        if not exercise.return_url:
            click.echo(f"Warning: Exercise {exercise.name} has no submission url", err=True)
            return None

        try:
            archive = compress_exercise(exercise_directory(self.course_directory, exercise))
            response = self.session.post(
                exercise.return_url,
                params=self._params(),
                files={"submission[file]": ("submission.zip", archive, "application/zip")},
                timeout=self.settings.request_timeout_seconds,
            )
            response.raise_for_status()
            submission_url = _json_object(response)["submission_url"]
            logger.debug("Submitted %s, polling %s", exercise.name, submission_url)
            return self._wait_for_result(submission_url)
        except (requests.RequestException, ValueError, KeyError, OSError, TimeoutError) as e:
            click.echo(f"Warning: Failed to submit {exercise.name}: {e}", err=True)
            return None

    def _wait_for_result(self, submission_url: str) -> SubmissionResult:
        """Poll the submission until it leaves the grading queue.

        Raises:
            TimeoutError: If grading does not finish within the configured wait.
        """
        max_wait = self.settings.grading_max_wait_seconds
        interval = self.settings.grading_poll_interval_seconds
        max_iterations = max(1, max_wait // interval)

        with tqdm(total=max_iterations, desc="Waiting for grading", unit="poll", leave=False) as pbar:
            for _ in range(max_iterations):
                data = self._get_json(submission_url)
                if data.get("status") != PROCESSING_STATUS:
                    pbar.set_description("Graded")
                    return SubmissionResult.model_validate(data)

                queued = data.get("submissions_before_this")
                if queued is not None:
                    pbar.set_description(f"{queued} submission(s) ahead in queue")
                pbar.update(1)
                time.sleep(interval)

        raise TimeoutError(f"Submission was not graded within {max_wait}s.")

    def send_feedback(self, answers: list[dict[str, str | int]], answer_url: str) -> bool:
        """Post feedback answers.

        Args:
            answers: ``{"question_id": ..., "answer": ...}`` entries.
            answer_url: Feedback answer endpoint returned with the submission result.

        Returns:
            Whether the server accepted the answers.
        """
        payload = {
            "answers": [{"question_id": a["question_id"], "answer": str(a["answer"])} for a in answers],
        }
        try:
            response = self.session.post(
                answer_url,
                params=self._params(),
                json=payload,
                timeout=self.settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.debug("Sending feedback to %s failed: %s", answer_url, e)
            return False
        return True
