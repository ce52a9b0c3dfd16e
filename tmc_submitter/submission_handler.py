"""Submitting a batch of exercises one by one."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

import click

from tmc_submitter.errors import UnknownStatusError
from tmc_submitter.feedback import PendingFeedback
from tmc_submitter.models import Exercise, has_deadline_passed
from tmc_submitter.results import ResultPrinter, SubmissionStatus, classify_result
from tmc_submitter.types import SubmitExercise

logger = logging.getLogger(__name__)


@dataclass
class BatchOutcome:
    """Outcome of a submission batch.

    Attributes:
        aborted: Whether the batch stopped before every exercise was submitted.
        submitted: Exercises that received a graded result, in order.
        feedback: Feedback requests collected from the results.
    """

    aborted: bool = False
    submitted: list[Exercise] = field(default_factory=list)
    feedback: list[PendingFeedback] = field(default_factory=list)


def _report_failure(message: str, is_only: bool) -> None:
    click.echo(message, err=True)
    if not is_only:
        click.echo("Try to submit exercises one by one.", err=True)


def submit_exercises(
    exercises: list[Exercise],
    submit: SubmitExercise,
    printer: ResultPrinter,
    now: datetime | None = None,
) -> BatchOutcome:
    """Submit exercises sequentially, stopping at the first blocking problem.

    A passed deadline or a failed submission aborts the rest of the batch.
    Exercises graded before the abort keep their updated flags.

    Args:
        exercises: Exercises to submit, in order.
        submit: Submits one exercise, None on transport failure.
        printer: Prints each result and keeps batch totals.
        now: Reference time for deadline checks; defaults to the time of each check.

    Returns:
        BatchOutcome with the graded exercises and collected feedback requests.
    """
    outcome = BatchOutcome()
    is_only = len(exercises) == 1

    for exercise in exercises:
        click.secho(f"Submitting: {exercise.name}", fg="yellow")

        if has_deadline_passed(exercise, now):
            logger.warning("Tried to submit exercise %s after deadline.", exercise.name)
            click.echo(f"Deadline has passed for this exercise at {exercise.deadline}", err=True)
            outcome.aborted = True
            return outcome

        result = submit(exercise)
        if result is None:
            _report_failure("Submission failed.", is_only)
            outcome.aborted = True
            return outcome

        try:
            classified = classify_result(result)
        except UnknownStatusError as e:
            logger.error("Could not classify result of %s: %s", exercise.name, e)
            _report_failure(f"Submission failed: {e}", is_only)
            outcome.aborted = True
            return outcome

        printer.print_submission_result(result, classified.status, is_only)

        exercise.attempted = True
        if classified.status is SubmissionStatus.OK:
            exercise.completed = True
        outcome.submitted.append(exercise)

        if classified.has_feedback:
            assert classified.feedback_answer_url is not None
            outcome.feedback.append(
                PendingFeedback(
                    exercise_name=exercise.name,
                    questions=classified.feedback_questions,
                    answer_url=classified.feedback_answer_url,
                )
            )
        click.echo()

    return outcome
