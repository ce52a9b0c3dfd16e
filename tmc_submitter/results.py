"""Classifying and printing submission results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import click

from tmc_submitter.errors import UnknownStatusError
from tmc_submitter.models import FeedbackQuestion, SubmissionResult, TestCaseResult


class SubmissionStatus(Enum):
    """Final grading status of a submission."""

    OK = "ok"
    FAIL = "fail"
    ERROR = "error"


@dataclass(frozen=True)
class ClassifiedResult:
    """A submission result reduced to its status and feedback request."""

    status: SubmissionStatus
    feedback_questions: list[FeedbackQuestion] = field(default_factory=list)
    feedback_answer_url: str | None = None

    @property
    def has_feedback(self) -> bool:
        return bool(self.feedback_questions) and self.feedback_answer_url is not None


def classify_result(result: SubmissionResult) -> ClassifiedResult:
    """Map a raw submission result to a closed status and extract feedback.

    Args:
        result: Result reported by the server.

    Returns:
        ClassifiedResult. Missing or empty feedback lists mean no feedback.

    Raises:
        UnknownStatusError: If the status is not one of ok, fail or error.
    """
    try:
        status = SubmissionStatus(result.status.lower())
    except ValueError as e:
        raise UnknownStatusError(result.status) from e

    questions = list(result.feedback_questions or [])
    if not questions or not result.feedback_answer_url:
        return ClassifiedResult(status=status)
    return ClassifiedResult(
        status=status,
        feedback_questions=questions,
        feedback_answer_url=result.feedback_answer_url,
    )


class ResultPrinter:
    """Prints submission results and keeps totals over a batch.

    Args:
        show_details: Print exceptions and detailed messages of failed tests.
        show_all: Print passed tests as well.
        left_color: Color for passing results.
        right_color: Color for failing results.
    """

    def __init__(
        self,
        show_details: bool = False,
        show_all: bool = False,
        left_color: str = "green",
        right_color: str = "red",
    ) -> None:
        self.show_details = show_details
        self.show_all = show_all
        self.left_color = left_color
        self.right_color = right_color
        self.passed_exercises = 0
        self.total_exercises = 0
        self.passed_tests = 0
        self.total_tests = 0

    def print_submission_result(self, result: SubmissionResult, status: SubmissionStatus, is_only: bool) -> None:
        """Print one classified submission result.

        Args:
            result: Raw result carrying test cases and points.
            status: Classified status.
            is_only: Whether this is the only exercise of the batch.
        """
        self.total_exercises += 1
        passed = sum(1 for case in result.test_cases if case.successful)
        self.passed_tests += passed
        self.total_tests += len(result.test_cases)

        if status is SubmissionStatus.ERROR:
            click.secho("Submission could not be graded:", fg=self.right_color, err=True)
            click.echo(result.error or "Unknown error", err=True)
            return

        for case in result.test_cases:
            self._print_test_case(case)
        self._print_validations(result)

        if status is SubmissionStatus.OK:
            self.passed_exercises += 1
            click.secho("All tests passed on server!", fg=self.left_color)
            if result.points:
                click.echo(f"Points permanently awarded: {', '.join(result.points)}")
            if result.missing_review_points:
                click.echo(f"Points waiting for code review: {', '.join(result.missing_review_points)}")
            if result.solution_url:
                click.echo(f"Model solution: {result.solution_url}")
            return

        click.secho(
            f"{passed}/{len(result.test_cases)} tests passed on server",
            fg=self.right_color,
        )
        if not is_only and not self.show_details:
            click.echo("Use --details to see the failure messages of all tests.")

    def _print_test_case(self, case: TestCaseResult) -> None:
        if case.successful:
            if self.show_all:
                click.echo(click.style("PASSED: ", fg=self.left_color) + case.name)
            return

        click.echo(click.style("FAILED: ", fg=self.right_color) + case.name)
        if case.message:
            click.echo(f"        {case.message}")
        if self.show_details:
            if case.detailed_message:
                click.echo(f"        {case.detailed_message}")
            for line in case.exception or []:
                click.echo(f"        {line}")

    def _print_validations(self, result: SubmissionResult) -> None:
        validation_errors = (result.validations or {}).get("validationErrors") or {}
        count = sum(len(errors) for errors in validation_errors.values())
        if count:
            click.secho(f"Code style check failed: {count} error(s)", fg=self.right_color)

    def print_total_results(self) -> None:
        """Print the aggregate summary of a multi-exercise batch."""
        click.echo()
        click.echo(f"Exercises passed: {self.passed_exercises}/{self.total_exercises}")
        color = self.left_color if self.passed_tests == self.total_tests else self.right_color
        click.secho(f"Total tests passed: {self.passed_tests}/{self.total_tests}", fg=color)
