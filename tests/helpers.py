"""Shared test doubles and result builders."""

from __future__ import annotations

from tmc_submitter.models import Course, Exercise, FeedbackQuestion, SubmissionResult

DETAILS_URL = "https://tmc.example.com/api/v8/core/courses/42"
EXERCISE_NAMES = ["part01-Part01_01.Hello", "part01-Part01_02.Sum", "part01-Part01_03.Loop"]


class FakeClient:
    """In-memory stand-in for TmcClient."""

    def __init__(
        self,
        results: dict[str, SubmissionResult | None] | None = None,
        server_exercises: list[Exercise] | None = None,
        feedback_ok: bool = True,
    ) -> None:
        self.results = dict(results or {})
        self.server_exercises = server_exercises
        self.feedback_ok = feedback_ok
        self.submitted: list[str] = []
        self.fetched_urls: list[str] = []
        self.feedback_posts: list[tuple[list[dict[str, str | int]], str]] = []

    def submit_exercise(self, exercise: Exercise) -> SubmissionResult | None:
        self.submitted.append(exercise.name)
        return self.results.get(exercise.name)

    def get_course_exercises(self, course: Course) -> list[Exercise] | None:
        self.fetched_urls.append(course.details_url)
        if self.server_exercises is None:
            return None
        return [exercise.model_copy(deep=True) for exercise in self.server_exercises]

    def send_feedback(self, answers: list[dict[str, str | int]], answer_url: str) -> bool:
        self.feedback_posts.append((answers, answer_url))
        return self.feedback_ok


def ok_result(**kwargs: object) -> SubmissionResult:
    return SubmissionResult.model_validate(
        {
            "status": "ok",
            "points": ["1.1"],
            "test_cases": [{"name": "HelloTest test", "successful": True}],
            **kwargs,
        }
    )


def fail_result(**kwargs: object) -> SubmissionResult:
    return SubmissionResult.model_validate(
        {
            "status": "fail",
            "test_cases": [
                {"name": "SumTest positive", "successful": True},
                {"name": "SumTest negative", "successful": False, "message": "expected -1 but was 1"},
            ],
            **kwargs,
        }
    )


def feedback_questions() -> list[FeedbackQuestion]:
    return [
        FeedbackQuestion(id=1, question="How hard was it?", kind="intrange[1..5]"),
        FeedbackQuestion(id=2, question="Comments", kind="text"),
    ]


def server_copy(exercise: Exercise, **changes: object) -> Exercise:
    """Return the server's view of a local exercise with the given attribute changes."""
    return exercise.model_copy(update=changes, deep=True)
