"""Domain models for courses, exercises and submission results."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class Exercise(BaseModel):
    """A single gradable exercise of a course.

    Attributes:
        id: Server-side exercise ID.
        name: Exercise name, unique within its course.
        deadline: Optional submission deadline.
        checksum: Server checksum of the exercise template.
        return_url: Endpoint that accepts submissions.
        zip_url: Endpoint serving the exercise template.
        completed: Whether the server has accepted a passing submission.
        attempted: Whether the exercise has been submitted at least once.
        locked: Whether the exercise is not yet available.
        locally_tested: Runtime-only flag; tests passed locally but not yet on server.
    """

    id: int | None = None
    name: str
    deadline: datetime | None = None
    checksum: str | None = None
    return_url: str | None = None
    zip_url: str | None = None
    completed: bool = False
    attempted: bool = False
    locked: bool = False
    locally_tested: bool = Field(default=False, exclude=True)


class Course(BaseModel):
    """A named collection of exercises plus its details endpoint."""

    id: int | None = None
    name: str
    title: str | None = None
    details_url: str = ""
    exercises: list[Exercise] = Field(default_factory=list)

    def get_exercise(self, name: str) -> Exercise | None:
        for exercise in self.exercises:
            if exercise.name == name:
                return exercise
        return None

    def replace_exercise(self, exercise: Exercise) -> None:
        """Replace the exercise with the same name, or append it if unknown."""
        for i, old in enumerate(self.exercises):
            if old.name == exercise.name:
                self.exercises[i] = exercise
                return
        self.exercises.append(exercise)

    def set_exercises(self, exercises: list[Exercise]) -> None:
        self.exercises = list(exercises)


class CourseInfo(BaseModel):
    """Locally persisted manifest of a course (the ``.tmc.json`` file).

    Attributes:
        username: User the course was downloaded for.
        server_address: Server the course belongs to.
        organization: Organization slug of the course.
        course: The course and its exercises.
        local_completed_exercises: Names of exercises whose tests passed locally.
    """

    username: str | None = None
    server_address: str | None = None
    organization: str | None = None
    course: Course
    local_completed_exercises: list[str] = Field(default_factory=list)

    @property
    def course_name(self) -> str:
        return self.course.name

    def replace_old_exercise(self, exercise: Exercise) -> None:
        self.course.replace_exercise(exercise)

    def remove_local_completed(self, name: str) -> None:
        if name in self.local_completed_exercises:
            self.local_completed_exercises.remove(name)


class FeedbackQuestion(BaseModel):
    """Post-submission survey question returned by the grading service."""

    model_config = ConfigDict(frozen=True)

    id: int
    question: str
    kind: str = "text"


class TestCaseResult(BaseModel):
    """Result of one server-side test."""

    name: str
    successful: bool
    message: str | None = None
    exception: list[str] | None = None
    detailed_message: str | None = None


class SubmissionResult(BaseModel):
    """Raw grading outcome of one submission as reported by the server."""

    status: str
    points: list[str] = Field(default_factory=list)
    missing_review_points: list[str] = Field(default_factory=list)
    test_cases: list[TestCaseResult] = Field(default_factory=list)
    validations: dict | None = None
    error: str | None = None
    solution_url: str | None = None
    feedback_questions: list[FeedbackQuestion] | None = None
    feedback_answer_url: str | None = None


def has_deadline_passed(exercise: Exercise, now: datetime | None = None) -> bool:
    """Return whether the exercise's deadline is in the past.

    Args:
        exercise: Exercise to check.
        now: Reference time; defaults to the current UTC time.

    Returns:
        False for exercises without a deadline. Naive timestamps are read as UTC.
    """
    if exercise.deadline is None:
        return False
    if now is None:
        now = datetime.now(UTC)
    deadline = exercise.deadline
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return deadline < now
