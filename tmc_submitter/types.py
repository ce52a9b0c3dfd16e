"""Type definitions for the capabilities the submission engine consumes."""

from __future__ import annotations

from collections.abc import Callable

from tmc_submitter.models import Course, CourseInfo, Exercise, FeedbackQuestion, SubmissionResult

SubmitExercise = Callable[[Exercise], SubmissionResult | None]
"""Submits one exercise and waits for grading; None signals a transport failure."""

FetchExercises = Callable[[Course], list[Exercise] | None]
"""Fetches the canonical exercise list of a course; None signals a fetch failure."""

SaveCourseInfo = Callable[[CourseInfo], None]

SendFeedback = Callable[[list[FeedbackQuestion], str], bool]
"""Collects answers to the questions and posts them to the answer URL."""

Confirm = Callable[[str, bool], bool]
"""Asks a yes/no question with a default answer."""
