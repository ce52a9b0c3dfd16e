from __future__ import annotations

from pathlib import Path

import pytest
from helpers import DETAILS_URL, EXERCISE_NAMES

from tmc_submitter.configs import Settings
from tmc_submitter.course_info import save_course_info
from tmc_submitter.models import Course, CourseInfo, Exercise


@pytest.fixture
def settings() -> Settings:
    return Settings(username="student", access_token="secret-token", grading_poll_interval_seconds=1)


@pytest.fixture
def course_info() -> CourseInfo:
    return CourseInfo(
        username="student",
        server_address="https://tmc.example.com",
        organization="mooc",
        course=Course(
            id=42,
            name="java-course",
            details_url=DETAILS_URL,
            exercises=[Exercise(id=i, name=name, checksum=f"sum{i}") for i, name in enumerate(EXERCISE_NAMES)],
        ),
        local_completed_exercises=[EXERCISE_NAMES[1]],
    )


@pytest.fixture
def course_dir(tmp_path: Path, course_info: CourseInfo) -> Path:
    """Course directory with a manifest and one directory per exercise."""
    root = tmp_path / "java-course"
    for name in EXERCISE_NAMES:
        exercise_dir = root.joinpath(*name.split("-"))
        (exercise_dir / "src").mkdir(parents=True)
        (exercise_dir / "src" / "Main.java").write_text("class Main {}\n", encoding="utf-8")
    save_course_info(course_info, root / ".tmc.json")
    return root


def exercise_path(course_dir: Path, name: str) -> Path:
    return course_dir.joinpath(*name.split("-"))


@pytest.fixture
def exercise_dirs(course_dir: Path) -> list[Path]:
    return [exercise_path(course_dir, name) for name in EXERCISE_NAMES]
