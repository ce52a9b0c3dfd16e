from datetime import UTC, datetime
from pathlib import Path

import pytest

from tmc_submitter.course_info import load_course_info, save_course_info
from tmc_submitter.errors import ManifestError
from tmc_submitter.models import CourseInfo


def test_save_and_load_round_trip(tmp_path: Path, course_info: CourseInfo) -> None:
    course_info.course.exercises[0].completed = True
    course_info.course.exercises[0].attempted = True
    course_info.course.exercises[2].deadline = datetime(2024, 6, 1, 23, 59, tzinfo=UTC)
    path = tmp_path / ".tmc.json"

    save_course_info(course_info, path)
    loaded = load_course_info(path)

    assert loaded.course.details_url == course_info.course.details_url
    assert loaded.local_completed_exercises == course_info.local_completed_exercises
    assert [
        (e.name, e.completed, e.attempted, e.deadline) for e in loaded.course.exercises
    ] == [(e.name, e.completed, e.attempted, e.deadline) for e in course_info.course.exercises]
    assert loaded == course_info


def test_save_leaves_no_temporary_file(tmp_path: Path, course_info: CourseInfo) -> None:
    save_course_info(course_info, tmp_path / ".tmc.json")
    assert [p.name for p in tmp_path.iterdir()] == [".tmc.json"]


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Could not read"):
        load_course_info(tmp_path / ".tmc.json")


def test_load_invalid_file_raises(tmp_path: Path) -> None:
    path = tmp_path / ".tmc.json"
    path.write_text('{"course": {"exercises": []}}', encoding="utf-8")
    with pytest.raises(ManifestError, match="invalid"):
        load_course_info(path)


def test_failed_save_removes_temporary_file(tmp_path: Path, course_info: CourseInfo) -> None:
    path = tmp_path / ".tmc.json"
    path.mkdir()

    with pytest.raises(OSError):
        save_course_info(course_info, path)

    assert not (tmp_path / ".tmc.json.tmp").exists()
    assert path.is_dir()
