import pytest
from helpers import FakeClient, server_copy

from tmc_submitter.models import Course, CourseInfo, Exercise
from tmc_submitter.synchronizer import update_course_json


def _info() -> CourseInfo:
    return CourseInfo(
        course=Course(
            name="c",
            details_url="https://tmc.example.com/api/v8/core/courses/1",
            exercises=[Exercise(name="A", completed=False), Exercise(name="B", completed=True)],
        ),
        local_completed_exercises=["A", "B"],
    )


def test_server_record_replaces_submitted_exercise() -> None:
    info = _info()
    a, b = info.course.exercises
    client = FakeClient(server_exercises=[server_copy(a, completed=True, attempted=True, checksum="new")])
    saved: list[CourseInfo] = []

    assert update_course_json([a], info, client.get_course_exercises, saved.append) is True

    updated_a = info.course.get_exercise("A")
    assert updated_a is not None
    assert updated_a.completed is True
    assert updated_a.checksum == "new"
    assert info.course.get_exercise("B") is b
    assert [e.name for e in info.course.exercises] == ["A", "B"]
    assert info.local_completed_exercises == ["B"]
    assert saved == [info]


def test_uncompleted_server_exercise_keeps_local_completed_entry() -> None:
    info = _info()
    a = info.course.exercises[0]
    client = FakeClient(server_exercises=[server_copy(a, attempted=True)])

    update_course_json([a], info, client.get_course_exercises, lambda _: None)

    assert info.local_completed_exercises == ["A", "B"]
    updated_a = info.course.get_exercise("A")
    assert updated_a is not None and updated_a.attempted is True


def test_exercise_missing_on_server_is_kept(capsys: pytest.CaptureFixture[str]) -> None:
    info = _info()
    a, b = info.course.exercises
    client = FakeClient(server_exercises=[server_copy(b, completed=True)])
    saved: list[CourseInfo] = []

    assert update_course_json([a, b], info, client.get_course_exercises, saved.append) is True

    assert info.course.get_exercise("A") is a
    assert info.local_completed_exercises == ["A"]
    assert len(saved) == 1
    assert "Failed to update config file for exercise A. The exercise doesn't exist" in capsys.readouterr().out


def test_fetch_failure_writes_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    info = _info()
    before = info.model_copy(deep=True)
    saved: list[CourseInfo] = []

    assert update_course_json(info.course.exercises[:1], info, FakeClient().get_course_exercises, saved.append) is False

    assert saved == []
    assert info == before
    assert "Failed to update config file for course c" in capsys.readouterr().out


def _failing_save(info: CourseInfo) -> None:
    raise PermissionError("read-only file system")


def test_save_failure_is_reported(capsys: pytest.CaptureFixture[str]) -> None:
    info = _info()
    a = info.course.exercises[0]
    client = FakeClient(server_exercises=[server_copy(a, completed=True)])

    assert update_course_json([a], info, client.get_course_exercises, _failing_save) is False

    assert "Failed to update config file for course c" in capsys.readouterr().err
