"""Resolving exercises from paths inside a course directory."""

from __future__ import annotations

from pathlib import Path

from tmc_submitter.models import CourseInfo, Exercise


def find_course_directory(start: Path, config_file_name: str) -> Path | None:
    """Walk up from ``start`` to the directory holding the course config file.

    Args:
        start: Directory to start searching from.
        config_file_name: Name of the course manifest file.

    Returns:
        The course directory, or None if ``start`` is not inside a course.
    """
    start = start.resolve()
    for directory in (start, *start.parents):
        if (directory / config_file_name).is_file():
            return directory
    return None


def exercise_directory(course_dir: Path, exercise: Exercise) -> Path:
    """Return the local directory of an exercise.

    Dashes in exercise names separate directory levels, e.g.
    ``part01-Part01_01.Sandbox`` lives in ``part01/Part01_01.Sandbox``.
    """
    return course_dir.joinpath(*exercise.name.split("-"))


def _is_relative_to_either(a: Path, b: Path) -> bool:
    return a.is_relative_to(b) or b.is_relative_to(a)


class WorkDir:
    """Tracks the paths a command targets and maps them to course exercises.

    Args:
        cwd: Current working directory.
        config_file_name: Name of the course manifest file.
    """

    def __init__(self, cwd: Path, config_file_name: str) -> None:
        self.cwd = cwd.resolve()
        self.config_file_name = config_file_name
        self.course_directory = find_course_directory(self.cwd, config_file_name)
        self._paths: list[Path] = []

    @property
    def config_file(self) -> Path | None:
        if self.course_directory is None:
            return None
        return self.course_directory / self.config_file_name

    @property
    def paths(self) -> list[Path]:
        """Explicitly added paths, or the working directory when none were added."""
        return list(self._paths) if self._paths else [self.cwd]

    def add_path(self, path: str | Path) -> bool:
        """Add a target path.

        Args:
            path: Absolute path or path relative to the working directory.

        Returns:
            False if the path does not exist or lies outside the course directory.
        """
        if self.course_directory is None:
            return False
        target = (self.cwd / path).resolve()
        if not target.exists() or not target.is_relative_to(self.course_directory):
            return False
        self._paths.append(target)
        return True

    def get_exercises(
        self,
        info: CourseInfo,
        only_tested: bool = False,
        exclude_completed: bool = False,
    ) -> list[Exercise]:
        """Return course exercises that exist locally and match the target paths.

        Args:
            info: Course manifest.
            only_tested: Keep only exercises whose tests passed locally.
            exclude_completed: Drop exercises the server already marked completed.

        Returns:
            Matching exercises in course order.
        """
        if self.course_directory is None:
            return []

        local_completed = set(info.local_completed_exercises)
        exercises: list[Exercise] = []
        for exercise in info.course.exercises:
            directory = exercise_directory(self.course_directory, exercise)
            if not directory.is_dir():
                continue
            if not any(_is_relative_to_either(directory, path) for path in self.paths):
                continue
            exercise.locally_tested = exercise.name in local_completed
            if only_tested and not exercise.locally_tested:
                continue
            if exclude_completed and exercise.completed:
                continue
            exercises.append(exercise)
        return exercises
