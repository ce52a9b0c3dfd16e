"""Detecting new and changed exercises on the server."""

from __future__ import annotations

import click

from tmc_submitter.models import Course, Exercise
from tmc_submitter.types import FetchExercises


class ExerciseUpdater:
    """Compares a local course against the server's exercise list.

    Args:
        course: Local course.
        fetch: Fetches the server's exercise list, None on failure.
    """

    def __init__(self, course: Course, fetch: FetchExercises) -> None:
        self.course = course
        self.fetch = fetch
        self.new_exercises: list[Exercise] = []
        self.updated_exercises: list[Exercise] = []
        self._checked = False

    def check(self) -> None:
        """Fetch the server's exercises once and compute new and updated ones.

        A failed fetch leaves both lists empty.
        """
        if self._checked:
            return
        self._checked = True

        server_exercises = self.fetch(self.course)
        if server_exercises is None:
            return

        for server_exercise in server_exercises:
            local = self.course.get_exercise(server_exercise.name)
            if local is None:
                if not server_exercise.locked:
                    self.new_exercises.append(server_exercise)
            elif server_exercise.checksum and local.checksum != server_exercise.checksum:
                self.updated_exercises.append(server_exercise)

    def new_exercises_available(self) -> bool:
        self.check()
        return bool(self.new_exercises)

    def updated_exercises_available(self) -> bool:
        self.check()
        return bool(self.updated_exercises)

    def updates_available(self) -> bool:
        return self.new_exercises_available() or self.updated_exercises_available()


def build_update_message(new_count: int, updated_count: int) -> str | None:
    """Compose the update notice for the given counts.

    Returns:
        The message, or None when there is nothing to report.
    """
    total = 0
    lines: list[str] = []
    if new_count > 0:
        plural = "s" if new_count > 1 else ""
        lines.append(f"{new_count} new exercise{plural} available!")
        total += new_count
    if updated_count > 0:
        plural = "s have" if updated_count > 1 else " has"
        lines.append(f"{updated_count} exercise{plural} been changed on TMC server.")
        total += updated_count
    if total == 0:
        return None
    lines.append("Use 'tmc update' to download " + ("them." if total > 1 else "it."))
    return "\n".join(lines)


def check_for_exercise_updates(updater: ExerciseUpdater) -> None:
    """Print a notice if the server has new or changed exercises."""
    if not updater.updates_available():
        return
    message = build_update_message(len(updater.new_exercises), len(updater.updated_exercises))
    if message is None:
        return
    click.echo()
    click.secho(message, fg="yellow")
