"""High-level orchestration of the submit command."""

from __future__ import annotations

from collections.abc import Sequence
from functools import partial
from pathlib import Path

import click

from tmc_submitter.configs import Settings
from tmc_submitter.client import TmcClient
from tmc_submitter.course_info import load_course_info, save_course_info
from tmc_submitter.errors import TmcError, UserInputError
from tmc_submitter.feedback import FeedbackHandler, send_feedbacks
from tmc_submitter.migration import api_url_is_outdated, update_course_and_exercises
from tmc_submitter.models import Course, CourseInfo, Exercise
from tmc_submitter.results import ResultPrinter
from tmc_submitter.submission_handler import submit_exercises
from tmc_submitter.synchronizer import update_course_json
from tmc_submitter.types import Confirm, FetchExercises
from tmc_submitter.updater import ExerciseUpdater, check_for_exercise_updates
from tmc_submitter.workdir import WorkDir


def _click_confirm(text: str, default: bool) -> bool:
    return click.confirm(text, default=default)


def _fetch_once(fetch: FetchExercises) -> FetchExercises:
    """Wrap ``fetch`` so the first successful exercise list is reused."""
    latest: list[Exercise] | None = None

    def fetch_latest(course: Course) -> list[Exercise] | None:
        nonlocal latest
        if latest is None:
            latest = fetch(course)
        return latest

    return fetch_latest


def _open_work_dir(exercise_args: Sequence[str], cwd: Path, settings: Settings) -> WorkDir:
    """Resolve the course directory and register the exercise paths.

    Raises:
        UserInputError: If not inside a course, no exercise was given or a path is invalid.
    """
    work_dir = WorkDir(cwd, settings.config_file_name)
    if work_dir.course_directory is None:
        raise UserInputError("Not inside a course directory.")

    for exercise in exercise_args:
        if not work_dir.add_path(exercise):
            raise UserInputError(f"Error: {exercise} is not a valid exercise.")
    return work_dir


def _select_exercises(
    work_dir: WorkDir,
    info: CourseInfo,
    has_args: bool,
    filter_uncompleted: bool,
) -> list[Exercise]:
    """Return the exercises to submit.

    Raises:
        UserInputError: If the selection is ambiguous or empty.
    """
    if filter_uncompleted:
        assert work_dir.course_directory is not None
        work_dir.add_path(work_dir.course_directory)
        exercises = work_dir.get_exercises(info, only_tested=True, exclude_completed=True)
        if not exercises:
            raise UserInputError("No locally tested exercises.")
        return exercises

    exercises = work_dir.get_exercises(info)
    if not has_args and len(exercises) != 1:
        raise UserInputError("Please give exercise to submit as argument")
    if not exercises:
        raise UserInputError("No exercises specified.")
    return exercises


def run_submission(
    exercise_args: Sequence[str],
    show_all: bool = False,
    show_details: bool = False,
    filter_uncompleted: bool = False,
    *,
    settings: Settings,
    cwd: Path | None = None,
    client: TmcClient | None = None,
    confirm: Confirm = _click_confirm,
) -> bool:
    """Submit exercises and bring the course manifest up to date.

    Steps: resolve exercises, migrate an outdated details URL, submit the batch,
    synchronize the manifest, report available updates and collect feedback.

    Args:
        exercise_args: Exercise paths; empty means the current directory.
        show_all: Print passed tests too.
        show_details: Print detailed failure messages.
        filter_uncompleted: Submit only locally tested, not yet completed exercises.
        settings: User settings.
        cwd: Working directory; defaults to the process working directory.
        client: Transport to use; defaults to a TmcClient for the course.
        confirm: Yes/no prompt used for feedback.

    Returns:
        True if the whole batch was submitted.
    """
    if not settings.is_logged_in:
        click.echo("You are not logged in. Log in using: tmc login", err=True)
        return False

    cwd = cwd or Path.cwd()
    try:
        work_dir = _open_work_dir(exercise_args, cwd, settings)
        config_file = work_dir.config_file
        assert config_file is not None and work_dir.course_directory is not None
        info = load_course_info(config_file)
    except TmcError as e:
        click.echo(str(e), err=True)
        return False

    if client is None:
        client = TmcClient(settings, work_dir.course_directory)
    save = partial(save_course_info, path=config_file)

    if api_url_is_outdated(info.course.details_url, settings.api_version):
        update_course_and_exercises(info, client.get_course_exercises, save, settings.api_version)

    try:
        exercises = _select_exercises(work_dir, info, bool(exercise_args), filter_uncompleted)
    except UserInputError as e:
        click.echo(str(e), err=True)
        return False

    printer = ResultPrinter(
        show_details=show_details,
        show_all=show_all,
        left_color=settings.colors.testresults_left,
        right_color=settings.colors.testresults_right,
    )
    outcome = submit_exercises(exercises, client.submit_exercise, printer)
    if outcome.aborted:
        return False

    if len(exercises) > 1:
        printer.print_total_results()

    fetch_latest = _fetch_once(client.get_course_exercises)
    update_course_json(outcome.submitted, info, fetch_latest, save)
    check_for_exercise_updates(ExerciseUpdater(info.course, fetch_latest))
    send_feedbacks(outcome.feedback, confirm, FeedbackHandler(client.send_feedback).send_feedback)
    return True
