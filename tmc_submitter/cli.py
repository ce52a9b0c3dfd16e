"""Command-line interface for the exercise submitter."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from tmc_submitter.configs import load_settings
from tmc_submitter.workflow import run_submission


@click.command()
@click.argument("exercises", nargs=-1)
@click.option("-a", "--all", "show_all", is_flag=True, help="Show all test results")
@click.option("-d", "--details", "show_details", is_flag=True, help="Show detailed error message")
@click.option(
    "-c",
    "--completed",
    "filter_uncompleted",
    is_flag=True,
    help="Filter out exercises that haven't been locally tested",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the settings YAML file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(
    exercises: tuple[str, ...],
    show_all: bool,
    show_details: bool,
    filter_uncompleted: bool,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Submit exercises to the grading server.

    EXERCISES are exercise directories; without any, the current directory is used.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(config_path)
    except (yaml.YAMLError, ValidationError) as e:
        click.echo(f"Error: invalid settings file: {e}", err=True)
        sys.exit(1)

    ok = run_submission(
        list(exercises),
        show_all=show_all,
        show_details=show_details,
        filter_uncompleted=filter_uncompleted,
        settings=settings,
    )
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
