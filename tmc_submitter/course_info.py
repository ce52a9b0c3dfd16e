"""Reading and writing the course manifest file."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from tmc_submitter.errors import ManifestError
from tmc_submitter.models import CourseInfo

logger = logging.getLogger(__name__)


def load_course_info(path: Path) -> CourseInfo:
    """Load a course manifest from JSON.

    Args:
        path: Path to the manifest file.

    Returns:
        Parsed CourseInfo.

    Raises:
        ManifestError: If the file is missing, unreadable or malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Could not read course config file {path}: {e}") from e

    try:
        return CourseInfo.model_validate_json(text)
    except ValidationError as e:
        raise ManifestError(f"Course config file {path} is invalid: {e}") from e


def save_course_info(info: CourseInfo, path: Path) -> None:
    """Write a course manifest as JSON, replacing the previous file atomically.

    Args:
        info: Manifest to write.
        path: Destination path.

    Raises:
        OSError: If the manifest cannot be written.
    """
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(info.model_dump_json(indent=2), encoding="utf-8")
        tmp_path.replace(path)
    except OSError:
        if tmp_path.is_file():
            tmp_path.unlink()
        raise
    logger.debug("Saved course config for %s to %s", info.course_name, path)
