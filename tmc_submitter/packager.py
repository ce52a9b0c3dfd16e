"""ZIP packaging of exercise directories for submission."""

import io
import zipfile
from pathlib import Path

IGNORED_DIRECTORIES = {".git", ".idea", "__pycache__", "node_modules", "target", "build", ".gradle"}


def compress_exercise(exercise_dir: Path) -> bytes:
    """
    Compress an exercise directory into an in-memory ZIP archive.

    Entries are rooted at the exercise directory's name, e.g. ``Sandbox/src/Main.java``.

    Args:
        exercise_dir: Directory of the exercise

    Returns:
        ZIP archive contents

    Raises:
        ValueError: If the directory doesn't exist
        OSError: For file system errors
    """
    exercise_dir = Path(exercise_dir)

    if not exercise_dir.is_dir():
        raise ValueError(f"Exercise directory not found: {exercise_dir}")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zip_ref:
        for path in sorted(exercise_dir.rglob("*")):
            relative = path.relative_to(exercise_dir)
            # Skip build output and VCS metadata anywhere in the tree
            if any(part in IGNORED_DIRECTORIES for part in relative.parts):
                continue
            if path.is_file():
                zip_ref.write(path, Path(exercise_dir.name) / relative)

    return buffer.getvalue()
