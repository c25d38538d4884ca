"""Read-path guard for discovered feature files.

Every path is checked before it is opened:
  - it must resolve strictly inside the base directory
    (traversal like '../../etc/passwd' → hard fail)
  - it must carry the feature file extension.
"""

from __future__ import annotations

import os
from pathlib import Path

from bddgov.governance.discovery import DEFAULT_EXTENSION


class PathSafetyError(ValueError):
    """Raised when a read path escapes its base directory or has the wrong extension."""


def resolve_read_path(
    base_dir: Path | str,
    file_path: Path | str,
    *,
    extension: str = DEFAULT_EXTENSION,
) -> Path:
    """Validate *file_path* against *base_dir* and return it resolved.

    Both paths are made absolute and normalised lexically: ``..`` segments
    collapse, symlinks are left as they are. Relative values are taken
    against the working directory.

    Raises:
        PathSafetyError: if the path is outside *base_dir* (or is *base_dir*
            itself), or does not end with *extension*.
    """
    base = Path(os.path.abspath(base_dir))
    resolved = Path(os.path.abspath(file_path))

    try:
        rel = resolved.relative_to(base)
    except ValueError:
        raise PathSafetyError(
            f"Invalid feature file path (must be within {base}): {file_path}"
        ) from None

    if rel == Path("."):
        raise PathSafetyError(
            f"Invalid feature file path (must be within {base}): {file_path}"
        )

    if not resolved.name.endswith(extension):
        raise PathSafetyError(
            f"Invalid feature file extension (expected {extension}): {file_path}"
        )

    return resolved


def read_feature_text(path: Path) -> str:
    """Read a validated feature file as UTF-8.

    Raises:
        OSError: if the file cannot be read.
        UnicodeDecodeError: if the file is not valid UTF-8.
    """
    return path.read_text(encoding="utf-8")
