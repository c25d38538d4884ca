"""Report writer: --out path guard + atomic write.

Responsibilities:
  1. Validate the output path: confine it to CWD (or an explicitly allowed
     directory). Path traversal (../../etc/passwd) → hard fail. Absolute
     paths are accepted only when they land inside the allowed directory.
  2. Write the report atomically (temp file → rename).
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


# ------------------------------------------------------------------
# Path validation (path traversal prevention)
# ------------------------------------------------------------------


def validate_output_path(output: str, allowed_base: Path | None = None) -> Path:
    """Normalize and validate the output path.

    Args:
        output: The raw output path string from the user.
        allowed_base: Directory the report must stay inside. Defaults to CWD.

    Returns:
        Resolved absolute Path.

    Raises:
        ValueError: If the path escapes the allowed base directory or names
            the base directory itself.
    """
    if not output.strip():
        raise ValueError("Output path must not be empty.")

    if allowed_base is None:
        allowed_base = Path.cwd()

    allowed_base = allowed_base.resolve()
    resolved = (allowed_base / Path(output)).resolve()

    try:
        rel = resolved.relative_to(allowed_base)
    except ValueError:
        raise ValueError(
            f"Output path '{output}' resolves outside the allowed directory "
            f"('{allowed_base}'). Path traversal is not permitted."
        ) from None

    if rel == Path("."):
        raise ValueError(f"Output path '{output}' is a directory, not a file.")

    return resolved


# ------------------------------------------------------------------
# Atomic write
# ------------------------------------------------------------------


def write_output(path: Path, content: str) -> None:
    """Write *content* to *path* atomically (temp → rename).

    Creates parent directories if needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    dir_ = path.parent
    fd, tmp_path = tempfile.mkstemp(dir=dir_, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
