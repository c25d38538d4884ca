"""Feature file discovery.

Best-effort: a directory that cannot be listed contributes nothing and
never raises. Traversal uses an explicit stack rather than recursion.

Symlinks are never followed, to directories or to files, so a link back
to an ancestor cannot loop the walk and no file is reported twice.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_EXTENSION = ".feature"

# Dependency caches, build output, coverage output, framework caches.
DEFAULT_SKIP_DIRS: frozenset[str] = frozenset(
    ["node_modules", "dist", "build", ".turbo", ".next", "coverage"]
)


def _scan_dir_safe(directory: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError:
        return []


def should_skip_dir(path: Path | str, skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS) -> bool:
    return os.path.basename(os.fspath(path)) in skip_dirs


def find_feature_files(
    directory: Path,
    *,
    extension: str = DEFAULT_EXTENSION,
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS,
) -> list[Path]:
    """Return absolute paths of every *extension* file under *directory*.

    Order is traversal order, which is not stable across platforms; callers
    sort where order matters.
    """
    results: list[Path] = []
    root = Path(directory).absolute()
    if not root.is_dir():
        return results

    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        for entry in _scan_dir_safe(current):
            full_path = current / entry.name
            try:
                if entry.is_dir(follow_symlinks=False):
                    if not should_skip_dir(full_path, skip_dirs):
                        stack.append(full_path)
                    continue
                if entry.is_file(follow_symlinks=False) and entry.name.endswith(extension):
                    results.append(full_path)
            except OSError:
                continue

    return results


def list_app_names(apps_dir: Path) -> list[str]:
    """Sorted names of the directories directly under *apps_dir*, symlinks excluded."""
    names = []
    for entry in _scan_dir_safe(Path(apps_dir)):
        try:
            if entry.is_dir(follow_symlinks=False):
                names.append(entry.name)
        except OSError:
            continue
    return sorted(names)
