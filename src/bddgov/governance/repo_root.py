"""Monorepo root resolution.

Walks upward from a start directory until a directory holds both the
workspace marker file and the apps/ directory. Falls back to the start
directory when no such ancestor exists, so the engine still runs outside
a monorepo.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_WORKSPACE_MARKER = "pnpm-workspace.yaml"
DEFAULT_APPS_DIR = "apps"
DEFAULT_MAX_HOPS = 20


def is_repo_root(candidate: Path, workspace_marker: str, apps_dir_name: str) -> bool:
    return (candidate / workspace_marker).exists() and (candidate / apps_dir_name).exists()


def resolve_repo_root(
    start_dir: Path,
    *,
    workspace_marker: str = DEFAULT_WORKSPACE_MARKER,
    apps_dir_name: str = DEFAULT_APPS_DIR,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> Path:
    """Return the nearest ancestor of *start_dir* that looks like the repo root.

    Args:
        start_dir: Directory to start from (made absolute, ``..`` collapsed).
        workspace_marker: File name that marks the workspace root.
        apps_dir_name: Directory name that must sit next to the marker.
        max_hops: Upper bound on candidates checked (symlink loops, odd mounts).

    Returns:
        The root, or the resolved *start_dir* when none is found.
    """
    start = Path(os.path.abspath(start_dir))
    current = start
    for _ in range(max_hops):
        if is_repo_root(current, workspace_marker, apps_dir_name):
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent
    return start
