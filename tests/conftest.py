"""Shared pytest fixtures."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


class Monorepo:
    """Builds a throwaway pnpm-style monorepo under tmp_path."""

    def __init__(self, root: Path) -> None:
        self.root = root
        (root / "pnpm-workspace.yaml").write_text("packages:\n  - apps/*\n", encoding="utf-8")
        (root / "apps").mkdir()

    def app(self, name: str, *, features: bool = True) -> Path:
        app_dir = self.root / "apps" / name
        app_dir.mkdir(parents=True, exist_ok=True)
        if features:
            (app_dir / "features").mkdir(exist_ok=True)
        return app_dir

    def feature(self, app: str, rel_path: str, content: str) -> Path:
        """Write apps/<app>/features/<rel_path>; *content* is dedented."""
        path = self.root / "apps" / app / "features" / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path


@pytest.fixture
def monorepo(tmp_path: Path) -> Monorepo:
    """Empty monorepo (marker + apps/) rooted at tmp_path / 'repo'."""
    root = tmp_path / "repo"
    root.mkdir()
    return Monorepo(root)
