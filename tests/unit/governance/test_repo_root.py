"""Tests for governance/repo_root.py."""

from __future__ import annotations

from pathlib import Path

from bddgov.governance.repo_root import is_repo_root, resolve_repo_root


def _make_root(path: Path, marker: str = "pnpm-workspace.yaml") -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / marker).write_text("packages: []\n", encoding="utf-8")
    (path / "apps").mkdir(exist_ok=True)
    return path


def test_start_at_root(tmp_path: Path) -> None:
    root = _make_root(tmp_path / "repo")
    assert resolve_repo_root(root) == root


def test_walks_up_from_nested_dir(tmp_path: Path) -> None:
    root = _make_root(tmp_path / "repo")
    nested = root / "apps" / "backend" / "src" / "utils"
    nested.mkdir(parents=True)
    assert resolve_repo_root(nested) == root


def test_needs_both_markers(tmp_path: Path) -> None:
    only_marker = tmp_path / "a"
    only_marker.mkdir()
    (only_marker / "pnpm-workspace.yaml").write_text("", encoding="utf-8")
    assert not is_repo_root(only_marker, "pnpm-workspace.yaml", "apps")

    only_apps = tmp_path / "b"
    (only_apps / "apps").mkdir(parents=True)
    assert not is_repo_root(only_apps, "pnpm-workspace.yaml", "apps")


def test_falls_back_to_start_dir(tmp_path: Path) -> None:
    start = tmp_path / "somewhere" / "else"
    start.mkdir(parents=True)
    assert resolve_repo_root(start) == start


def test_nearest_root_wins(tmp_path: Path) -> None:
    _make_root(tmp_path / "outer")
    inner = _make_root(tmp_path / "outer" / "apps" / "inner")
    assert resolve_repo_root(inner / "apps") == inner


def test_hop_limit_bounds_search(tmp_path: Path) -> None:
    root = _make_root(tmp_path / "repo")
    deep = root / "a" / "b" / "c" / "d"
    deep.mkdir(parents=True)
    # d, c, b checked; root is the 5th candidate.
    assert resolve_repo_root(deep, max_hops=3) == deep
    assert resolve_repo_root(deep, max_hops=5) == root


def test_custom_marker(tmp_path: Path) -> None:
    root = _make_root(tmp_path / "repo", marker="turbo.json")
    assert resolve_repo_root(root / "apps") == root / "apps"
    assert resolve_repo_root(root / "apps", workspace_marker="turbo.json") == root


def test_relative_start_dir(tmp_path: Path, monkeypatch) -> None:
    root = _make_root(tmp_path / "repo")
    monkeypatch.chdir(root / "apps")
    assert resolve_repo_root(Path(".")) == root
