"""Tests for governance/safety.py — read-path guard."""

from __future__ import annotations

from pathlib import Path

import pytest

from bddgov.governance.safety import PathSafetyError, read_feature_text, resolve_read_path


def test_path_inside_base_accepted(tmp_path: Path) -> None:
    target = tmp_path / "auth" / "login.feature"
    assert resolve_read_path(tmp_path, target) == target


def test_dotdot_segments_normalised_inside_base(tmp_path: Path) -> None:
    target = tmp_path / "auth" / ".." / "login.feature"
    assert resolve_read_path(tmp_path, target) == tmp_path / "login.feature"


def test_traversal_rejected(tmp_path: Path) -> None:
    base = tmp_path / "apps" / "web" / "features"
    with pytest.raises(PathSafetyError, match="must be within"):
        resolve_read_path(base, base / ".." / ".." / ".." / "etc" / "passwd.feature")


def test_traversal_rejected_before_read(tmp_path: Path) -> None:
    base = tmp_path / "features"
    base.mkdir()
    with pytest.raises(PathSafetyError) as exc_info:
        resolve_read_path(base, str(base) + "/../../etc/passwd")
    assert "../../etc/passwd" in str(exc_info.value)


def test_absolute_path_outside_base_rejected(tmp_path: Path) -> None:
    with pytest.raises(PathSafetyError):
        resolve_read_path(tmp_path / "features", "/etc/passwd.feature")


def test_sibling_with_shared_prefix_rejected(tmp_path: Path) -> None:
    with pytest.raises(PathSafetyError):
        resolve_read_path(tmp_path / "features", tmp_path / "features-evil" / "x.feature")


def test_base_itself_rejected(tmp_path: Path) -> None:
    with pytest.raises(PathSafetyError):
        resolve_read_path(tmp_path, tmp_path)


def test_wrong_extension_rejected(tmp_path: Path) -> None:
    with pytest.raises(PathSafetyError, match="extension"):
        resolve_read_path(tmp_path, tmp_path / "notes.md")


def test_custom_extension(tmp_path: Path) -> None:
    target = tmp_path / "a.story"
    assert resolve_read_path(tmp_path, target, extension=".story") == target
    with pytest.raises(PathSafetyError):
        resolve_read_path(tmp_path, tmp_path / "a.feature", extension=".story")


def test_error_is_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        resolve_read_path(tmp_path, "/tmp/elsewhere.txt")


def test_read_feature_text_utf8(tmp_path: Path) -> None:
    p = tmp_path / "a.feature"
    p.write_text("Feature: Café ✓\n", encoding="utf-8")
    assert read_feature_text(p) == "Feature: Café ✓\n"


def test_read_feature_text_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_feature_text(tmp_path / "gone.feature")
