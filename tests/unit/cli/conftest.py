"""Fixtures for CLI tests: isolate config lookup from the developer machine."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("bddgov.config._GLOBAL_CONFIG_PATH", tmp_path / "no-global" / "config.yaml")
    monkeypatch.delenv("BDDGOV_WORKSPACE_MARKER", raising=False)
    monkeypatch.delenv("BDDGOV_IMPL_TAG_PREFIX", raising=False)
    monkeypatch.chdir(tmp_path)
