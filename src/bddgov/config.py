"""bddgov configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (BDDGOV_WORKSPACE_MARKER, BDDGOV_IMPL_TAG_PREFIX)
  3. Per-project bddgov.yaml  (in the working directory)
  4. Global ~/.bddgov/config.yaml
  5. Hardcoded defaults

All YAML reads use yaml.safe_load() — never yaml.load().
apps_dir / features_dir must be plain directory names so the scan can never
be pointed outside the repo root.
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_DIR: Path = Path.home() / ".bddgov"
_GLOBAL_CONFIG_PATH: Path = _GLOBAL_CONFIG_DIR / "config.yaml"
_PROJECT_CONFIG_NAME: str = "bddgov.yaml"

# Known top-level sections; unknown keys produce a warning
_KNOWN_SECTIONS: frozenset[str] = frozenset(["repo", "discovery", "tags", "report"])

_DEFAULT_SKIP_DIRS: tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    ".turbo",
    ".next",
    "coverage",
)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class RepoCfg:
    """Monorepo layout (bddgov.yaml: repo:).

    Attributes:
        workspace_marker: File that, next to apps_dir, marks the repo root.
        apps_dir: Directory holding one subdirectory per app.
        features_dir: Per-app directory scanned for feature files.
        max_hops: Maximum number of ancestors checked when locating the root.
    """

    workspace_marker: str = "pnpm-workspace.yaml"
    apps_dir: str = "apps"
    features_dir: str = "features"
    max_hops: int = 20


@dataclass
class DiscoveryCfg:
    """Feature file discovery (bddgov.yaml: discovery:)."""

    extension: str = ".feature"
    skip_dirs: list[str] = field(default_factory=lambda: list(_DEFAULT_SKIP_DIRS))


@dataclass
class TagsCfg:
    """Tag vocabulary (bddgov.yaml: tags:)."""

    impl_prefix: str = "@impl_"


@dataclass
class ReportCfg:
    """CLI report settings (bddgov.yaml: report:)."""

    max_shown: int = 50


@dataclass
class BddgovConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    repo: RepoCfg = field(default_factory=RepoCfg)
    discovery: DiscoveryCfg = field(default_factory=DiscoveryCfg)
    tags: TagsCfg = field(default_factory=TagsCfg)
    report: ReportCfg = field(default_factory=ReportCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _validate_dir_name(value: str, key: str) -> None:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        raise ConfigError(
            f"{key} must be a plain directory name, got '{value}'.\n"
            f"  Example:  {key.split('.')[-1]}: apps"
        )


def validate_config(cfg: BddgovConfig) -> None:
    """Raise ConfigError if *cfg* holds a value the scan cannot work with."""
    _validate_dir_name(cfg.repo.apps_dir, "repo.apps_dir")
    _validate_dir_name(cfg.repo.features_dir, "repo.features_dir")
    if not cfg.repo.workspace_marker:
        raise ConfigError("repo.workspace_marker must not be empty.")
    if cfg.repo.max_hops < 1:
        raise ConfigError(f"repo.max_hops must be >= 1, got {cfg.repo.max_hops}.")
    if not cfg.discovery.extension.startswith(".") or len(cfg.discovery.extension) < 2:
        raise ConfigError(
            f"discovery.extension must start with '.', got '{cfg.discovery.extension}'.\n"
            "  Example:  extension: .feature"
        )
    if not cfg.tags.impl_prefix.startswith("@") or len(cfg.tags.impl_prefix) < 2:
        raise ConfigError(
            f"tags.impl_prefix must start with '@', got '{cfg.tags.impl_prefix}'.\n"
            "  Example:  impl_prefix: '@impl_'"
        )
    if cfg.report.max_shown < 1:
        raise ConfigError(f"report.max_shown must be >= 1, got {cfg.report.max_shown}.")


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level.")
    return raw


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _cfg_from_dict(data: dict[str, Any]) -> BddgovConfig:
    """Build a *BddgovConfig* from a merged raw YAML dict."""
    cfg = BddgovConfig()

    try:
        if "repo" in data:
            r = data["repo"] or {}
            cfg.repo = RepoCfg(
                workspace_marker=str(r.get("workspace_marker", cfg.repo.workspace_marker)),
                apps_dir=str(r.get("apps_dir", cfg.repo.apps_dir)),
                features_dir=str(r.get("features_dir", cfg.repo.features_dir)),
                max_hops=int(r.get("max_hops", cfg.repo.max_hops)),
            )

        if "discovery" in data:
            d = data["discovery"] or {}
            skip_dirs = d.get("skip_dirs", cfg.discovery.skip_dirs)
            if not isinstance(skip_dirs, list):
                raise ConfigError("discovery.skip_dirs must be a list of directory names.")
            cfg.discovery = DiscoveryCfg(
                extension=str(d.get("extension", cfg.discovery.extension)),
                skip_dirs=[str(s) for s in skip_dirs],
            )

        if "tags" in data:
            t = data["tags"] or {}
            cfg.tags = TagsCfg(impl_prefix=str(t.get("impl_prefix", cfg.tags.impl_prefix)))

        if "report" in data:
            rp = data["report"] or {}
            cfg.report = ReportCfg(max_shown=int(rp.get("max_shown", cfg.report.max_shown)))
    except ConfigError:
        raise
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc

    return cfg


def _apply_env_overrides(cfg: BddgovConfig) -> BddgovConfig:
    """Apply BDDGOV_* environment variable overrides (layer 2)."""
    if marker := os.environ.get("BDDGOV_WORKSPACE_MARKER"):
        cfg.repo.workspace_marker = marker
    if prefix := os.environ.get("BDDGOV_IMPL_TAG_PREFIX"):
        cfg.tags.impl_prefix = prefix
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> BddgovConfig:
    """Load and return a merged *BddgovConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *bddgov.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Returns:
        Fully merged and validated *BddgovConfig*.

    Raises:
        ConfigError: If a config file is malformed or holds an invalid value.
    """
    global_path = global_config_path if global_config_path is not None else _GLOBAL_CONFIG_PATH
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    # Layer 1: global config
    if global_path.exists():
        raw_global = _read_yaml(global_path)
        _warn_unknown_keys(raw_global, global_path)
        merged = _deep_merge(merged, raw_global)

    # Layer 2: per-project config
    project_cfg_path = search_dir / _PROJECT_CONFIG_NAME
    if project_cfg_path.exists():
        raw_project = _read_yaml(project_cfg_path)
        _warn_unknown_keys(raw_project, project_cfg_path)
        merged = _deep_merge(merged, raw_project)

    cfg = _cfg_from_dict(merged)

    # Layer 3: env var overrides
    cfg = _apply_env_overrides(cfg)

    validate_config(cfg)
    return cfg
