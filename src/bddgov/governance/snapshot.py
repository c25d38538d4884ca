"""BDD governance snapshot.

Scans ``apps/*/features`` under the monorepo root, parses every feature file
and rolls the results up into one BddGovernanceSnapshot:

  - per-app, per-feature and overall status counts
  - missing / conflicting status tag issues
  - implementation-tag audit (per-tag rosters, ready scenarios with no impl tag)

Apps without a features/ folder, or with no feature files in it, are left
out. A feature file that was discovered but cannot be read, or a path that
fails the safety check, aborts the whole run; there are no partial snapshots.

Usage:
    snapshot = compute_bdd_governance_snapshot()
    print(snapshot.overall.ready, snapshot.missing_ready_impl_count)
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

from bddgov.config import BddgovConfig
from bddgov.governance.discovery import find_feature_files, list_app_names
from bddgov.governance.impl_audit import ImplAuditor
from bddgov.governance.issues import evaluate_status_issues
from bddgov.governance.models import (
    AppCounts,
    BddGovernanceSnapshot,
    ConflictingStatusIssue,
    FeatureOverview,
    FeatureRow,
    ImplScenarioRef,
    ImplSummary,
    ImplTagRow,
    MissingReadyImpl,
    MissingStatusIssue,
    ScenarioOverview,
    StatusCounts,
    StatusKey,
)
from bddgov.governance.parser import parse_feature_file
from bddgov.governance.repo_root import resolve_repo_root
from bddgov.governance.safety import read_feature_text, resolve_read_path


class _ScanState:
    """Accumulators for one snapshot run."""

    def __init__(self) -> None:
        self.apps: list[AppCounts] = []
        self.features: list[FeatureRow] = []
        self.statuses: list[StatusKey] = []
        self.missing_status: list[MissingStatusIssue] = []
        self.conflicting_status: list[ConflictingStatusIssue] = []
        self.impl = ImplAuditor()


def relify(repo_root: Path, path: str | Path) -> str:
    """*path* relative to *repo_root*, always with '/' separators."""
    return os.path.relpath(path, repo_root).replace("\\", "/")


def _scan_app(app_name: str, features_dir: Path, cfg: BddgovConfig, state: _ScanState) -> StatusCounts | None:
    # Sorted so issue lists and impl rosters do not depend on scandir order.
    feature_files = sorted(
        find_feature_files(
            features_dir,
            extension=cfg.discovery.extension,
            skip_dirs=frozenset(cfg.discovery.skip_dirs),
        )
    )
    if not feature_files:
        return None

    app_statuses: list[StatusKey] = []
    for raw_path in feature_files:
        safe_path = resolve_read_path(features_dir, raw_path, extension=cfg.discovery.extension)
        content = read_feature_text(safe_path)

        feature = parse_feature_file(
            app_name, str(safe_path), content, impl_prefix=cfg.tags.impl_prefix
        )
        state.features.append(feature)

        for row in feature.scenarios:
            evaluate_status_issues(row, state.missing_status, state.conflicting_status)
            app_statuses.append(row.status)
            state.impl.visit(row)

    state.statuses.extend(app_statuses)
    return StatusCounts.from_statuses(app_statuses)


def _feature_overview(repo_root: Path, feature: FeatureRow) -> FeatureOverview:
    return FeatureOverview(
        app_name=feature.app_name,
        file_path=relify(repo_root, feature.file_path),
        feature_name=feature.feature_name,
        tags=feature.feature_tags,
        counts=StatusCounts.from_statuses(s.status for s in feature.scenarios),
        scenarios=tuple(
            ScenarioOverview(
                app_name=feature.app_name,
                file_path=relify(repo_root, s.file_path),
                feature_name=s.feature_name,
                scenario_name=s.scenario_name,
                status=s.status,
                tags=s.tags,
                impl_tags=s.impl_tags,
            )
            for s in feature.scenarios
        ),
    )


def _relify_impl_row(repo_root: Path, row: ImplTagRow) -> ImplTagRow:
    summary = ImplSummary.from_refs(
        ImplScenarioRef(
            file_path=relify(repo_root, ref.file_path),
            scenario_name=ref.scenario_name,
            status=ref.status,
        )
        for ref in row.summary.scenarios
    )
    return ImplTagRow(impl_tag=row.impl_tag, summary=summary)


def compute_bdd_governance_snapshot(
    start_dir: Path | None = None,
    *,
    config: BddgovConfig | None = None,
) -> BddGovernanceSnapshot:
    """Scan the monorepo and return a fresh governance snapshot.

    Args:
        start_dir: Where to start looking for the repo root. Defaults to CWD.
        config: Layout and vocabulary settings. Defaults to BddgovConfig().

    Returns:
        An immutable BddGovernanceSnapshot; paths are repo-root relative.

    Raises:
        PathSafetyError: if a discovered path escapes its features/ folder.
        OSError: if a discovered feature file cannot be read.
        UnicodeDecodeError: if a discovered feature file is not UTF-8.
    """
    cfg = config if config is not None else BddgovConfig()
    repo_root = resolve_repo_root(
        start_dir if start_dir is not None else Path.cwd(),
        workspace_marker=cfg.repo.workspace_marker,
        apps_dir_name=cfg.repo.apps_dir,
        max_hops=cfg.repo.max_hops,
    )
    apps_dir = repo_root / cfg.repo.apps_dir

    state = _ScanState()
    for app_name in list_app_names(apps_dir):
        features_dir = apps_dir / app_name / cfg.repo.features_dir
        if not features_dir.is_dir():
            continue

        app_counts = _scan_app(app_name, features_dir, cfg, state)
        if app_counts is None:
            continue
        state.apps.append(AppCounts(app_name=app_name, counts=app_counts))

    features = sorted(state.features, key=lambda f: (f.app_name, f.feature_name, f.file_path))

    return BddGovernanceSnapshot(
        generated_at=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        apps=tuple(state.apps),
        features=tuple(_feature_overview(repo_root, f) for f in features),
        overall=StatusCounts.from_statuses(state.statuses),
        missing_status=tuple(
            MissingStatusIssue(
                file_path=relify(repo_root, i.file_path),
                scenario_name=i.scenario_name,
                tags=i.tags,
            )
            for i in state.missing_status
        ),
        conflicting_status=tuple(
            ConflictingStatusIssue(
                file_path=relify(repo_root, i.file_path),
                scenario_name=i.scenario_name,
                tags=i.tags,
                primary_status_tags=i.primary_status_tags,
            )
            for i in state.conflicting_status
        ),
        impl_tags=tuple(_relify_impl_row(repo_root, r) for r in state.impl.rows()),
        missing_ready_impl=tuple(
            MissingReadyImpl(file_path=relify(repo_root, r.file_path), scenario_name=r.scenario_name)
            for r in state.impl.missing_ready_impl
        ),
    )
