"""Tagging issue detection: conflicting and missing status tags."""

from __future__ import annotations

from bddgov.governance.classify import TAG_MANUAL, TAG_READY, TAG_SKIP, TAG_WIP
from bddgov.governance.models import (
    ConflictingStatusIssue,
    MissingStatusIssue,
    ScenarioRow,
)


def detect_conflicting_status(row: ScenarioRow) -> ConflictingStatusIssue | None:
    """Return a conflict if the status tags that apply to *row* disagree.

    Scenario-level tags are checked first. Feature-level tags only count when
    the scenario has no status tag of its own, since it then inherits them.
    """
    if len(row.scenario_primary_status_tags) > 1:
        conflicting = row.scenario_primary_status_tags
    elif not row.scenario_primary_status_tags and len(row.feature_primary_status_tags) > 1:
        conflicting = row.feature_primary_status_tags
    else:
        return None

    return ConflictingStatusIssue(
        file_path=row.file_path,
        scenario_name=row.scenario_name,
        tags=row.tags,
        primary_status_tags=conflicting,
    )


def detect_missing_status(row: ScenarioRow) -> MissingStatusIssue | None:
    """Return an issue if *row* has no ready/wip/manual tag and no @skip."""
    tags = set(row.tags)
    if tags & {TAG_READY, TAG_WIP, TAG_MANUAL} or TAG_SKIP in tags:
        return None
    return MissingStatusIssue(
        file_path=row.file_path,
        scenario_name=row.scenario_name,
        tags=row.tags,
    )


def evaluate_status_issues(
    row: ScenarioRow,
    out_missing_status: list[MissingStatusIssue],
    out_conflicting_status: list[ConflictingStatusIssue],
) -> None:
    """Run both checks on *row* and append any findings to the output lists."""
    conflict = detect_conflicting_status(row)
    if conflict is not None:
        out_conflicting_status.append(conflict)

    missing = detect_missing_status(row)
    if missing is not None:
        out_missing_status.append(missing)
