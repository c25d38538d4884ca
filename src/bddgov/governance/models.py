"""Domain models for the BDD governance snapshot."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

StatusKey = Literal["ready", "wip", "manual", "skip", "other"]

STATUS_KEYS: tuple[StatusKey, ...] = ("ready", "wip", "manual", "skip", "other")


@dataclass(frozen=True)
class StatusCounts:
    """Scenario tallies per status; ``total`` is the sum of the rest."""

    total: int = 0
    ready: int = 0
    wip: int = 0
    manual: int = 0
    skip: int = 0
    other: int = 0

    @classmethod
    def from_statuses(cls, statuses: Iterable[StatusKey]) -> StatusCounts:
        tally = dict.fromkeys(STATUS_KEYS, 0)
        for status in statuses:
            if status not in tally:
                raise ValueError(f"Unknown status: {status!r}")
            tally[status] += 1
        return cls(total=sum(tally.values()), **tally)

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "ready": self.ready,
            "wip": self.wip,
            "manual": self.manual,
            "skip": self.skip,
            "other": self.other,
        }


# ---------------------------------------------------------------------------
# Parse results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScenarioRow:
    file_path: str
    feature_name: str
    scenario_name: str
    tags: tuple[str, ...]
    status: StatusKey
    impl_tags: tuple[str, ...]
    feature_primary_status_tags: tuple[str, ...] = ()
    scenario_primary_status_tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class FeatureRow:
    app_name: str
    file_path: str
    feature_name: str
    feature_tags: tuple[str, ...]
    scenarios: tuple[ScenarioRow, ...] = ()


# ---------------------------------------------------------------------------
# Issues + impl audit
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MissingStatusIssue:
    file_path: str
    scenario_name: str
    tags: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "scenarioName": self.scenario_name,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class ConflictingStatusIssue:
    file_path: str
    scenario_name: str
    tags: tuple[str, ...]
    primary_status_tags: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "scenarioName": self.scenario_name,
            "tags": list(self.tags),
            "primaryStatusTags": list(self.primary_status_tags),
        }


@dataclass(frozen=True)
class ImplScenarioRef:
    file_path: str
    scenario_name: str
    status: StatusKey

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "scenarioName": self.scenario_name,
            "status": self.status,
        }


@dataclass(frozen=True)
class ImplSummary:
    """Per-status counters and scenario roster for one ``@impl_*`` tag."""

    ready: int = 0
    wip: int = 0
    manual: int = 0
    skip: int = 0
    other: int = 0
    scenarios: tuple[ImplScenarioRef, ...] = ()

    @classmethod
    def from_refs(cls, refs: Iterable[ImplScenarioRef]) -> ImplSummary:
        scenarios = tuple(refs)
        counts = StatusCounts.from_statuses(ref.status for ref in scenarios)
        return cls(
            ready=counts.ready,
            wip=counts.wip,
            manual=counts.manual,
            skip=counts.skip,
            other=counts.other,
            scenarios=scenarios,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "ready": self.ready,
            "wip": self.wip,
            "manual": self.manual,
            "skip": self.skip,
            "other": self.other,
            "scenarios": [s.to_dict() for s in self.scenarios],
        }


@dataclass(frozen=True)
class MissingReadyImpl:
    file_path: str
    scenario_name: str

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "scenarioName": self.scenario_name}


@dataclass(frozen=True)
class ImplTagRow:
    impl_tag: str
    summary: ImplSummary

    def to_dict(self) -> dict[str, Any]:
        return {"implTag": self.impl_tag, "summary": self.summary.to_dict()}


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppCounts:
    app_name: str
    counts: StatusCounts

    def to_dict(self) -> dict[str, Any]:
        return {"appName": self.app_name, "counts": self.counts.to_dict()}


@dataclass(frozen=True)
class ScenarioOverview:
    app_name: str
    file_path: str
    feature_name: str
    scenario_name: str
    status: StatusKey
    tags: tuple[str, ...]
    impl_tags: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "appName": self.app_name,
            "filePath": self.file_path,
            "featureName": self.feature_name,
            "scenarioName": self.scenario_name,
            "status": self.status,
            "tags": list(self.tags),
            "implTags": list(self.impl_tags),
        }


@dataclass(frozen=True)
class FeatureOverview:
    app_name: str
    file_path: str
    feature_name: str
    tags: tuple[str, ...]
    counts: StatusCounts
    scenarios: tuple[ScenarioOverview, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "appName": self.app_name,
            "filePath": self.file_path,
            "featureName": self.feature_name,
            "tags": list(self.tags),
            "counts": self.counts.to_dict(),
            "scenarios": [s.to_dict() for s in self.scenarios],
        }


@dataclass(frozen=True)
class BddGovernanceSnapshot:
    """Point-in-time governance report for a monorepo.

    Paths are relative to the resolved repo root with ``/`` separators, so
    snapshots taken on different machines compare cleanly.
    """

    generated_at: str
    apps: tuple[AppCounts, ...]
    features: tuple[FeatureOverview, ...]
    overall: StatusCounts
    missing_status: tuple[MissingStatusIssue, ...]
    conflicting_status: tuple[ConflictingStatusIssue, ...]
    impl_tags: tuple[ImplTagRow, ...]
    missing_ready_impl: tuple[MissingReadyImpl, ...]

    @property
    def impl_tags_total(self) -> int:
        return len(self.impl_tags)

    @property
    def missing_ready_impl_count(self) -> int:
        return len(self.missing_ready_impl)

    def to_dict(self) -> dict[str, Any]:
        return {
            "generatedAt": self.generated_at,
            "apps": [a.to_dict() for a in self.apps],
            "features": [f.to_dict() for f in self.features],
            "overall": self.overall.to_dict(),
            "issues": {
                "missingStatus": [i.to_dict() for i in self.missing_status],
                "conflictingStatus": [i.to_dict() for i in self.conflicting_status],
            },
            "implAudit": {
                "implTagsTotal": self.impl_tags_total,
                "implTags": [r.to_dict() for r in self.impl_tags],
                "missingReadyImplCount": self.missing_ready_impl_count,
                "missingReadyImpl": [r.to_dict() for r in self.missing_ready_impl],
            },
        }
