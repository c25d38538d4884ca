"""Tests for governance/impl_audit.py."""

from __future__ import annotations

from bddgov.governance.impl_audit import ImplAuditor
from bddgov.governance.models import ImplSummary, ScenarioRow


def _row(name: str, status: str, impl_tags: tuple[str, ...] = (), path: str = "/r/a.feature") -> ScenarioRow:
    return ScenarioRow(
        file_path=path,
        feature_name="F",
        scenario_name=name,
        tags=impl_tags,
        status=status,  # type: ignore[arg-type]
        impl_tags=impl_tags,
    )


def _summaries(auditor: ImplAuditor) -> dict[str, ImplSummary]:
    return {r.impl_tag: r.summary for r in auditor.rows()}


def test_ready_without_impl_is_flagged() -> None:
    auditor = ImplAuditor()
    auditor.visit(_row("S", "ready"))
    assert [(r.file_path, r.scenario_name) for r in auditor.missing_ready_impl] == [("/r/a.feature", "S")]


def test_ready_with_impl_not_flagged() -> None:
    auditor = ImplAuditor()
    auditor.visit(_row("S", "ready", ("@impl_x",)))
    assert auditor.missing_ready_impl == []


def test_non_ready_without_impl_not_flagged() -> None:
    auditor = ImplAuditor()
    for status in ("wip", "manual", "skip", "other"):
        auditor.visit(_row(status, status))
    assert auditor.missing_ready_impl == []


def test_summary_counts_by_status() -> None:
    auditor = ImplAuditor()
    auditor.visit(_row("a", "ready", ("@impl_x",)))
    auditor.visit(_row("b", "ready", ("@impl_x",)))
    auditor.visit(_row("c", "wip", ("@impl_x",)))
    auditor.visit(_row("d", "skip", ("@impl_x",)))

    summary = _summaries(auditor)["@impl_x"]
    assert (summary.ready, summary.wip, summary.manual, summary.skip, summary.other) == (2, 1, 0, 1, 0)
    assert [s.scenario_name for s in summary.scenarios] == ["a", "b", "c", "d"]


def test_scenario_with_several_impl_tags_lands_in_each() -> None:
    auditor = ImplAuditor()
    auditor.visit(_row("S", "manual", ("@impl_a", "@impl_b")))
    summaries = _summaries(auditor)
    assert summaries["@impl_a"].manual == 1
    assert summaries["@impl_b"].manual == 1


def test_rows_sorted_by_tag() -> None:
    auditor = ImplAuditor()
    auditor.visit(_row("1", "ready", ("@impl_zeta",)))
    auditor.visit(_row("2", "ready", ("@impl_alpha",)))
    auditor.visit(_row("3", "ready", ("@impl_Mid",)))
    assert [r.impl_tag for r in auditor.rows()] == ["@impl_Mid", "@impl_alpha", "@impl_zeta"]


def test_same_scenario_name_in_different_files_kept_apart() -> None:
    auditor = ImplAuditor()
    auditor.visit(_row("Login", "ready", ("@impl_x",), path="/r/apps/web/features/a.feature"))
    auditor.visit(_row("Login", "wip", ("@impl_x",), path="/r/apps/api/features/a.feature"))
    summary = _summaries(auditor)["@impl_x"]
    assert {s.file_path for s in summary.scenarios} == {
        "/r/apps/web/features/a.feature",
        "/r/apps/api/features/a.feature",
    }


def test_fresh_auditor_starts_empty() -> None:
    first = ImplAuditor()
    first.visit(_row("S", "ready"))
    second = ImplAuditor()
    assert second.rows() == []
    assert second.missing_ready_impl == []
