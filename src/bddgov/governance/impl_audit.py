"""Implementation-tag audit.

Groups scenarios by their ``@impl_*`` tags and lists ``ready`` scenarios
that carry no implementation tag at all. One auditor per snapshot run.
"""

from __future__ import annotations

from bddgov.governance.models import (
    ImplScenarioRef,
    ImplSummary,
    ImplTagRow,
    MissingReadyImpl,
    ScenarioRow,
)


class ImplAuditor:
    def __init__(self) -> None:
        self._refs_by_tag: dict[str, list[ImplScenarioRef]] = {}
        self.missing_ready_impl: list[MissingReadyImpl] = []

    def visit(self, row: ScenarioRow) -> None:
        if row.status == "ready" and not row.impl_tags:
            self.missing_ready_impl.append(
                MissingReadyImpl(file_path=row.file_path, scenario_name=row.scenario_name)
            )

        for impl_tag in row.impl_tags:
            self._refs_by_tag.setdefault(impl_tag, []).append(
                ImplScenarioRef(
                    file_path=row.file_path,
                    scenario_name=row.scenario_name,
                    status=row.status,
                )
            )

    def rows(self) -> list[ImplTagRow]:
        """Summaries sorted by tag name."""
        return [
            ImplTagRow(impl_tag=tag, summary=ImplSummary.from_refs(self._refs_by_tag[tag]))
            for tag in sorted(self._refs_by_tag)
        ]
