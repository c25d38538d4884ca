"""Plain-text and JSON renderings of a governance snapshot.

These are machine-friendly outputs (CI logs, --out files): no rich markup.
"""

from __future__ import annotations

import json
from typing import Any

from bddgov.governance.models import BddGovernanceSnapshot


def build_impl_text_report(snapshot: BddGovernanceSnapshot, include_ready_impl_summary: bool) -> str:
    lines = [f"impl-tags total={snapshot.impl_tags_total}"]

    for row in snapshot.impl_tags:
        s = row.summary
        lines.append(
            f"{row.impl_tag} ready={s.ready} wip={s.wip} manual={s.manual} skip={s.skip} other={s.other}"
        )

    if include_ready_impl_summary:
        lines.append(f"ready-without-impl total={snapshot.missing_ready_impl_count}")
        for r in snapshot.missing_ready_impl:
            lines.append(f"- {r.file_path}: {r.scenario_name}")

    return "\n".join(lines)


def build_impl_json_report(snapshot: BddGovernanceSnapshot) -> dict[str, Any]:
    return {
        "totalImplTags": snapshot.impl_tags_total,
        "missingReadyImplCount": snapshot.missing_ready_impl_count,
        "missingReadyImpl": [r.to_dict() for r in snapshot.missing_ready_impl],
        "byImpl": {row.impl_tag: row.summary.to_dict() for row in snapshot.impl_tags},
    }


def to_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def snapshot_to_json(snapshot: BddGovernanceSnapshot) -> str:
    return to_json(snapshot.to_dict())
