"""bddgov impl-audit command.

Groups scenarios by their @impl_* tags and reports, per tag, how many of
its scenarios are ready / wip / manual / skip / other.

Usage:
  bddgov impl-audit [--format text|json] [--check-ready-impl]
                    [--fail-on-missing-ready-impl] [--out PATH]

Flags:
  --format                       text (default) or json
  --check-ready-impl             also list @ready scenarios without an impl tag
  --fail-on-missing-ready-impl   as above, and exit 1 if any exist
  --out PATH                     write the report to PATH (must stay inside CWD)
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from bddgov.cli.common import (
    EXIT_FINDINGS,
    EXIT_OK,
    compute_snapshot_or_exit,
    emit_report,
    load_cli_config,
)
from bddgov.report.render import build_impl_json_report, build_impl_text_report, to_json


class ReportFormat(str, Enum):
    text = "text"
    json = "json"


def impl_audit_cmd(
    fmt: Annotated[
        ReportFormat,
        typer.Option("--format", help="Report format.", case_sensitive=False),
    ] = ReportFormat.text,
    check_ready_impl: Annotated[
        bool,
        typer.Option("--check-ready-impl", help="List @ready scenarios that have no impl tag."),
    ] = False,
    fail_on_missing_ready_impl: Annotated[
        bool,
        typer.Option(
            "--fail-on-missing-ready-impl",
            help="Exit 1 if any @ready scenario has no impl tag (implies --check-ready-impl).",
        ),
    ] = False,
    out: Annotated[
        str | None,
        typer.Option("--out", "-o", help="Write the report to this path instead of stdout."),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Start directory for locating the repo root (default: CWD)."),
    ] = None,
) -> None:
    """Audit @impl_* tags against scenario readiness."""
    cfg = load_cli_config()
    snapshot = compute_snapshot_or_exit(root, cfg)

    if fmt == ReportFormat.json:
        content = to_json(build_impl_json_report(snapshot))
    else:
        include_summary = check_ready_impl or fail_on_missing_ready_impl
        content = build_impl_text_report(snapshot, include_ready_impl_summary=include_summary)

    emit_report(content, out)

    if fail_on_missing_ready_impl and snapshot.missing_ready_impl:
        raise typer.Exit(EXIT_FINDINGS)
    raise typer.Exit(EXIT_OK)
