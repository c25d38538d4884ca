"""bddgov snapshot command — full governance snapshot as JSON."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from bddgov.cli.common import compute_snapshot_or_exit, emit_report, load_cli_config
from bddgov.report.render import snapshot_to_json


def snapshot_cmd(
    out: Annotated[
        str | None,
        typer.Option("--out", "-o", help="Write the JSON to this path instead of stdout."),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Start directory for locating the repo root (default: CWD)."),
    ] = None,
) -> None:
    """Print the full BDD governance snapshot as JSON."""
    cfg = load_cli_config()
    snapshot = compute_snapshot_or_exit(root, cfg)
    emit_report(snapshot_to_json(snapshot), out)
