"""Helpers shared by the bddgov commands: config, snapshot, report output."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from bddgov.cli.errors import err_config_invalid, err_output_path_unsafe, err_snapshot_failed
from bddgov.config import BddgovConfig, ConfigError, load_config
from bddgov.governance.models import BddGovernanceSnapshot
from bddgov.governance.safety import PathSafetyError
from bddgov.governance.snapshot import compute_bdd_governance_snapshot
from bddgov.report.writer import validate_output_path, write_output

console = Console()

# Exit codes
EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def load_cli_config() -> BddgovConfig:
    try:
        return load_config()
    except ConfigError as exc:
        console.print(err_config_invalid(str(exc)))
        raise typer.Exit(EXIT_ERROR)


def compute_snapshot_or_exit(root: Path | None, cfg: BddgovConfig) -> BddGovernanceSnapshot:
    try:
        return compute_bdd_governance_snapshot(root, config=cfg)
    except (PathSafetyError, OSError, UnicodeDecodeError) as exc:
        console.print(err_snapshot_failed(exc))
        raise typer.Exit(EXIT_ERROR)


def emit_report(content: str, out: str | None) -> None:
    """Print *content*, or write it to the validated *out* path."""
    if not out:
        typer.echo(content)
        return

    try:
        out_path = validate_output_path(out)
    except ValueError:
        console.print(err_output_path_unsafe(out))
        raise typer.Exit(EXIT_ERROR)

    write_output(out_path, content + "\n")
    rel = out_path.relative_to(Path.cwd().resolve()).as_posix()
    typer.echo(f"wrote {rel}")
