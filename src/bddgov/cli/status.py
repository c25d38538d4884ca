"""bddgov status command.

Shows scenario status counts per app and overall, then lists tagging issues
(conflicting status tags, missing status tags).

Exit codes:
  0 — no issues (or no feature files at all)
  1 — at least one conflicting or missing status tag
  2 — no apps/ directory, bad config, or a feature file could not be read
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from bddgov.cli.common import (
    EXIT_ERROR,
    EXIT_FINDINGS,
    EXIT_OK,
    compute_snapshot_or_exit,
    console,
    load_cli_config,
)
from bddgov.cli.errors import err_conflicting_status, err_missing_status, err_no_apps_dir
from bddgov.governance.models import (
    BddGovernanceSnapshot,
    ConflictingStatusIssue,
    MissingStatusIssue,
    StatusCounts,
)
from bddgov.governance.repo_root import resolve_repo_root


def status_cmd(
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Start directory for locating the repo root (default: CWD)."),
    ] = None,
) -> None:
    """Show BDD scenario status counts and tagging issues."""
    cfg = load_cli_config()

    repo_root = resolve_repo_root(
        root if root is not None else Path.cwd(),
        workspace_marker=cfg.repo.workspace_marker,
        apps_dir_name=cfg.repo.apps_dir,
        max_hops=cfg.repo.max_hops,
    )
    apps_dir = repo_root / cfg.repo.apps_dir
    if not apps_dir.is_dir():
        console.print(err_no_apps_dir(str(apps_dir)))
        raise typer.Exit(EXIT_ERROR)

    snapshot = compute_snapshot_or_exit(repo_root, cfg)

    if not snapshot.apps:
        console.print(
            f"[yellow]No {cfg.discovery.extension} files found under "
            f"{cfg.repo.apps_dir}/*/{cfg.repo.features_dir}/.[/]"
        )
        raise typer.Exit(EXIT_OK)

    _show_counts_table(snapshot)

    max_shown = cfg.report.max_shown
    exit_code = EXIT_OK

    if snapshot.conflicting_status:
        _show_conflicts(snapshot.conflicting_status, max_shown)
        exit_code = EXIT_FINDINGS

    if snapshot.missing_status:
        _show_missing(snapshot.missing_status, max_shown)
        exit_code = EXIT_FINDINGS

    if exit_code == EXIT_OK:
        console.print("\n[green]✓[/] All scenarios carry exactly one status.")

    raise typer.Exit(exit_code)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _counts_cells(counts: StatusCounts) -> list[str]:
    return [
        str(counts.total),
        str(counts.ready),
        str(counts.wip),
        str(counts.manual),
        str(counts.skip),
        str(counts.other),
    ]


def _show_counts_table(snapshot: BddGovernanceSnapshot) -> None:
    table = Table(title="BDD Status", show_header=True, header_style="bold")
    table.add_column("App", style="bold")
    for name in ("Total", "Ready", "WIP", "Manual", "Skip", "Other"):
        table.add_column(name, justify="right")

    for app in snapshot.apps:
        table.add_row(escape(app.app_name), *_counts_cells(app.counts))

    table.add_section()
    table.add_row("overall", *_counts_cells(snapshot.overall), style="bold")

    console.print(table)


def _tags_text(tags: tuple[str, ...]) -> str:
    return " ".join(tags) or "(none)"


def _show_conflicts(issues: tuple[ConflictingStatusIssue, ...], max_shown: int) -> None:
    console.print()
    console.print(err_conflicting_status(len(issues)))
    for issue in issues[:max_shown]:
        console.print(
            escape(
                f"- {issue.file_path} :: {issue.scenario_name} "
                f"(primary: {', '.join(issue.primary_status_tags)}; tags: {_tags_text(issue.tags)})"
            ),
            soft_wrap=True,
        )
    if len(issues) > max_shown:
        console.print(f"...and {len(issues) - max_shown} more")


def _show_missing(issues: tuple[MissingStatusIssue, ...], max_shown: int) -> None:
    console.print()
    console.print(err_missing_status(len(issues)))
    for issue in issues[:max_shown]:
        console.print(
            escape(f"- {issue.file_path} :: {issue.scenario_name} (tags: {_tags_text(issue.tags)})"),
            soft_wrap=True,
        )
    if len(issues) > max_shown:
        console.print(f"...and {len(issues) - max_shown} more")
