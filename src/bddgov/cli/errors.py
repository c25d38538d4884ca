"""bddgov rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from bddgov.cli.errors import err_snapshot_failed
    console.print(err_snapshot_failed(exc))
    raise typer.Exit(2)
"""

from __future__ import annotations

from rich.markup import escape

from bddgov.governance.classify import PRIMARY_STATUS_TAGS, TAG_SKIP


def err_snapshot_failed(exc: BaseException) -> str:
    """Snapshot aborted on a fatal read or path-safety error."""
    return (
        "[red]Error:[/] Failed to compute BDD governance snapshot.\n"
        f"  Cause: {escape(str(exc))}\n"
        "  Check file permissions under apps/*/features/ and re-run."
    )


def err_output_path_unsafe(path: str) -> str:
    """--out path fails security validation."""
    return (
        f"[red]Error:[/] Output path is not allowed: '{escape(path)}'\n"
        "  Use a path within the current working directory."
    )


def err_config_invalid(detail: str) -> str:
    """bddgov.yaml or ~/.bddgov/config.yaml holds an invalid value."""
    return (
        "[red]Error:[/] Invalid bddgov configuration.\n"
        f"  {escape(detail)}\n"
        "  Fix the value in bddgov.yaml (or ~/.bddgov/config.yaml) and re-run."
    )


def err_no_apps_dir(apps_dir: str) -> str:
    """No apps/ directory at the resolved repo root."""
    return (
        f"[red]Error:[/] No apps/ directory found at: {escape(apps_dir)}\n"
        "  Run from inside the monorepo, or pass:  --root <path-to-repo>"
    )


def err_conflicting_status(count: int) -> str:
    """Scenarios carry more than one primary status tag in the same scope."""
    return (
        f"[red]ERROR:[/] {count} scenario(s) have conflicting status tags.\n"
        f"  Keep exactly one of: {', '.join(PRIMARY_STATUS_TAGS)}"
    )


def err_missing_status(count: int) -> str:
    """Scenarios with no status tag at all."""
    return (
        f"[red]ERROR:[/] {count} scenario(s) missing a status tag.\n"
        f"  Add one of: {', '.join(PRIMARY_STATUS_TAGS)} (use {TAG_SKIP} to disable a scenario)"
    )
