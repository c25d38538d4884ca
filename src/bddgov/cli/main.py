"""bddgov CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from bddgov.cli.impl_audit import impl_audit_cmd
from bddgov.cli.snapshot import snapshot_cmd
from bddgov.cli.status import status_cmd


def _installed_version() -> str:
    try:
        return importlib.metadata.version("bddgov")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"bddgov {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="bddgov",
    help=(
        "bddgov — BDD governance for monorepos.\n\n"
        "  bddgov status      Status tag counts per app + tagging issues.\n"
        "  bddgov impl-audit  @impl_* tags vs. scenario readiness.\n"
        "  bddgov snapshot    Full governance snapshot as JSON."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """bddgov — BDD governance for monorepos."""


app.command("status")(status_cmd)
app.command("impl-audit")(impl_audit_cmd)
app.command("snapshot")(snapshot_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed bddgov version."""
    typer.echo(f"bddgov {_installed_version()}")


if __name__ == "__main__":
    app()
