from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ..errors import SSHEditError
from .common import console, fail, open_repository, report_backup, target_option


def register(app: typer.Typer) -> None:
    @app.command("remove")
    def remove_host(
        alias: str = typer.Argument(..., help="Host alias to remove."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Remove a host block from the config."""
        repository = open_repository(target)
        if not yes:
            try:
                confirmed = typer.confirm(f"Remove Host block {alias}?")
            except typer.Abort:
                confirmed = False
            if not confirmed:
                console.print("[yellow]Cancelled.[/yellow]")
                raise typer.Exit(1)

        try:
            backup = repository.delete_server(alias)
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Removed Host block {alias} from {repository.path}.[/green]")
        report_backup(backup)


__all__ = ["register"]
