from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ..errors import SSHEditError
from .common import console, fail, open_repository, report_backup, target_option


def register(app: typer.Typer) -> None:
    @app.command("edit")
    def edit_host(
        alias: str = typer.Argument(..., help="Host alias to edit."),
        rename: Optional[str] = typer.Option(None, "--rename", "-n", help="New alias for the host."),
        hostname: Optional[str] = typer.Option(None, "--hostname", "-H", help="Update the HostName option."),
        user: Optional[str] = typer.Option(None, "--user", "-u", help="Update the User option."),
        port: Optional[int] = typer.Option(None, "--port", "-p", help="Update the Port option."),
        proxy_jump: Optional[str] = typer.Option(None, "--proxy-jump", "-J", help="Update the ProxyJump option."),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Print the resulting host."),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Edit options of an existing host; an empty value removes the option."""
        repository = open_repository(target)
        try:
            server = repository.get_server(alias)
        except SSHEditError as exc:
            fail(exc)

        if rename is not None:
            if not rename:
                console.print("[red]The new alias cannot be empty.[/red]")
                raise typer.Exit(1)
            server.alias = rename
        if hostname is not None:
            server.host = hostname
        if user is not None:
            server.user = user
        if port is not None:
            server.port = str(port) if port else ""
        if proxy_jump is not None:
            server.proxy_jump = proxy_jump

        if verbose:
            console.print(f"[blue]Writing {server}[/blue]")

        try:
            backup = repository.update_server(alias, server)
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Updated Host block {server.alias} in {repository.path}.[/green]")
        report_backup(backup)


__all__ = ["register"]
