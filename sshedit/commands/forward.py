from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ..errors import SSHEditError
from .add import check_forwards
from .common import console, fail, open_repository, report_backup, target_option


def _kind(remote: bool) -> str:
    return "remote" if remote else "local"


def register(app: typer.Typer) -> None:
    forward_app = typer.Typer(help="Manage LocalForward and RemoteForward rules")

    @forward_app.command("list")
    def list_forwards(
        alias: str = typer.Argument(..., help="Host alias"),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Show forwards in ssh command-line syntax."""
        repository = open_repository(target)
        try:
            server = repository.get_server(alias)
        except SSHEditError as exc:
            fail(exc)

        if not (server.local_forward or server.remote_forward):
            console.print(f"[yellow]No forwards defined for {alias}[/yellow]")
            return
        for spec in server.local_forward:
            console.print(f"-L {spec}")
        for spec in server.remote_forward:
            console.print(f"-R {spec}")

    @forward_app.command("add")
    def add_forward(
        alias: str = typer.Argument(..., help="Host alias"),
        spec: str = typer.Argument(..., help="Forward as [BIND:]PORT:HOST:HOSTPORT"),
        remote: bool = typer.Option(False, "--remote", "-R", help="Add a RemoteForward instead of a LocalForward."),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Add a forward to a host."""
        check_forwards([spec])
        repository = open_repository(target)
        try:
            server = repository.get_server(alias)
            forwards = server.remote_forward if remote else server.local_forward
            if spec in forwards:
                console.print(f"[yellow]{alias} already has {_kind(remote)} forward {spec}[/yellow]")
                return
            forwards.append(spec)
            backup = repository.update_server(alias, server)
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Added {_kind(remote)} forward {spec} to {alias}[/green]")
        report_backup(backup)

    @forward_app.command("remove")
    def remove_forward(
        alias: str = typer.Argument(..., help="Host alias"),
        spec: str = typer.Argument(..., help="Forward as [BIND:]PORT:HOST:HOSTPORT"),
        remote: bool = typer.Option(False, "--remote", "-R", help="Remove a RemoteForward instead of a LocalForward."),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Remove a forward from a host."""
        repository = open_repository(target)
        try:
            server = repository.get_server(alias)
            forwards = server.remote_forward if remote else server.local_forward
            if spec not in forwards:
                console.print(f"[yellow]{alias} has no {_kind(remote)} forward {spec}[/yellow]")
                raise typer.Exit(1)
            forwards.remove(spec)
            backup = repository.update_server(alias, server)
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Removed {_kind(remote)} forward {spec} from {alias}[/green]")
        report_backup(backup)

    app.add_typer(forward_app, name="forward")


__all__ = ["register"]
