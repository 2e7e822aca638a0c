from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.table import Table

from .common import console, format_tags, open_repository, target_option


def register(app: typer.Typer) -> None:
    @app.command("list")
    def list_hosts(
        query: Optional[str] = typer.Argument(None, help="Filter on alias, hostname, user or tag."),
        tag: Optional[str] = typer.Option(None, "--tag", "-g", help="Only hosts carrying this tag."),
        target: Optional[Path] = target_option(),
    ) -> None:
        """List hosts defined in the config."""
        repository = open_repository(target)
        servers = repository.list_servers(query=query, tag=tag)
        if not servers:
            console.print("[yellow]No results.[/yellow]")
            return

        table = Table(box=box.SIMPLE_HEAVY)
        table.add_column("Alias", style="bold cyan")
        table.add_column("HostName", style="green")
        table.add_column("User")
        table.add_column("Port", justify="right")
        table.add_column("Tags", style="magenta")
        for server in servers:
            table.add_row(server.alias, server.host, server.user, server.port, format_tags(server.tags))
        console.print(table)


__all__ = ["register"]
