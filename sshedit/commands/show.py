from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.table import Table

from ..errors import SSHEditError
from ..repository import Server
from .common import console, fail, format_tags, open_repository, target_option


def render_server(server: Server) -> Table:
    table = Table(box=box.SIMPLE_HEAVY, show_header=False, title=f"Host {server.alias}")
    table.add_column("Option", style="bold cyan")
    table.add_column("Value", overflow="fold")

    rows = [
        ("HostName", server.host),
        ("User", server.user),
        ("Port", server.port),
        ("ProxyJump", server.proxy_jump),
        ("DynamicForward", server.dynamic_forward),
    ]
    rows.extend(("IdentityFile", value) for value in server.identity_files)
    rows.extend(("LocalForward", value) for value in server.local_forward)
    rows.extend(("RemoteForward", value) for value in server.remote_forward)
    if server.tags:
        rows.append(("Tags", format_tags(server.tags)))

    for key, value in rows:
        if value:
            table.add_row(key, value)
    return table


def register(app: typer.Typer) -> None:
    @app.command("show")
    def show_host(
        alias: str = typer.Argument(..., help="Host alias to display."),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Show a host with its forwards in ssh command-line syntax."""
        repository = open_repository(target)
        try:
            server = repository.get_server(alias)
        except SSHEditError as exc:
            fail(exc)
        console.print(render_server(server))


__all__ = ["register", "render_server"]
