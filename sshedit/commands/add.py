from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..core.forwards import convert_cli_forward
from ..errors import SSHEditError
from ..repository import Server
from .common import console, fail, open_repository, report_backup, target_option


def check_forwards(specs: List[str]) -> None:
    """Warn about forwards that are not in [bind:]port:host:hostport form."""
    for spec in specs:
        if not convert_cli_forward(spec).recognized:
            console.print(
                f"[yellow]Unrecognized forward '{escape(spec)}'; storing it as given.[/yellow]"
            )


def register(app: typer.Typer) -> None:
    @app.command("add")
    def add_host(
        alias: str = typer.Argument(..., help="Alias for the new Host block."),
        hostname: str = typer.Option("", "--hostname", "-H", help="HostName option."),
        user: str = typer.Option("", "--user", "-u", help="User option."),
        port: Optional[int] = typer.Option(None, "--port", "-p", help="Port option."),
        identity_file: List[str] = typer.Option([], "--identity-file", "-i", help="IdentityFile; repeatable."),
        local_forward: List[str] = typer.Option(
            [], "--local-forward", "-L", help="Local forward as [BIND:]PORT:HOST:HOSTPORT; repeatable."
        ),
        remote_forward: List[str] = typer.Option(
            [], "--remote-forward", "-R", help="Remote forward as [BIND:]PORT:HOST:HOSTPORT; repeatable."
        ),
        dynamic_forward: str = typer.Option("", "--dynamic-forward", "-D", help="DynamicForward option."),
        proxy_jump: str = typer.Option("", "--proxy-jump", "-J", help="ProxyJump option."),
        tag: List[str] = typer.Option([], "--tag", "-g", help="Tag to attach; repeatable."),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Append a new Host block to the config."""
        check_forwards(local_forward + remote_forward)
        server = Server(
            alias=alias,
            host=hostname,
            user=user,
            port=str(port) if port else "",
            identity_files=list(identity_file),
            local_forward=list(local_forward),
            remote_forward=list(remote_forward),
            dynamic_forward=dynamic_forward,
            proxy_jump=proxy_jump,
            tags=list(tag),
        )
        repository = open_repository(target)
        try:
            backup = repository.add_server(server)
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Added Host block {alias} to {repository.path}.[/green]")
        report_backup(backup)


__all__ = ["check_forwards", "register"]
