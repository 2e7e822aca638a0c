from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import typer

from ..errors import SSHEditError
from .common import console, fail, format_tags, open_repository, quoted, report_backup, target_option


def register(app: typer.Typer) -> None:
    tag_app = typer.Typer(help="Manage tags attached to hosts")

    @tag_app.command("set")
    def set_tags(
        alias: str = typer.Argument(..., help="Host alias to tag"),
        tags: List[str] = typer.Argument(..., help="Tags replacing the current ones"),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Replace the tags of a host."""
        repository = open_repository(target)
        try:
            backup = repository.set_tags(alias, tags)
            current = repository.get_server(alias).tags
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Tags for {alias}: {format_tags(current)}[/green]")
        report_backup(backup)

    @tag_app.command("add")
    def add_tags(
        alias: str = typer.Argument(..., help="Host alias to add tags to"),
        tags: List[str] = typer.Argument(..., help="Tags to add"),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Add one or more tags to a host."""
        repository = open_repository(target)
        try:
            backup = repository.add_tags(alias, tags)
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Added tags {quoted(tags)} to {alias}[/green]")
        report_backup(backup)

    @tag_app.command("remove")
    def remove_tags(
        alias: str = typer.Argument(..., help="Host alias to remove tags from"),
        tags: List[str] = typer.Argument(..., help="Tags to remove"),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Remove one or more tags from a host."""
        repository = open_repository(target)
        try:
            backup = repository.remove_tags(alias, tags)
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Removed tags {quoted(tags)} from {alias}[/green]")
        report_backup(backup)

    @tag_app.command("clear")
    def clear_tags(
        alias: str = typer.Argument(..., help="Host alias to clear"),
        target: Optional[Path] = target_option(),
    ) -> None:
        """Remove every tag from a host."""
        repository = open_repository(target)
        try:
            backup = repository.set_tags(alias, [])
        except (SSHEditError, OSError) as exc:
            fail(exc)
        console.print(f"[green]Cleared tags on {alias}[/green]")
        report_backup(backup)

    @tag_app.command("list")
    def list_tags(target: Optional[Path] = target_option()) -> None:
        """List all tags and their usage counts."""
        repository = open_repository(target)
        tag_counts: Dict[str, int] = {}
        spelling: Dict[str, str] = {}

        for server in repository.list_servers():
            for tag in server.tags:
                key = tag.lower()
                spelling.setdefault(key, tag)
                tag_counts[key] = tag_counts.get(key, 0) + 1

        if not tag_counts:
            console.print("[yellow]No tags found[/yellow]")
            return

        for key in sorted(tag_counts.keys()):
            count = tag_counts[key]
            console.print(f"{spelling[key]} ({count} host{'s' if count != 1 else ''})")

    app.add_typer(tag_app, name="tag")


__all__ = ["register"]
