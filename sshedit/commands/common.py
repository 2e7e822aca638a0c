from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, NoReturn, Optional

import typer
from rich.console import Console

from .. import config as config_module
from ..errors import SSHEditError
from ..repository import Repository

console = Console()


def target_option() -> Optional[Path]:
    return typer.Option(
        None,
        "--target",
        "-t",
        help="SSH config file to use (defaults to $SSHEDIT_CONFIG or ~/.ssh/config).",
        rich_help_panel="Targeting",
    )


def open_repository(target: Optional[Path]) -> Repository:
    """Build a repository for the --target file, falling back to the default config."""
    if target is None:
        target = config_module.default_config_path()
    return Repository(target.expanduser())


def fail(error: SSHEditError | OSError) -> NoReturn:
    console.print(f"[red]{error}[/red]")
    raise typer.Exit(1)


def report_backup(backup: Optional[Path]) -> None:
    if backup:
        console.print(f"[dim]Backup saved to {backup}.[/dim]")


def format_tags(tags: Iterable[str]) -> str:
    return ", ".join(tags)


def quoted(values: List[str]) -> str:
    return ", ".join(repr(value) for value in values)


__all__ = [
    "console",
    "fail",
    "format_tags",
    "open_repository",
    "quoted",
    "report_backup",
    "target_option",
]
