from __future__ import annotations

import sys
from typing import List, Sequence

import typer
from typer.main import get_command

from .commands import register_commands
from .config import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH

app = typer.Typer(help="Edit SSH config hosts, tags and port forwards.")
register_commands(app)


def _command_names() -> List[str]:
    names = [info.name for info in app.registered_commands if info.name is not None]
    names.extend(info.name for info in app.registered_groups if info.name is not None)
    return names


def _rewrite_default_invocation(args: Sequence[str]) -> List[str]:
    if not args:
        return list(args)

    first, *rest = args
    if first.startswith("-") or first in _command_names():
        return list(args)
    return ["show", first, *rest]


def run(argv: Sequence[str] | None = None) -> None:
    """Entry point that supports `sshedit <alias>` shorthand."""
    command = get_command(app)
    if argv is None:
        argv = tuple(sys.argv[1:])
    rewritten = _rewrite_default_invocation(list(argv))
    command.main(args=rewritten, prog_name="sshedit")


__all__ = ["app", "run", "CONFIG_ENV_VAR", "DEFAULT_CONFIG_PATH"]
