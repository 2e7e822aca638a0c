from __future__ import annotations

import typer

from . import add, edit, find, forward, remove, show, tag


def register_commands(app: typer.Typer) -> None:
    for module in (show, find, add, edit, remove, tag, forward):
        module.register(app)


__all__ = ["register_commands"]
