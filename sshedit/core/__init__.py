"""Editing primitives shared by the repository and the CLI."""

from .forwards import to_cli, to_config
from .metadata import extract_tags, set_tags

__all__ = ["extract_tags", "set_tags", "to_cli", "to_config"]
