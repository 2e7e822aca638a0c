"""Exceptions raised by the host repository.

The editing primitives in :mod:`sshedit.core` never raise on malformed input;
these errors describe requests the repository cannot satisfy.
"""

from __future__ import annotations

from typing import List


class SSHEditError(Exception):
    """Base exception for sshedit errors."""


class HostNotFoundError(SSHEditError, LookupError):
    """Raised when no concrete Host block has the requested alias."""

    def __init__(self, alias: str) -> None:
        super().__init__(f"No host found matching '{alias}'")
        self.alias = alias


class DuplicateHostError(SSHEditError, ValueError):
    """Raised when adding a host whose alias is already defined."""

    def __init__(self, alias: str) -> None:
        super().__init__(f"Host '{alias}' already exists")
        self.alias = alias


class InvalidValueError(SSHEditError, ValueError):
    """Raised when a value cannot be stored on a single config line."""

    def __init__(self, field_name: str, value: str, forbidden: List[str]) -> None:
        if forbidden:
            shown = ", ".join(repr(char) for char in forbidden)
            message = f"Invalid {field_name} {value!r}: must not contain {shown}"
        else:
            message = f"Invalid {field_name} {value!r}: must not be empty"
        super().__init__(message)
        self.field_name = field_name
        self.value = value


__all__ = ["DuplicateHostError", "HostNotFoundError", "InvalidValueError", "SSHEditError"]
