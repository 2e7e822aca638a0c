"""Conversion between command-line and config-file port forward syntax.

``ssh -L`` takes ``[bind:]port:host:hostport`` while the ``LocalForward`` and
``RemoteForward`` directives take ``[bind:]port host:hostport``. The helpers here
only reshape strings; they never validate addresses or ports. Input that does not
have a recognizable shape is passed through unchanged.
"""

from __future__ import annotations

from typing import List, NamedTuple


class ForwardConversion(NamedTuple):
    """Outcome of a conversion: the transformed value, or the original on passthrough."""

    value: str
    original: str
    recognized: bool


def split_unbracketed(value: str, sep: str = ":") -> List[str]:
    """Split ``value`` on ``sep`` characters that are not inside ``[...]``.

    Example:
        "8080:[2001:db8::1]:80" -> ["8080", "[2001:db8::1]", "80"]
    """
    segments: List[str] = []
    current: List[str] = []
    depth = 0
    for char in value:
        if char == "[":
            depth += 1
        elif char == "]" and depth > 0:
            depth -= 1
        if char == sep and depth == 0:
            segments.append("".join(current))
            current = []
            continue
        current.append(char)
    segments.append("".join(current))
    return segments


def convert_cli_forward(value: str) -> ForwardConversion:
    segments = split_unbracketed(value)
    if len(segments) == 3:
        listen = segments[0]
        target = f"{segments[1]}:{segments[2]}"
    elif len(segments) == 4:
        listen = f"{segments[0]}:{segments[1]}"
        target = f"{segments[2]}:{segments[3]}"
    else:
        return ForwardConversion(value, value, False)
    return ForwardConversion(f"{listen} {target}", value, True)


def convert_config_forward(value: str) -> ForwardConversion:
    if " " not in value:
        return ForwardConversion(value, value, False)
    listen, target = value.split(" ", 1)
    return ForwardConversion(f"{listen}:{target}", value, True)


def to_config(value: str) -> str:
    """Convert ``[bind:]port:host:hostport`` to ``[bind:]port host:hostport``."""
    return convert_cli_forward(value).value


def to_cli(value: str) -> str:
    """Convert ``[bind:]port host:hostport`` to ``[bind:]port:host:hostport``."""
    return convert_config_forward(value).value


__all__ = [
    "ForwardConversion",
    "convert_cli_forward",
    "convert_config_forward",
    "split_unbracketed",
    "to_cli",
    "to_config",
]
