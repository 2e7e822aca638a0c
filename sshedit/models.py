"""In-memory model of an ssh_config document.

A document is an ordered list of :class:`Host` blocks. Each block owns an ordered
list of nodes (directives, standalone comments and blank lines). Nodes parsed from
disk remember their original line so that untouched content renders byte-for-byte.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

DEFAULT_INDENT = "    "


@dataclass(eq=False)
class Directive:
    """A ``Key value`` line, optionally followed by an inline ``# comment``."""

    key: str
    value: str
    comment: str = ""
    indent: str = DEFAULT_INDENT
    separator: str = " "
    raw: Optional[str] = None
    _parsed: Optional[Tuple[str, str, str]] = field(default=None, repr=False, compare=False)

    def mark_clean(self) -> None:
        self._parsed = (self.key, self.value, self.comment)

    def render(self) -> str:
        if self.raw is not None and self._parsed == (self.key, self.value, self.comment):
            return self.raw
        line = f"{self.indent}{self.key}{self.separator or ' '}{self.value}".rstrip()
        if self.comment:
            line += f" # {self.comment}"
        return line


@dataclass(eq=False)
class StandaloneComment:
    """A comment-only line; ``comment`` holds the text after ``#``."""

    comment: str
    indent: str = DEFAULT_INDENT
    raw: Optional[str] = None
    _parsed: Optional[str] = field(default=None, repr=False, compare=False)

    def mark_clean(self) -> None:
        self._parsed = self.comment

    def render(self) -> str:
        if self.raw is not None and self._parsed == self.comment:
            return self.raw
        if not self.comment:
            return f"{self.indent}#"
        return f"{self.indent}# {self.comment}"


@dataclass(eq=False)
class Blank:
    raw: str = ""

    def mark_clean(self) -> None:
        pass

    def render(self) -> str:
        return self.raw


Node = Union[Directive, StandaloneComment, Blank]


@dataclass(eq=False)
class Host:
    """One ``Host`` (or ``Match``) block.

    The leading block of a file, before any ``Host`` line, is represented by a
    Host with an empty ``keyword``; it renders without a header line.
    """

    patterns: List[str]
    nodes: List[Node] = field(default_factory=list)
    keyword: str = "Host"
    comment: str = ""
    source_file: Optional[Path] = None
    lineno: int = 0
    raw: Optional[str] = None
    _parsed: Optional[Tuple[Tuple[str, ...], str]] = field(default=None, repr=False, compare=False)

    def mark_clean(self) -> None:
        self._parsed = (tuple(self.patterns), self.comment)

    @property
    def is_preamble(self) -> bool:
        return not self.keyword

    @property
    def is_match(self) -> bool:
        return self.keyword.lower() == "match"

    @property
    def is_concrete(self) -> bool:
        """True for ``Host`` blocks whose first pattern names a single host."""
        if self.is_preamble or self.is_match or not self.patterns:
            return False
        return not any(char in self.patterns[0] for char in "*?!")

    @property
    def alias(self) -> str:
        return self.patterns[0] if self.patterns else ""

    @property
    def tags(self) -> List[str]:
        from .core.metadata import extract_tags

        return extract_tags(self)

    @tags.setter
    def tags(self, value: List[str]) -> None:
        from .core.metadata import set_tags

        set_tags(self, value)

    def directives(self, key: Optional[str] = None) -> Iterator[Directive]:
        lower = key.lower() if key else None
        for node in self.nodes:
            if isinstance(node, Directive) and (lower is None or node.key.lower() == lower):
                yield node

    def get(self, key: str, default: str = "") -> str:
        """Return the first value for ``key`` (ssh uses the first occurrence)."""
        for directive in self.directives(key):
            return directive.value
        return default

    def get_all(self, key: str) -> List[str]:
        return [directive.value for directive in self.directives(key)]

    def node_indent(self) -> str:
        for directive in self.directives():
            return directive.indent
        return "" if self.is_preamble else DEFAULT_INDENT

    def append(self, node: Node) -> None:
        """Append ``node`` ahead of any trailing blank lines of the block."""
        index = len(self.nodes)
        while index > 0 and isinstance(self.nodes[index - 1], Blank):
            index -= 1
        self.nodes.insert(index, node)

    def header(self) -> Optional[str]:
        if self.is_preamble:
            return None
        if self.raw is not None and self._parsed == (tuple(self.patterns), self.comment):
            return self.raw
        line = f"{self.keyword} {' '.join(self.patterns)}"
        if self.comment:
            line += f" # {self.comment}"
        return line

    def render_lines(self) -> List[str]:
        lines: List[str] = []
        header = self.header()
        if header is not None:
            lines.append(header)
        lines.extend(node.render() for node in self.nodes)
        return lines


@dataclass(eq=False)
class ConfigDocument:
    hosts: List[Host] = field(default_factory=list)
    path: Optional[Path] = None
    trailing_newline: bool = True
    newline: str = "\n"

    def find_host(self, alias: str) -> Optional[Host]:
        for host in self.hosts:
            if host.is_concrete and alias in host.patterns:
                return host
        return None

    def concrete_hosts(self) -> List[Host]:
        return [host for host in self.hosts if host.is_concrete]

    def add_host(self, host: Host) -> None:
        """Append a block, separating it from the previous one by a blank line."""
        if self.hosts:
            previous = self.hosts[-1]
            has_content = previous.header() is not None or previous.nodes
            if has_content and not (previous.nodes and isinstance(previous.nodes[-1], Blank)):
                previous.nodes.append(Blank())
        self.hosts.append(host)

    def remove_host(self, host: Host) -> None:
        """Remove a block; blank lines left dangling at the end of the file go too."""
        was_last = self.hosts[-1] is host
        self.hosts.remove(host)
        if was_last and self.hosts:
            last = self.hosts[-1]
            while last.nodes and isinstance(last.nodes[-1], Blank):
                last.nodes.pop()


__all__ = [
    "Blank",
    "ConfigDocument",
    "DEFAULT_INDENT",
    "Directive",
    "Host",
    "Node",
    "StandaloneComment",
]
