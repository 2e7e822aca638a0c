"""Tag storage for SSH hosts.

Tags live in a single comment inside the host block, either on its own line or
trailing a directive::

    Host app
        # tag: prod, web
        HostName app.example.com

Only the first comment starting with ``tag: `` is recognized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..models import Directive, Host, Node, StandaloneComment

TAG_PREFIX = "tag: "


@dataclass
class TagSlot:
    """Location of the tag comment inside a host's node list."""

    index: int
    node: Node
    inline: bool

    @property
    def text(self) -> str:
        return self.node.comment


def parse_tags(value: str) -> List[str]:
    """
    Parse comma-separated tags from a value string.

    Args:
        value: Comma-separated tag string

    Returns:
        List of tag strings with whitespace trimmed

    Example:
        "prod, web, critical" -> ["prod", "web", "critical"]
    """
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Trim, drop empties and de-duplicate case-insensitively, keeping first spelling."""
    seen: set[str] = set()
    normalized: List[str] = []
    for tag in tags or []:
        cleaned = tag.strip()
        if not cleaned or cleaned.lower() in seen:
            continue
        seen.add(cleaned.lower())
        normalized.append(cleaned)
    return normalized


def format_tag_comment(tags: List[str]) -> str:
    return TAG_PREFIX + ", ".join(tags)


def _candidate_comment(node: Node) -> Optional[str]:
    if isinstance(node, StandaloneComment):
        return node.comment
    if isinstance(node, Directive) and node.comment:
        return node.comment
    return None


def find_tag_comment(host: Host) -> Optional[TagSlot]:
    for index, node in enumerate(host.nodes):
        candidate = _candidate_comment(node)
        if candidate is not None and candidate.startswith(TAG_PREFIX):
            return TagSlot(index=index, node=node, inline=isinstance(node, Directive))
    return None


def extract_tags(host: Host) -> List[str]:
    """Return the tags stored on ``host``, or an empty list."""
    slot = find_tag_comment(host)
    if slot is None:
        return []
    return parse_tags(slot.text[len(TAG_PREFIX):])


def set_tags(host: Host, tags: Optional[Iterable[str]]) -> None:
    """Replace the tags stored on ``host``.

    An existing tag comment is rewritten in place; otherwise a new comment line is
    inserted at the top of the block. An empty tag list removes the comment line,
    or clears the inline comment of the directive carrying it.
    """
    normalized = normalize_tags(tags)
    slot = find_tag_comment(host)

    if not normalized:
        if slot is None:
            return
        if slot.inline:
            slot.node.comment = ""
        else:
            del host.nodes[slot.index]
        return

    text = format_tag_comment(normalized)
    if slot is not None:
        slot.node.comment = text
        return
    host.nodes.insert(0, StandaloneComment(text, indent=host.node_indent()))


__all__ = [
    "TAG_PREFIX",
    "TagSlot",
    "extract_tags",
    "find_tag_comment",
    "format_tag_comment",
    "normalize_tags",
    "parse_tags",
    "set_tags",
]
