from __future__ import annotations

import os
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from .models import Blank, ConfigDocument, Directive, Host, StandaloneComment

DEFAULT_CONFIG_PATH = "~/.ssh/config"
CONFIG_ENV_VAR = "SSHEDIT_CONFIG"
BACKUP_DIR_NAME = "backups"

_BLOCK_KEYWORDS = {"host", "match"}
_KEY_VALUE = re.compile(r"^([^\s=]+)(\s*=\s*|\s+)(.*)$")


def default_config_path() -> Path:
    """Return the config file edited when no --target is given."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override or DEFAULT_CONFIG_PATH).expanduser()


def _backup_file(path: Path) -> Path:
    """Create a timestamped backup of the given file in a sibling backups/ directory."""
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    backup_dir = path.parent / BACKUP_DIR_NAME
    backup_dir.mkdir(parents=True, exist_ok=True)
    backup_path = backup_dir / f"{path.name}.backup.{timestamp}"
    shutil.copy2(path, backup_path)
    return backup_path


def _comment_text(text: str) -> str:
    """Return the text after a ``#`` marker with one leading space removed."""
    return text[1:] if text.startswith(" ") else text


def _split_inline_comment(text: str) -> Tuple[str, str]:
    """Split ``text`` at the first ``#`` that is outside quotes and starts a word."""
    in_quotes = False
    for idx, char in enumerate(text):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "#" and not in_quotes and (idx == 0 or text[idx - 1].isspace()):
            return text[:idx].rstrip(), _comment_text(text[idx + 1 :])
    return text.rstrip(), ""


def _split_key_value(content: str) -> Tuple[str, str, str]:
    match = _KEY_VALUE.match(content)
    if match is None:
        return content, "", ""
    return match.group(1), match.group(2), match.group(3)


def _parse_node(line: str):
    body = line.lstrip()
    indent = line[: len(line) - len(body)]
    if not body.strip():
        node = Blank(raw=line)
    elif body.startswith("#"):
        node = StandaloneComment(_comment_text(body[1:]), indent=indent, raw=line)
    else:
        content, comment = _split_inline_comment(body)
        key, separator, value = _split_key_value(content)
        node = Directive(key, value, comment=comment, indent=indent, separator=separator, raw=line)
    node.mark_clean()
    return node


def parse_config_text(text: str, source_file: Optional[Path] = None) -> ConfigDocument:
    """Parse ssh_config text into host blocks, keeping comments and layout."""
    document = ConfigDocument(
        path=source_file,
        trailing_newline=text.endswith("\n") or not text,
        newline="\r\n" if "\r\n" in text else "\n",
    )
    current = Host(patterns=[], keyword="", source_file=source_file)
    document.hosts.append(current)

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            content, comment = _split_inline_comment(line.lstrip())
            keyword, _, rest = _split_key_value(content)
            if keyword.lower() in _BLOCK_KEYWORDS:
                current = Host(
                    patterns=rest.split(),
                    keyword=keyword,
                    comment=comment,
                    source_file=source_file,
                    lineno=lineno,
                    raw=line,
                )
                current.mark_clean()
                document.hosts.append(current)
                continue
        current.nodes.append(_parse_node(line))

    preamble = document.hosts[0]
    if not preamble.nodes:
        document.hosts.pop(0)
    return document


def render_config(document: ConfigDocument) -> str:
    """Render a document back to ssh_config text."""
    lines: List[str] = []
    for host in document.hosts:
        lines.extend(host.render_lines())
    text = document.newline.join(lines)
    if text and document.trailing_newline:
        text += document.newline
    return text


def load_config(path: Path) -> ConfigDocument:
    """Parse ``path``; a missing file yields an empty document."""
    path = path.expanduser()
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            text = handle.read()
    except FileNotFoundError:
        return ConfigDocument(path=path)
    return parse_config_text(text, source_file=path)


def save_config(document: ConfigDocument, path: Optional[Path] = None) -> Optional[Path]:
    """Write ``document`` to disk, backing up any existing file first."""
    target = path or document.path
    if target is None:
        raise ValueError("No target path given for the SSH config.")
    target = target.expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)

    backup: Optional[Path] = None
    if target.exists():
        backup = _backup_file(target)

    with target.open("w", encoding="utf-8", newline="") as handle:
        handle.write(render_config(document))
    return backup


__all__ = [
    "BACKUP_DIR_NAME",
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "default_config_path",
    "load_config",
    "parse_config_text",
    "render_config",
    "save_config",
]
