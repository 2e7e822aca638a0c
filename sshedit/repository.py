"""Host-level view of an SSH config file.

The repository loads the file on every call, applies one change to the parsed
document and writes it back. Port forwards are exchanged in ``ssh`` command-line
syntax and converted to directive syntax at this boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from . import config as config_module
from .core.forwards import to_cli, to_config
from .core.metadata import normalize_tags
from .errors import DuplicateHostError, HostNotFoundError, InvalidValueError
from .models import ConfigDocument, Directive, Host

_SINGLE_KEYS = {
    "host": "HostName",
    "user": "User",
    "port": "Port",
    "proxy_jump": "ProxyJump",
    "dynamic_forward": "DynamicForward",
}

_MULTI_KEYS = {
    "identity_files": "IdentityFile",
    "local_forward": "LocalForward",
    "remote_forward": "RemoteForward",
}

_FORWARD_FIELDS = {"local_forward", "remote_forward"}

_LINE_BREAKS = "\n\r"


@dataclass
class Server:
    alias: str
    host: str = ""
    user: str = ""
    port: str = ""
    identity_files: List[str] = field(default_factory=list)
    local_forward: List[str] = field(default_factory=list)
    remote_forward: List[str] = field(default_factory=list)
    dynamic_forward: str = ""
    proxy_jump: str = ""
    tags: List[str] = field(default_factory=list)

    def matches(self, query: str) -> bool:
        needle = query.lower()
        haystack = [self.alias, self.host, self.user, *self.tags]
        return any(needle in value.lower() for value in haystack)

    def has_tag(self, tag: str) -> bool:
        return tag.lower() in (existing.lower() for existing in self.tags)


def server_from_host(host: Host) -> Server:
    server = Server(alias=host.alias, tags=host.tags)
    for attr, key in _SINGLE_KEYS.items():
        setattr(server, attr, host.get(key))
    for attr, key in _MULTI_KEYS.items():
        values = host.get_all(key)
        if attr in _FORWARD_FIELDS:
            values = [to_cli(value) for value in values]
        setattr(server, attr, values)
    return server


def _set_option(host: Host, key: str, value: str) -> None:
    """Update the first ``key`` directive, appending one if missing; empty removes all."""
    if not value:
        _remove_option(host, key)
        return
    existing = list(host.directives(key))
    if existing:
        existing[0].value = value
        return
    host.append(Directive(key, value, indent=host.node_indent()))


def _identity(value: str) -> str:
    return value


def _set_options(
    host: Host,
    key: str,
    values: List[str],
    encode: Callable[[str], str] = _identity,
    decode: Callable[[str], str] = _identity,
) -> None:
    """Rewrite a repeatable directive, leaving lines whose value is unchanged untouched.

    Existing lines are matched by their decoded value, so a line is only
    re-encoded when its entry actually changed.
    """
    pending = list(values)
    unmatched: List[Directive] = []
    for directive in host.directives(key):
        decoded = decode(directive.value)
        if decoded in pending:
            pending.remove(decoded)
        else:
            unmatched.append(directive)
    for directive, value in zip(unmatched, pending):
        directive.value = encode(value)
    for surplus in unmatched[len(pending):]:
        host.nodes.remove(surplus)
    for value in pending[len(unmatched):]:
        host.append(Directive(key, encode(value), indent=host.node_indent()))


def _remove_option(host: Host, key: str) -> bool:
    existing = list(host.directives(key))
    for directive in existing:
        host.nodes.remove(directive)
    return bool(existing)


def _check_value(field_name: str, value: str, forbidden: str = _LINE_BREAKS) -> None:
    bad = [char for char in forbidden if char in value]
    if bad:
        raise InvalidValueError(field_name, value, bad)


def check_tags(tags: Iterable[str]) -> None:
    for tag in tags:
        _check_value("tag", tag, _LINE_BREAKS + ",")


def check_server(server: Server) -> None:
    """Reject values that cannot be stored on a single config line."""
    _check_value("alias", server.alias, _LINE_BREAKS + " \t")
    if not server.alias:
        raise InvalidValueError("alias", server.alias, [])
    for attr in _SINGLE_KEYS:
        _check_value(attr, str(getattr(server, attr) or ""))
    for attr in _MULTI_KEYS:
        for value in getattr(server, attr):
            _check_value(attr, value)
    check_tags(server.tags)


def apply_server(host: Host, server: Server) -> None:
    """Write the fields of ``server`` onto ``host`` without touching other nodes."""
    check_server(server)
    if host.patterns:
        host.patterns[0] = server.alias
    else:
        host.patterns.append(server.alias)
    for attr, key in _SINGLE_KEYS.items():
        _set_option(host, key, str(getattr(server, attr) or ""))
    for attr, key in _MULTI_KEYS.items():
        values = [value for value in getattr(server, attr) if value]
        if attr in _FORWARD_FIELDS:
            _set_options(host, key, values, encode=to_config, decode=to_cli)
        else:
            _set_options(host, key, values)
    host.tags = server.tags


class Repository:
    """CRUD operations on the concrete Host blocks of one config file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = (path or config_module.default_config_path()).expanduser()

    def load(self) -> ConfigDocument:
        return config_module.load_config(self.path)

    def _save(self, document: ConfigDocument) -> Optional[Path]:
        return config_module.save_config(document, self.path)

    def _require(self, document: ConfigDocument, alias: str) -> Host:
        host = document.find_host(alias)
        if host is None:
            raise HostNotFoundError(alias)
        return host

    def list_servers(self, query: Optional[str] = None, tag: Optional[str] = None) -> List[Server]:
        servers = [server_from_host(host) for host in self.load().concrete_hosts()]
        if query:
            servers = [server for server in servers if server.matches(query)]
        if tag:
            servers = [server for server in servers if server.has_tag(tag)]
        return servers

    def get_server(self, alias: str) -> Server:
        return server_from_host(self._require(self.load(), alias))

    def add_server(self, server: Server) -> Optional[Path]:
        document = self.load()
        if document.find_host(server.alias) is not None:
            raise DuplicateHostError(server.alias)
        host = Host(patterns=[server.alias], source_file=self.path)
        apply_server(host, server)
        document.add_host(host)
        return self._save(document)

    def update_server(self, alias: str, server: Server) -> Optional[Path]:
        document = self.load()
        host = self._require(document, alias)
        other = document.find_host(server.alias)
        if other is not None and other is not host:
            raise DuplicateHostError(server.alias)
        apply_server(host, server)
        return self._save(document)

    def delete_server(self, alias: str) -> Optional[Path]:
        document = self.load()
        document.remove_host(self._require(document, alias))
        return self._save(document)

    def set_tags(self, alias: str, tags: Iterable[str]) -> Optional[Path]:
        tags = list(tags)
        check_tags(tags)
        document = self.load()
        host = self._require(document, alias)
        host.tags = tags
        return self._save(document)

    def add_tags(self, alias: str, tags: Iterable[str]) -> Optional[Path]:
        tags = list(tags)
        check_tags(tags)
        document = self.load()
        host = self._require(document, alias)
        host.tags = host.tags + tags
        return self._save(document)

    def remove_tags(self, alias: str, tags: Iterable[str]) -> Optional[Path]:
        document = self.load()
        host = self._require(document, alias)
        dropped = {tag.lower() for tag in normalize_tags(tags)}
        host.tags = [tag for tag in host.tags if tag.lower() not in dropped]
        return self._save(document)


__all__ = ["Repository", "Server", "apply_server", "check_server", "check_tags", "server_from_host"]
