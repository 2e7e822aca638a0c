from sshedit.core.metadata import (
    extract_tags,
    find_tag_comment,
    format_tag_comment,
    normalize_tags,
    parse_tags,
    set_tags,
)
from sshedit.models import Blank, Directive, StandaloneComment


def test_extract_tags_from_standalone_comment(host_factory, note):
    host = host_factory(note("tag: foo, bar"))
    assert extract_tags(host) == ["foo", "bar"]


def test_extract_tags_from_inline_comment(host_factory, kv):
    host = host_factory(kv("User", "git", comment="tag: deploy"))
    assert extract_tags(host) == ["deploy"]


def test_extract_tags_ignores_other_comments(host_factory, kv, note):
    host = host_factory(note("just a note"), kv("HostName", "example.com", comment="legacy"), Blank())
    assert extract_tags(host) == []


def test_extract_tags_requires_exact_prefix(host_factory, note):
    assert extract_tags(host_factory(note("tags: foo"))) == []
    assert extract_tags(host_factory(note("Tag: foo"))) == []
    assert extract_tags(host_factory(note("tag:foo"))) == []


def test_extract_tags_drops_empty_pieces(host_factory, note):
    host = host_factory(note("tag: foo, , bar ,"))
    assert extract_tags(host) == ["foo", "bar"]


def test_first_tag_comment_wins(host_factory, kv, note):
    host = host_factory(kv("User", "git", comment="tag: inline"), note("tag: standalone"))
    assert extract_tags(host) == ["inline"]

    host = host_factory(note("tag: standalone"), kv("User", "git", comment="tag: inline"))
    assert extract_tags(host) == ["standalone"]


def test_set_tags_inserts_comment_at_top(host_factory, kv):
    hostname = kv("HostName", "example.com")
    host = host_factory(hostname)

    set_tags(host, [" foo ", "bar", "Foo"])

    assert len(host.nodes) == 2
    assert isinstance(host.nodes[0], StandaloneComment)
    assert host.nodes[0].comment == "tag: foo, bar"
    assert host.nodes[1] is hostname
    assert extract_tags(host) == ["foo", "bar"]


def test_set_tags_updates_existing_comment_in_place(host_factory, kv, note):
    hostname = kv("HostName", "example.com")
    existing = note("tag: old")
    host = host_factory(hostname, existing)

    set_tags(host, ["new", "other"])
    set_tags(host, ["latest"])

    assert host.nodes == [hostname, existing]
    assert existing.comment == "tag: latest"
    assert sum(1 for node in host.nodes if node.comment.startswith("tag: ")) == 1
    assert find_tag_comment(host).node is existing


def test_set_tags_updates_inline_comment(host_factory, kv):
    user = kv("User", "git", comment="tag: deploy")
    host = host_factory(user)

    set_tags(host, ["deploy", "ci"])

    assert host.nodes == [user]
    assert user.comment == "tag: deploy, ci"


def test_set_tags_empty_removes_only_tag_node(host_factory, kv, note):
    first = kv("HostName", "example.com")
    other = note("keep me")
    tag = note("tag: foo")
    last = kv("User", "git")
    host = host_factory(first, other, tag, last)

    set_tags(host, [])

    assert host.nodes == [first, other, last]
    assert other.comment == "keep me"


def test_set_tags_empty_clears_inline_comment_but_keeps_directive(host_factory, kv):
    user = kv("User", "git", comment="tag: deploy")
    host = host_factory(user)

    set_tags(host, ["  ", ""])

    assert host.nodes == [user]
    assert user.comment == ""
    assert user.value == "git"


def test_set_tags_empty_without_comment_is_noop(host_factory, kv):
    user = kv("User", "git")
    host = host_factory(user)

    set_tags(host, None)

    assert host.nodes == [user]


def test_host_tags_property_round_trips(host_factory, kv):
    host = host_factory(kv("HostName", "example.com"))

    host.tags = ["Prod", "web", "PROD"]

    assert host.tags == ["Prod", "web"]
    host.tags = []
    assert host.tags == []
    assert len(host.nodes) == 1


def test_new_tag_comment_uses_block_indent(host_factory):
    host = host_factory(Directive("User", "git", indent="\t"))
    set_tags(host, ["x"])
    assert host.nodes[0].render() == "\t# tag: x"


def test_helpers():
    assert parse_tags("prod, web, critical") == ["prod", "web", "critical"]
    assert parse_tags("") == []
    assert normalize_tags([" a", "B", "b ", "", "A"]) == ["a", "B"]
    assert format_tag_comment(["a", "b"]) == "tag: a, b"
