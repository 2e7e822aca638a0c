from pathlib import Path

import pytest

from sshedit.models import Directive, Host, StandaloneComment

SAMPLE_CONFIG = """\
# Managed by hand
Include ~/.ssh/config.d/*.conf

Host app
    # tag: prod, web
    HostName app.example.com
    User deploy
    LocalForward 8080 localhost:80

Host db  # primary database
    HostName=db.internal
    User git # tag: data
    RemoteForward 127.0.0.1:5432 localhost:5432

Host *.example.com
    User admin
"""


@pytest.fixture()
def sample_config(tmp_path) -> Path:
    path = tmp_path / "config"
    path.write_text(SAMPLE_CONFIG)
    return path


@pytest.fixture()
def host_factory():
    def _make(*nodes, patterns=("app",)):
        return Host(patterns=list(patterns), nodes=list(nodes))

    return _make


@pytest.fixture()
def kv():
    def _make(key, value, comment=""):
        return Directive(key, value, comment=comment)

    return _make


@pytest.fixture()
def note():
    def _make(text):
        return StandaloneComment(text)

    return _make
