from typer.testing import CliRunner

from sshedit import cli as cli_module
from sshedit.cli import app
from sshedit.commands import common as common_module
from sshedit.repository import Repository


runner = CliRunner()


def test_help_lists_registered_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("add", "edit", "remove", "show", "list", "tag", "forward"):
        assert name in result.stdout


def test_add_command_appends_new_block(sample_config):
    result = runner.invoke(
        app,
        [
            "add", "web",
            "--hostname", "web.example",
            "--port", "2200",
            "-L", "8080:localhost:80",
            "--tag", "edge",
            "--target", str(sample_config),
        ],
    )
    assert result.exit_code == 0
    assert "Added Host block web" in result.stdout
    text = sample_config.read_text()
    assert "Host web\n    # tag: edge\n    HostName web.example\n    Port 2200\n    LocalForward 8080 localhost:80\n" in text


def test_add_command_rejects_duplicate(sample_config):
    result = runner.invoke(app, ["add", "app", "--target", str(sample_config)])
    assert result.exit_code == 1
    assert "already exists" in result.stdout


def test_add_uses_default_target(monkeypatch, tmp_path):
    target = tmp_path / "config"
    monkeypatch.setattr(common_module.config_module, "default_config_path", lambda: target)

    result = runner.invoke(app, ["add", "solo", "--user", "me"])
    assert result.exit_code == 0
    assert target.read_text() == "Host solo\n    User me\n"


def test_edit_command_updates_options(sample_config):
    result = runner.invoke(
        app,
        ["edit", "app", "--user", "", "--port", "2022", "--rename", "application", "--target", str(sample_config)],
    )
    assert result.exit_code == 0
    server = Repository(sample_config).get_server("application")
    assert server.user == ""
    assert server.port == "2022"
    assert server.tags == ["prod", "web"]
    assert server.local_forward == ["8080:localhost:80"]


def test_edit_command_reports_missing(sample_config):
    result = runner.invoke(app, ["edit", "ghost", "--user", "x", "--target", str(sample_config)])
    assert result.exit_code == 1
    assert "No host found" in result.stdout


def test_remove_command_with_confirmation(sample_config):
    result = runner.invoke(app, ["remove", "db", "--target", str(sample_config)], input="y\n")
    assert result.exit_code == 0
    assert "Removed Host block db" in result.stdout
    assert "Host db" not in sample_config.read_text()


def test_remove_command_cancelled(sample_config):
    result = runner.invoke(app, ["remove", "db", "--target", str(sample_config)], input="n\n")
    assert result.exit_code == 1
    assert "Cancelled" in result.stdout
    assert "Host db" in sample_config.read_text()


def test_show_displays_forwards_in_cli_syntax(sample_config):
    result = runner.invoke(app, ["show", "db", "--target", str(sample_config)])
    assert result.exit_code == 0
    assert "db.internal" in result.stdout
    assert "127.0.0.1:5432:localhost:5432" in result.stdout
    assert "data" in result.stdout


def test_show_reports_missing(sample_config):
    result = runner.invoke(app, ["show", "missing", "--target", str(sample_config)])
    assert result.exit_code == 1
    assert "No host found matching 'missing'" in result.stdout


def test_list_filters_by_tag(sample_config):
    result = runner.invoke(app, ["list", "--tag", "prod", "--target", str(sample_config)])
    assert result.exit_code == 0
    assert "app.example.com" in result.stdout
    assert "db.internal" not in result.stdout


def test_list_reports_missing(sample_config):
    result = runner.invoke(app, ["list", "nomatch", "--target", str(sample_config)])
    assert result.exit_code == 0
    assert "No results" in result.stdout


def test_rewrite_default_invocation():
    assert cli_module._rewrite_default_invocation([]) == []
    assert cli_module._rewrite_default_invocation(["app"]) == ["show", "app"]
    assert cli_module._rewrite_default_invocation(["app", "-t", "cfg"]) == ["show", "app", "-t", "cfg"]
    assert cli_module._rewrite_default_invocation(["tag", "list"]) == ["tag", "list"]
    assert cli_module._rewrite_default_invocation(["--help"]) == ["--help"]
