"""Smoke tests for the CLI."""

import json

from typer.testing import CliRunner

from wstools.cli import app

runner = CliRunner()


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "tools" in result.stdout


def test_version():
    from wstools import __version__

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_tools_list():
    result = runner.invoke(app, ["tools", "list"])
    assert result.exit_code == 0
    for name in ("search_files", "read_file", "write_file"):
        assert name in result.stdout


def test_tools_show():
    result = runner.invoke(app, ["tools", "show", "write_file"])
    assert result.exit_code == 0
    assert "create_dirs" in result.stdout


def test_tools_show_unknown():
    result = runner.invoke(app, ["tools", "show", "nope"])
    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_tools_run_write_and_read(workspace):
    result = runner.invoke(
        app,
        ["tools", "run", "write_file", "--root", str(workspace), "-i", '{"path": "out/log.txt", "content": "hello"}'],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "ok": True,
        "data": {"path": "out/log.txt", "bytes_written": 5, "mode": "overwrite"},
    }
    assert (workspace / "out" / "log.txt").read_text() == "hello"

    result = runner.invoke(app, ["tools", "run", "read_file", "--root", str(workspace), "-i", '{"path": "out/log.txt"}'])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"]["content"] == "hello"


def test_tools_run_failure_exit_code(workspace):
    result = runner.invoke(app, ["tools", "run", "read_file", "--root", str(workspace), "-i", '{"path": "../x"}'])
    assert result.exit_code == 1
    assert json.loads(result.stdout) == {"ok": False, "error": "path must stay within workspace"}


def test_tools_run_invalid_json(workspace):
    result = runner.invoke(app, ["tools", "run", "read_file", "--root", str(workspace), "-i", "{nope"])
    assert result.exit_code == 2


def test_tools_run_missing_root(temp_dir):
    result = runner.invoke(app, ["tools", "run", "read_file", "--root", str(temp_dir / "missing"), "-i", "{}"])
    assert result.exit_code == 2


def test_config_show(workspace, monkeypatch):
    monkeypatch.setenv("WSTOOLS_WORKSPACE_ROOT", str(workspace))

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    assert "Workspace Root" in result.stdout
