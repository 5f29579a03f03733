"""
Test CLI
========

The ``envlayer`` command line, driven through click's CliRunner.
"""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from envlayer.cli import main


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def project(tmp_path):
    (tmp_path / ".env").write_text(
        "NAME=envlayer\n"
        "CACHE_SCOPE=app:\n"
        "CACHE_BOOK_DATABASE=10\n"
        'GREETING="hello world"\n',
        encoding="utf-8",
    )
    (tmp_path / ".env.prod.local").write_text("NAME=prod-local\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


def test_get(runner, project):
    result = runner.invoke(main, ["--dir", str(project), "get", "NAME"])

    assert result.exit_code == 0
    assert result.output.strip() == "prod-local"


def test_get_scoped(runner, project):
    args = ["--dir", str(project), "get", "DATABASE", "--prefix", "CACHE", "--category", "BOOK"]
    result = runner.invoke(main, args)

    assert result.exit_code == 0
    assert result.output.strip() == "10"


def test_get_missing(runner, project):
    result = runner.invoke(main, ["--dir", str(project), "get", "ENVLAYER_MISSING_KEY"])

    assert result.exit_code == 1
    assert "ENVLAYER_MISSING_KEY is not set" in result.output


def test_get_missing_with_default(runner, project):
    args = ["--dir", str(project), "get", "ENVLAYER_MISSING_KEY", "--default", "fallback"]
    result = runner.invoke(main, args)

    assert result.exit_code == 0
    assert result.output.strip() == "fallback"


def test_show_json_scoped(runner, project):
    args = ["--dir", str(project), "show", "--prefix", "CACHE", "--format", "json"]
    result = runner.invoke(main, args)

    assert result.exit_code == 0
    assert json.loads(result.output) == {"SCOPE": "app:", "BOOK_DATABASE": "10"}


def test_show_yaml_scoped(runner, project):
    args = ["--dir", str(project), "show", "-p", "CACHE", "-c", "BOOK", "--format", "yaml"]
    result = runner.invoke(main, args)

    assert result.exit_code == 0
    assert yaml.safe_load(result.output) == {"DATABASE": "10"}


def test_show_dotenv_quotes_when_needed(runner, project):
    result = runner.invoke(main, ["--dir", str(project), "show"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "NAME=prod-local" in lines
    assert 'GREETING="hello world"' in lines


def test_files(runner, project):
    result = runner.invoke(main, ["--dir", str(project), "files"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == f"root: {project}"
    assert lines[1] == "APP_ENV: prod"
    assert lines[2:] == [str(project / ".env"), str(project / ".env.prod.local")]


def test_path(runner, project):
    result = runner.invoke(main, ["--dir", str(project), "path", "storage", "logs"])

    assert result.exit_code == 0
    assert result.output.strip() == str(project / "storage" / "logs")


def test_malformed_file_exits_with_error(runner, tmp_path):
    (tmp_path / ".env").write_text("=broken\n", encoding="utf-8")

    result = runner.invoke(main, ["--dir", str(tmp_path), "show"])

    assert result.exit_code == 2
    assert "Error:" in result.output
