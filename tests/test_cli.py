"""Tests for the ensurable CLI."""

import logging

import pytest
import yaml
from click.testing import CliRunner

from ensurable import __version__
from ensurable.cli import main
from ensurable.config import Settings, configure_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo the logging setup each CLI invocation applies."""
    package_logger = logging.getLogger("ensurable")
    saved = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    package_logger.handlers[:] = saved[0]
    package_logger.setLevel(saved[1])
    package_logger.propagate = saved[2]


def _manifest(tmp_path, targets) -> str:
    path = tmp_path / "targets.yaml"
    path.write_text(yaml.dump({"targets": targets}))
    return str(path)


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_file_command_creates_then_reports_ok(tmp_path):
    path = tmp_path / "hello.txt"
    runner = CliRunner()

    first = runner.invoke(main, ["file", str(path), "--content", "hi"])
    assert first.exit_code == 0
    assert "CHANGED" in first.output
    assert path.read_text() == "hi"

    second = runner.invoke(main, ["file", str(path), "--content", "other"])
    assert second.exit_code == 0
    assert "OK" in second.output
    assert path.read_text() == "hi"


def test_dir_and_absent_commands(tmp_path):
    path = tmp_path / "cache"
    runner = CliRunner()
    assert runner.invoke(main, ["dir", str(path)]).exit_code == 0
    assert path.is_dir()
    assert runner.invoke(main, ["absent", str(path)]).exit_code == 0
    assert not path.exists()


def test_conflict_exits_non_zero(tmp_path):
    result = CliRunner().invoke(main, ["file", str(tmp_path)])
    assert result.exit_code == 1
    assert "FAILED" in result.output


def test_check_command(tmp_path):
    runner = CliRunner()
    good = _manifest(tmp_path, [{"kind": "file", "path": "a"}])
    result = runner.invoke(main, ["check", good])
    assert result.exit_code == 0
    assert "Valid" in result.output

    bad = _manifest(tmp_path, [{"kind": "pipe", "path": "a"}])
    result = runner.invoke(main, ["check", bad])
    assert result.exit_code == 1
    assert "invalid kind" in result.output


def test_apply_manifest(tmp_path):
    manifest = _manifest(
        tmp_path,
        [
            {"kind": "directory", "path": "build"},
            {"kind": "file", "path": "build/VERSION", "content": "1.0"},
        ],
    )
    result = CliRunner().invoke(main, ["apply", manifest])
    assert result.exit_code == 0
    assert (tmp_path / "build" / "VERSION").read_text() == "1.0"


def test_apply_continues_after_failure(tmp_path):
    (tmp_path / "blocker").mkdir()
    manifest = _manifest(
        tmp_path,
        [
            {"kind": "file", "path": "blocker"},
            {"kind": "file", "path": "after.txt"},
        ],
    )
    result = CliRunner().invoke(main, ["apply", manifest])
    assert result.exit_code == 1
    assert "1 of 2" in result.output
    assert (tmp_path / "after.txt").is_file()


def test_apply_dry_run_changes_nothing(tmp_path):
    manifest = _manifest(tmp_path, [{"kind": "file", "path": "planned.txt"}])
    result = CliRunner().invoke(main, ["apply", manifest, "--dry-run"])
    assert result.exit_code == 0
    assert "would change" in result.output
    assert not (tmp_path / "planned.txt").exists()


def test_apply_invalid_manifest(tmp_path):
    manifest = _manifest(tmp_path, [{"kind": "file"}])
    result = CliRunner().invoke(main, ["apply", manifest])
    assert result.exit_code == 1
    assert "invalid" in result.output


def test_log_level_option(tmp_path):
    result = CliRunner().invoke(main, ["--log-level", "debug", "dir", str(tmp_path)])
    assert result.exit_code == 0
    assert logging.getLogger("ensurable").level == logging.DEBUG


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ENSURABLE_LOG_LEVEL", "info")
    assert Settings.from_env().log_level == "INFO"
    monkeypatch.setenv("ENSURABLE_LOG_LEVEL", "chatty")
    assert Settings.from_env().log_level == "WARNING"
    monkeypatch.delenv("ENSURABLE_LOG_LEVEL")
    assert Settings.from_env().log_level == "WARNING"


def test_configure_logging_does_not_propagate():
    configure_logging("info")
    package_logger = logging.getLogger("ensurable")
    assert package_logger.propagate is False
    assert len(package_logger.handlers) == 1
    configure_logging("debug")
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG


def test_check_command_on_directory(tmp_path):
    result = CliRunner().invoke(main, ["check", str(tmp_path)])
    assert result.exit_code == 1
    assert "Cannot read manifest" in result.output
