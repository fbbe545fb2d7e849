"""Tests for ``doomctl config``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from doomctl.cli import cli


def test_defaults(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "config"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)["data"]
    assert data["doom_path"] == "."
    assert data["doom_export"] == "/var/log"
    assert data["circle"] == "0 0 * * 0"
    assert data["config_path"] is None


def test_env_and_file(
    cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "doom.toml").write_text('doom_circle = "0 3 * * *"\n')
    monkeypatch.setenv("DOOM_PATH", "/srv/uploads")
    result = cli_runner.invoke(cli, ["--json", "config"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)["data"]
    assert data["doom_path"] == "/srv/uploads"
    assert data["circle"] == "0 3 * * *"
    assert data["config_path"] == str((tmp_path / "doom.toml").resolve())


def test_explicit_config_flag(cli_runner: CliRunner, tmp_path: Path) -> None:
    custom = tmp_path / "job.toml"
    custom.write_text('rule_size = "1G"\n')
    result = cli_runner.invoke(cli, ["--json", "-c", str(custom), "config"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["data"]["rules"][0]["size"] == "1G"


def test_human(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["config"])
    assert result.exit_code == 0, result.output
    assert "circle: 0 0 * * 0" in result.output
    assert "config_path: (none)" in result.output
