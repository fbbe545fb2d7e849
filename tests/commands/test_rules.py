"""Tests for ``doomctl rules``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from doomctl.cli import cli


class TestRulesList:
    def test_default_rule(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "rules", "list"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["count"] == 1
        assert data["items"][0]["size"] == "100M"
        assert data["items"][0]["age"] == "1w"

    def test_toml_rules_appended(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "doom.toml").write_text(
            'policy = "all"\n[[rules]]\nname = "*.tmp"\n'
        )
        result = cli_runner.invoke(cli, ["--json", "rules", "list"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["policy"] == "all"
        assert [item["name"] for item in data["items"]] == ["*", "*.tmp"]

    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules", "list"])
        assert result.exit_code == 0, result.output
        assert "policy: any" in result.output
        assert "100M" in result.output


class TestRulesTest:
    def test_delete_verdict(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["rules", "test", "big.iso", "--size", "150M", "--age", "8d"]
        )
        assert result.exit_code == 0, result.output
        assert "DELETE" in result.output

    def test_keep_verdict(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["rules", "test", "small.txt", "--size", "50M", "--age", "8d"]
        )
        assert result.exit_code == 0, result.output
        assert "KEEP" in result.output

    def test_json(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RULE_NAME", r"\.log$")
        result = cli_runner.invoke(
            cli, ["--json", "rules", "test", "app.log", "--size", "1G", "--age", "1M"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["delete"] is True
        assert data["age"] == "1M"

    def test_bad_size(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules", "test", "f", "--size", "10Q", "--age", "1d"])
        assert result.exit_code == 1
        assert "INVALID_FORMAT" in result.output

    def test_size_required(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules", "test", "f", "--age", "1d"])
        assert result.exit_code == 2
