"""Tests for ConfigService."""

from pathlib import Path

from doomctl.domain.rules import DoomRule
from doomctl.services.config import ConfigService
from tests.conftest import make_options


def test_show_effective_configuration(tmp_path: Path) -> None:
    opts = make_options(tmp_path, DoomRule.default())
    result = ConfigService(opts).show(config_path=tmp_path / "doom.toml")
    assert result.ok
    assert result.op == "show_config"
    assert result.data["doom_path"] == str(tmp_path)
    assert result.data["circle"] == "0 0 * * 0"
    assert result.data["config_path"] == str(tmp_path / "doom.toml")
    assert result.data["rules"] == [DoomRule.default().describe()]


def test_show_without_config_file(tmp_path: Path) -> None:
    result = ConfigService(make_options(tmp_path)).show()
    assert result.data["config_path"] is None
    assert result.data["rules"] == []
