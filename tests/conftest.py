"""Shared pytest fixtures and test helpers for doomctl tests."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from doomctl.config.logging import configure_logging
from doomctl.domain.options import DoomOptions
from doomctl.domain.rules import DoomRule, RulePolicy, RuleSet

DAY = 86400

# Every variable the settings layer reads; cleared so the host env never leaks in.
_ENV_VARS = (
    "DOOM_PATH",
    "DOOM_EXPORT",
    "DOOM_CIRCLE",
    "DOOM_CONFIG",
    "RULE_AGE",
    "RULE_SIZE",
    "RULE_NAME",
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear doom env vars and run each test from an empty temp directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("DOOMCTL_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Route structlog through stdlib and restore logger state afterwards."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    doom = logging.getLogger("doomctl")
    doom_level = doom.level
    configure_logging()
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
    doom.setLevel(doom_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def now() -> float:
    """Fixed reference timestamp for age calculations."""
    return time.time()


@pytest.fixture
def scan_root(tmp_path: Path) -> Path:
    """Empty directory to populate with ``make_file``."""
    root = tmp_path / "scan"
    root.mkdir()
    return root


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_file(path: Path, *, size: int = 0, age_days: float = 0, now: float | None = None) -> Path:
    """Create *path* with *size* bytes, last modified *age_days* before *now*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    mtime = (time.time() if now is None else now) - age_days * DAY
    os.utime(path, (mtime, mtime))
    return path


def make_options(
    root: Path,
    *rules: DoomRule,
    policy: RulePolicy = RulePolicy.ANY,
) -> DoomOptions:
    """DoomOptions scanning *root* with the given rules."""
    return DoomOptions(
        doom_path=root,
        doom_export=root.parent,
        circle="0 0 * * 0",
        rules=RuleSet.of(rules, policy),
    )
