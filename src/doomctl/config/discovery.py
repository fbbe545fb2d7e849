"""Locate the doom.toml that describes the cleanup job.

Lookup order:
  1. ``DOOM_CONFIG``: an explicit file, ``~`` expanded.  When it is set,
     walk-up discovery is skipped.
  2. Walk up from the working directory, the way git finds ``.git/``.

The ``--config`` CLI flag bypasses this module entirely.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

CONFIG_FILENAME = "doom.toml"
CONFIG_ENV_VAR = "DOOM_CONFIG"

logger = logging.getLogger(__name__)


def _from_env() -> Path | None:
    raw = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def find_config(start: Path | None = None) -> Path | None:
    """Return the doom.toml for this job, or None to run on env vars alone.

    A ``DOOM_CONFIG`` that names a missing file is logged and ignored
    rather than falling back to walk-up discovery.
    """
    explicit = _from_env()
    if explicit is not None:
        if explicit.is_file():
            return explicit
        logger.warning(
            "%s=%s is not a file; using env vars and defaults", CONFIG_ENV_VAR, explicit
        )
        return None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
