"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: defaults baked here, doom.toml only contains
overrides.  Rule thresholds stay as strings at this layer; they are
parsed once, when settings are turned into DoomOptions.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RuleConfig(BaseModel):
    """One ``[[rules]]`` table.  Omitted fields are unset constraints."""

    model_config = {"frozen": True}

    age: str | None = None
    size: str | None = None
    name: str | None = None


class ScanConfig(BaseModel):
    """[scan] section."""

    model_config = {"frozen": True}

    workers: int = Field(default=4, ge=1)
    recursive: bool = True
    follow_symlinks: bool = False
