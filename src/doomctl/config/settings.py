"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  - CLI flags passed by Click
  2. Env vars     - ``DOOM_*`` / ``RULE_*`` job variables, ``DOOMCTL_*`` tool flags
  3. TOML file    - ``doom.toml`` discovered via walk-up
  4. Code defaults

The six job variables keep their historical unprefixed names
(``DOOM_PATH``, ``RULE_AGE``, ...) through validation aliases; everything
else is read with the ``DOOMCTL_`` prefix.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from doomctl.config.discovery import find_config
from doomctl.config.models import RuleConfig, ScanConfig
from doomctl.domain.errors import ParseError
from doomctl.domain.options import (
    DEFAULT_CIRCLE,
    DEFAULT_DOOM_EXPORT,
    DEFAULT_DOOM_PATH,
    DoomOptions,
)
from doomctl.domain.rules import (
    DEFAULT_AGE,
    DEFAULT_NAME,
    DEFAULT_SIZE,
    DoomRule,
    RulePolicy,
    RuleSet,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read the job file (``doom.toml``).

    Top-level keys are case-insensitive, so a job can be written with the
    same names as its environment (``DOOM_PATH = "/srv"``) or as lowercase
    field names.  Tables (``[scan]``, ``[[rules]]``) pass through as-is.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                with toml_path.open("rb") as fh:
                    raw = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            self._data = {key.lower(): value for key, value in raw.items()}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


def _job_field(default: Any, name: str) -> Any:
    """Field read from the unprefixed ``NAME`` env var and the ``name`` TOML key."""
    return Field(default=default, validation_alias=AliasChoices(name, name.upper()))


class DoomSettings(BaseSettings):
    """Settings for one doomctl invocation.

    Stored on the CLI :class:`~doomctl.commands._context.AppContext` and
    converted into :class:`DoomOptions` with :meth:`to_options`.

    Attributes:
        config_path: The doom.toml that was loaded, if any.
        rules: Extra ``[[rules]]`` appended after the primary rule.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DOOMCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- Job configuration ---
    doom_path: Path = _job_field(Path(DEFAULT_DOOM_PATH), "doom_path")
    doom_export: Path = _job_field(Path(DEFAULT_DOOM_EXPORT), "doom_export")
    doom_circle: str = _job_field(DEFAULT_CIRCLE, "doom_circle")
    rule_age: str = _job_field(DEFAULT_AGE, "rule_age")
    rule_size: str = _job_field(DEFAULT_SIZE, "rule_size")
    rule_name: str = _job_field(DEFAULT_NAME, "rule_name")
    rules: list[RuleConfig] = Field(default_factory=list)
    policy: RulePolicy = RulePolicy.ANY

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    export_logs: bool = False

    # --- TOML sections ---
    scan: ScanConfig = Field(default_factory=ScanConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> DoomSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when it names a file, otherwise
        discovers ``doom.toml`` by walking up from *cwd*.  *cli_flags*
        are highest-priority overrides; pass only flags the user set.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(cwd)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    def to_options(self) -> DoomOptions:
        """Parse every rule and freeze the job configuration.

        Raises:
            ParseError: On the first malformed threshold or pattern, with
                the offending rule named in the message.
        """
        rules = [_build_rule("rule", self.rule_age, self.rule_size, self.rule_name)]
        for index, extra in enumerate(self.rules, start=1):
            rules.append(_build_rule(f"rules[{index}]", extra.age, extra.size, extra.name))
        return DoomOptions(
            doom_path=self.doom_path,
            doom_export=self.doom_export,
            circle=self.doom_circle,
            rules=RuleSet.of(rules, self.policy),
        )


def _build_rule(label: str, age: str | None, size: str | None, name: str | None) -> DoomRule:
    try:
        return DoomRule.from_strings(age, size, name)
    except ParseError as exc:
        raise type(exc)(f"{label}: {exc}", value=exc.value) from exc
