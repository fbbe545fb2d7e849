"""ConfigService: report the effective job configuration."""

from __future__ import annotations

from pathlib import Path

from doomctl.services.base import BaseService
from doomctl.services.result import ServiceResult


class ConfigService(BaseService):
    def show(self, *, config_path: Path | None = None) -> ServiceResult:
        data = self._options.describe()
        data["config_path"] = str(config_path) if config_path else None
        return ServiceResult(ok=True, op="show_config", data=data)
