"""BaseService: shared foundation for doomctl services.

Every service receives the job's frozen :class:`DoomOptions` at
construction time.  Options are read-only, so one instance may be shared
by any number of services and threads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doomctl.domain.options import DoomOptions


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ScanService(BaseService):
            def scan(self) -> ServiceResult:
                for meta in ...:
                    self._options.rules.should_delete(meta)
    """

    def __init__(self, options: DoomOptions) -> None:
        self._options = options

    @property
    def options(self) -> DoomOptions:
        return self._options
