"""BaseService — foundation for hellod services.

Every service receives the resolved :class:`HellodSettings` at
construction time and reads its section config from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hellod.config.settings import HellodSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ServeService(BaseService):
            def bind(self) -> ServiceResult:
                host = self._settings.server.host
                ...
    """

    def __init__(self, settings: HellodSettings) -> None:
        self._settings = settings
