"""ServeService — bind the responder and run it until the process is stopped."""

from __future__ import annotations

import signal
import threading
from typing import TYPE_CHECKING, Any

import structlog

from hellod.server.responder import BindError, Responder
from hellod.services.base import BaseService
from hellod.services.result import ServiceResult

if TYPE_CHECKING:
    from hellod.config.settings import HellodSettings

logger = structlog.get_logger(__name__)


class ServeService(BaseService):
    """Owns one :class:`Responder` built from the settings."""

    def __init__(self, settings: HellodSettings) -> None:
        super().__init__(settings)
        self.responder = Responder(
            settings.server.host,
            settings.port,
            message=settings.server.message,
        )

    def bind(self) -> ServiceResult:
        """Acquire the listening socket.

        Returns a failed result with code ``BIND_ERROR`` when the port is in
        use or binding is not permitted.
        """
        try:
            self.responder.bind()
        except BindError as exc:
            logger.debug("bind failed", host=exc.host, port=exc.port, reason=exc.reason)
            return ServiceResult.failure(
                "serve",
                "BIND_ERROR",
                str(exc),
                host=exc.host,
                port=exc.port,
                errno=exc.errno,
            )
        host, port = self.responder.server_address
        return ServiceResult(
            ok=True,
            op="serve",
            data={"host": host, "port": port, "url": self.responder.url},
        )

    def run(self) -> ServiceResult:
        """Bind, log the startup line, and serve until SIGINT or SIGTERM."""
        result = self.bind()
        if not result.ok:
            return result

        previous = _install_sigterm()
        try:
            logger.info(f"Server running on port {self.responder.port}", port=self.responder.port)
            self.responder.serve_forever(poll_interval=self._settings.server.poll_interval)
        except KeyboardInterrupt:
            logger.debug("interrupted")
        finally:
            self.responder.shutdown()
            _restore_sigterm(previous)
        return result


def _install_sigterm() -> Any:
    """Turn SIGTERM into KeyboardInterrupt so ``docker stop`` exits cleanly."""
    if threading.current_thread() is not threading.main_thread():
        return None
    return signal.signal(signal.SIGTERM, signal.default_int_handler)


def _restore_sigterm(previous: Any) -> None:
    if previous is not None:
        signal.signal(signal.SIGTERM, previous)
