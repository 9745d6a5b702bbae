"""ProbeService — one HTTP request against a running responder.

Meant for container health checks where images ship without curl.
"""

from __future__ import annotations

import time

import httpx
import structlog

from hellod.services.base import BaseService
from hellod.services.result import ServiceResult

logger = structlog.get_logger(__name__)


class ProbeService(BaseService):
    """Checks that a responder answers with a 2xx and the expected body."""

    @property
    def default_url(self) -> str:
        return f"http://127.0.0.1:{self._settings.port}/"

    def probe(
        self,
        url: str | None = None,
        *,
        method: str = "GET",
        timeout: float | None = None,
    ) -> ServiceResult:
        """Send one request and classify the outcome.

        Error codes: ``UNREACHABLE`` (connect/timeout/protocol failure),
        ``BAD_STATUS`` (non-2xx), ``UNEXPECTED_BODY`` (body differs from the
        configured message while ``[probe] expect_body`` is on).
        """
        op = "probe"
        target = url or self.default_url
        cfg = self._settings.probe
        timeout = cfg.timeout if timeout is None else timeout

        started = time.perf_counter()
        try:
            response = httpx.request(method.upper(), target, timeout=timeout)
        except httpx.HTTPError as exc:
            logger.debug("probe failed", url=target, error=str(exc))
            return ServiceResult.failure(
                op,
                "UNREACHABLE",
                f"Cannot reach {target}: {str(exc) or type(exc).__name__}",
                url=target,
            )
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        if not response.is_success:
            return ServiceResult.failure(
                op,
                "BAD_STATUS",
                f"{target} answered {response.status_code}",
                url=target,
                status=response.status_code,
            )

        body = response.text
        expected = self._settings.server.message
        if cfg.expect_body and method.upper() != "HEAD" and body != expected:
            return ServiceResult.failure(
                op,
                "UNEXPECTED_BODY",
                f"{target} answered with an unexpected body",
                url=target,
                expected=expected,
                body=body,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "url": target,
                "status": response.status_code,
                "body": body,
            },
            meta={"elapsed_ms": elapsed_ms},
        )
