"""Responder — answers every HTTP request with one fixed plaintext body.

Method, path, query, headers, and body never influence the response.
Built on :class:`http.server.ThreadingHTTPServer`: one daemon thread per
connection, HTTP/1.1 keep-alive, and no shared mutable state between
handlers (the encoded body is fixed at construction).
"""

from __future__ import annotations

import errno
import socket
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import structlog

from hellod import __version__
from hellod.config.models import DEFAULT_MESSAGE, DEFAULT_PORT
from hellod.domain.lifecycle import ResponderState, transition

logger = structlog.get_logger(__name__)

CONTENT_TYPE = "text/plain; charset=utf-8"
_READ_CHUNK = 64 * 1024
_MAX_LINE = 65537
_MAX_CHUNK = 16 * 1024 * 1024


class BindError(OSError):
    """The listening socket could not be acquired.

    Raised at startup when the port is already in use or the process
    lacks permission to bind it.
    """

    def __init__(self, host: str, port: int, cause: OSError) -> None:
        self.host = host
        self.port = port
        self.reason = _describe_bind_failure(cause)
        super().__init__(cause.errno, f"Cannot bind {host}:{port}: {self.reason}")

    def __str__(self) -> str:
        return self.strerror or ""


def _describe_bind_failure(exc: OSError) -> str:
    if exc.errno == errno.EADDRINUSE:
        return "address already in use"
    if exc.errno in (errno.EACCES, errno.EPERM):
        return "permission denied"
    if exc.errno == errno.EADDRNOTAVAIL:
        return "address not available"
    return exc.strerror or str(exc)


class _GreetingHandler(BaseHTTPRequestHandler):
    """Serves the server's fixed body for any request method."""

    protocol_version = "HTTP/1.1"
    server_version = f"hellod/{__version__}"
    server: _GreetingServer

    def __getattr__(self, name: str) -> Any:
        # http.server dispatches to do_<METHOD>; every method gets the same answer.
        if name.startswith("do_"):
            return self._respond
        raise AttributeError(name)

    def _respond(self) -> None:
        self._discard_body()
        body = self.server.body
        self.send_response(HTTPStatus.OK)
        self.send_header("Content-Type", CONTENT_TYPE)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def _discard_body(self) -> None:
        """Consume the request body so the next keep-alive request parses cleanly.

        Malformed framing closes the connection after the response instead
        of failing the request.
        """
        try:
            if "chunked" in self.headers.get("Transfer-Encoding", "").lower():
                drained = self._discard_chunked()
            else:
                length = int(self.headers.get("Content-Length") or 0)
                if length < 0:
                    raise ValueError(length)
                drained = self._skip(length)
        except ValueError:
            drained = False
        if not drained:
            self.close_connection = True

    def _skip(self, length: int) -> bool:
        """Read and drop *length* bytes; False if the client hung up first."""
        while length > 0:
            data = self.rfile.read(min(length, _READ_CHUNK))
            if not data:
                return False
            length -= len(data)
        return True

    def _discard_chunked(self) -> bool:
        while True:
            line = self.rfile.readline(_MAX_LINE)
            if not line:
                return False
            size = int(line.split(b";", 1)[0].strip(), 16)
            if size < 0 or size > _MAX_CHUNK:
                raise ValueError(size)
            if size == 0:
                break
            # chunk data plus its trailing CRLF
            if not self._skip(size + 2):
                return False
        # trailers
        while self.rfile.readline(_MAX_LINE) not in (b"\r\n", b"\n", b""):
            pass
        return True

    def log_request(self, code: int | str = "-", size: int | str = "-") -> None:
        logger.debug(
            "request",
            method=self.command,
            path=self.path,
            status=int(code) if isinstance(code, HTTPStatus) else code,
            client=self.client_address[0],
        )

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug(format % args, client=self.client_address[0])


class _GreetingServer(ThreadingHTTPServer):
    daemon_threads = True
    allow_reuse_port = False
    request_queue_size = 128

    def __init__(self, address: tuple[str, int], body: bytes) -> None:
        self.body = body
        super().__init__(address, _GreetingHandler, bind_and_activate=False)


class _GreetingServer6(_GreetingServer):
    address_family = socket.AF_INET6


class Responder:
    """Listening socket plus accept loop for the fixed-body HTTP service.

    Lifecycle: ``UNBOUND`` until :meth:`bind` succeeds, ``LISTENING`` while
    the socket is open, ``STOPPED`` after :meth:`shutdown`.

    Usage::

        with Responder("127.0.0.1", 0) as responder:
            print(responder.url)
            responder.serve_forever()
    """

    def __init__(
        self,
        host: str = "0.0.0.0",
        port: int = DEFAULT_PORT,
        *,
        message: str = DEFAULT_MESSAGE,
    ) -> None:
        self.host = host
        self.requested_port = port
        self.body = message.encode("utf-8")
        self._server: _GreetingServer | None = None
        self._state = ResponderState.UNBOUND
        self._serving = False
        self._lock = threading.Lock()

    @property
    def state(self) -> ResponderState:
        return self._state

    @property
    def server_address(self) -> tuple[str, int]:
        """The bound ``(host, port)``; port 0 is resolved to the real port."""
        if self._server is None:
            msg = "Responder is not bound"
            raise RuntimeError(msg)
        host, port = self._server.server_address[:2]
        return str(host), int(port)

    @property
    def port(self) -> int:
        return self.server_address[1]

    @property
    def url(self) -> str:
        host, port = self.server_address
        if host in ("0.0.0.0", "::", ""):
            host = "127.0.0.1"
        elif ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{port}/"

    def bind(self) -> Responder:
        """Acquire the listening socket.

        Raises:
            BindError: The port is in use or binding is not permitted.
                The responder stays ``UNBOUND``.
        """
        with self._lock:
            transition(self._state, ResponderState.LISTENING)
            server_cls = _GreetingServer6 if ":" in self.host else _GreetingServer
            address = (self.host, self.requested_port)
            try:
                server = server_cls(address, self.body)
            except OSError as exc:
                raise BindError(self.host, self.requested_port, exc) from exc
            try:
                server.server_bind()
                server.server_activate()
            except OSError as exc:
                server.server_close()
                raise BindError(self.host, self.requested_port, exc) from exc
            self._server = server
            self._state = ResponderState.LISTENING
        logger.debug("bound", host=self.server_address[0], port=self.port)
        return self

    def serve_forever(self, poll_interval: float = 0.5) -> None:
        """Accept connections until :meth:`shutdown` is called from another thread."""
        with self._lock:
            if self._server is None or self._state is not ResponderState.LISTENING:
                msg = f"Cannot serve while {self._state}"
                raise RuntimeError(msg)
            self._serving = True
        try:
            self._server.serve_forever(poll_interval=poll_interval)
        finally:
            self._serving = False

    def shutdown(self) -> None:
        """Stop the accept loop and release the socket. Safe to call twice."""
        with self._lock:
            if self._state is ResponderState.STOPPED:
                return
            server = self._server
            serving = self._serving
            self._state = transition(self._state, ResponderState.STOPPED)
        if server is not None:
            if serving:
                server.shutdown()
            server.server_close()
            logger.debug("stopped", port=server.server_address[1])

    def __enter__(self) -> Responder:
        return self.bind()

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
