"""ASGI adapter for the exposition endpoint.

This adapter provides a framework-agnostic ASGI application that can be used
with any ASGI server (uvicorn, hypercorn, daphne) without requiring a web
framework as a dependency.
"""

import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from samm_exporter.core.encoding.prometheus import encode_snapshot
from samm_exporter.core.exceptions import SerializationFailure
from samm_exporter.core.ports import SnapshotSource

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("samm_exporter.access")

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]
Middleware = Callable[[ASGIApp], ASGIApp]


def _get_header(scope: Scope, name: str) -> str:
    """Return a request header value from ASGI scope, or "" if absent.

    Repeated headers are joined with ", " as allowed by RFC 9110.
    """
    header_bytes = name.lower().encode()
    headers: list[tuple[bytes, bytes]] = scope.get("headers", [])
    values = [
        value.decode("latin-1")
        for key, value in headers
        if key.lower() == header_bytes
    ]
    return ", ".join(values)


def _format_client(scope: Scope) -> str:
    """Format the caller address as host:port, "-" when unknown."""
    client = scope.get("client")
    if not client:
        return "-"
    host = client[0]
    port = client[1] if len(client) > 1 else None
    return f"{host}:{port}" if port is not None else str(host)


def _format_target(scope: Scope) -> str:
    """Format the requested path, including the query string if any."""
    path = scope.get("path") or "-"
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


async def _send_response(
    send: Send,
    status: int,
    content_type: str,
    body: bytes | str,
    extra_headers: list[tuple[bytes, bytes]] | None = None,
) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body; str bodies are UTF-8 encoded.
        extra_headers: Additional raw headers.
    """
    if isinstance(body, str):
        body = body.encode()
    headers = [
        (b"content-type", content_type.encode()),
        (b"content-length", str(len(body)).encode()),
    ]
    if extra_headers:
        headers.extend(extra_headers)
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body})


class AccessLogMiddleware:
    """ASGI middleware that logs every request before delegating.

    Records the caller address, method and requested path, then hands the
    request to the wrapped app untouched. Responses and exceptions pass
    through unchanged.
    """

    def __init__(self, app: ASGIApp, logger: logging.Logger | None = None) -> None:
        """Initialize the middleware with a wrapped app.

        Args:
            app: The ASGI application to wrap.
            logger: Logger receiving access records (default:
                ``samm_exporter.access``).
        """
        self.app = app
        self.logger = logger or access_logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI callable interface that logs, then calls the wrapped app."""
        if scope.get("type") == "http":
            self.logger.info(
                "%s %s %s",
                _format_client(scope),
                scope.get("method") or "-",
                _format_target(scope),
            )
        await self.app(scope, receive, send)


def compose(app: ASGIApp, *middleware: Middleware) -> ASGIApp:
    """Wrap ``app`` with middleware factories.

    The first factory becomes the outermost layer, so
    ``compose(app, a, b)`` serves requests through ``a(b(app))``.

    Args:
        app: Terminal ASGI application.
        *middleware: Callables taking an ASGI app and returning one.

    Returns:
        The composed ASGI application.
    """
    for factory in reversed(middleware):
        app = factory(app)
    return app


def create_asgi_app(
    source: SnapshotSource,
    path: str = "/metrics",
    disable_compression: bool = False,
) -> ASGIApp:
    """Create an ASGI app serving a snapshot of ``source`` at ``path``.

    Args:
        source: Registry (or any SnapshotSource) to expose.
        path: Path of the exposition endpoint.
        disable_compression: Never gzip responses when True.

    Returns:
        ASGI application callable.
    """

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        if scope.get("path") != path:
            await _send_response(send, 404, "text/plain; charset=utf-8", "Not Found")
            return

        if scope.get("method") != "GET":
            await _send_response(
                send,
                405,
                "text/plain; charset=utf-8",
                "Method Not Allowed",
                [(b"allow", b"GET")],
            )
            return

        try:
            payload = encode_snapshot(
                source.snapshot(),
                accept=_get_header(scope, "accept"),
                accept_encoding=_get_header(scope, "accept-encoding"),
                disable_compression=disable_compression,
            )
        except SerializationFailure:
            logger.exception("Error encoding metrics endpoint")
            error_body = json.dumps({"error": "Internal Server Error"})
            await _send_response(send, 500, "application/json", error_body)
            return

        extra: list[tuple[bytes, bytes]] = []
        if payload.content_encoding:
            extra.append((b"content-encoding", payload.content_encoding.encode()))
        await _send_response(send, 200, payload.content_type, payload.body, extra)

    return app
