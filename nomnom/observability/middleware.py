"""
ASGI middleware for observability.

Correlation ID and request logging middleware. Both wrap `send` and pass
every message through unchanged, so a streamed body that fails midway is
never closed with a terminating frame on its behalf.

Dependencies: starlette, nomnom.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from nomnom.observability.correlation import set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware:
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        Log HTTP request and response with timing.

        Timing covers the whole exchange, streamed body included.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        method = scope["method"]
        path = scope["path"]
        client = scope.get("client")
        status_code: int | None = None

        logger.info(
            f"{method} {path}",
            extra={
                "method": method,
                "path": path,
                "client_host": client[0] if client else None,
            },
        )

        async def send_with_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_with_status)
        except Exception as e:
            logger.error(
                f"{method} {path} - {type(e).__name__}",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "process_time_ms": round((time.time() - start_time) * 1000, 2),
                    "error_type": type(e).__name__,
                },
            )
            raise

        logger.info(
            f"{method} {path} - {status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": status_code,
                "process_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )


class CorrelationMiddleware:
    """Middleware for correlation ID injection."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        Set the request's correlation ID and echo it on the response.

        Reuses the incoming X-Correlation-ID header or generates a new ID.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Each request runs in its own context copy.
        correlation_id = set_correlation_id(Headers(scope=scope).get(CORRELATION_HEADER))

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[CORRELATION_HEADER] = correlation_id
            await send(message)

        await self.app(scope, receive, send_with_header)
