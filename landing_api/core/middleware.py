# landing_api/core/middleware.py
import logging
import time
from typing import Optional

from fastapi import Request
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from landing_api.core.errors import OriginRejected, PayloadTooLarge

logger = logging.getLogger("landing_api.access")


class OriginGateMiddleware(BaseHTTPMiddleware):
    """
    Browser cross-origin gate.
    - no Origin header: allowed (server-to-server, curl, same-origin GETs)
    - no ALLOWED_ORIGIN configured: allowed
    - otherwise the Origin must match exactly
    """

    def __init__(self, app, allowed_origin: Optional[str] = None):
        super().__init__(app)
        self.allowed_origin = allowed_origin

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and self.allowed_origin and origin != self.allowed_origin:
            logger.info("rejected origin %s for %s", origin, request.url.path)
            return OriginRejected().to_response()
        return await call_next(request)


class BodySizeLimitMiddleware:
    """
    Caps request bodies at `max_bytes`.
    A declared Content-Length over the cap is refused up front; otherwise the
    body is read (chunked uploads included) and refused as soon as the running
    total passes the cap. Accepted bodies are replayed to the app unchanged.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length and length.isdigit() and int(length) > self.max_bytes:
            await PayloadTooLarge().to_response()(scope, receive, send)
            return

        chunks = []
        received = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            body = message.get("body", b"")
            received += len(body)
            if received > self.max_bytes:
                await PayloadTooLarge().to_response()(scope, receive, send)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                message = {"type": "http.request", "body": b"".join(chunks), "more_body": False}
                break

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return message
            return await receive()

        await self.app(scope, replay, send)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cross-Origin-Resource-Policy"] = "same-origin"
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One line per request: METHOD path status length - ms"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %s - %.1f ms",
            request.method,
            request.url.path,
            response.status_code,
            response.headers.get("content-length", "-"),
            elapsed_ms,
        )
        return response
