"""Evidence Integrity - API Middleware
Request logging, timeout handling, and security headers.
"""

import asyncio
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import get_logger


DEFAULT_REQUEST_TIMEOUT_SECONDS = 30


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Middleware to enforce request timeout limits."""

    def __init__(self, app, timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except TimeoutError:
            get_logger().warning(
                f"Request timeout after {self.timeout_seconds}s",
                path=request.url.path,
                method=request.method,
            )
            return Response(
                content='{"error": {"kind": "timeout", "message": "Request timeout", "details": null}}',
                status_code=504,
                media_type="application/json",
            )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all HTTP requests with metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        logger = get_logger()

        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {e!s}",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                duration_ms=round(duration_ms, 2),
            )
            logger.record_request(request.method, request.url.path, 500, duration_ms)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path} - {response.status_code}",
            request_id=request_id,
            duration_ms=round(duration_ms, 2),
        )
        logger.record_request(request.method, request.url.path, response.status_code, duration_ms)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware for adding security headers."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
