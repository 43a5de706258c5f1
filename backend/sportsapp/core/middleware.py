"""
HTTP middleware: request tracing, security headers and the body size cap.
"""

import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from sportsapp.core.config import settings
from sportsapp.core.logging_config import logger, set_request_id, set_user_id, generate_request_id


QUIET_PATHS = frozenset({"/", "/health", "/favicon.ico", "/docs", "/redoc", "/openapi.json"})
QUIET_PREFIXES = ("/uploads/",)

SLOW_REQUEST_MS = 1000

# Multipart boundaries and form fields on top of the largest allowed file
MULTIPART_OVERHEAD = 1024 * 1024

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def is_quiet(path: str) -> bool:
    """Health checks, docs and static media are not logged per request"""
    return path in QUIET_PATHS or path.startswith(QUIET_PREFIXES)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id (taken from X-Request-ID when the client
    sends one), logs the outcome and timing, and echoes the id back.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        method, path = request.method, request.url.path
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"{method} {path} raised {type(exc).__name__}",
                exc_info=True,
                extra={"event_type": "http_request_error", "http_method": method, "http_path": path},
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            set_request_id("")
            set_user_id("")

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"

        if not is_quiet(path):
            logger.log_request(
                method, path, response.status_code, elapsed_ms,
                client_ip=request.client.host if request.client else None,
            )
            if elapsed_ms > SLOW_REQUEST_MS:
                logger.log_performance(f"{method} {path}", elapsed_ms, SLOW_REQUEST_MS)

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects bodies whose declared Content-Length exceeds the upload cap"""

    def __init__(self, app: ASGIApp, max_size: Optional[int] = None):
        super().__init__(app)
        self.max_size = max_size or settings.MAX_UPLOAD_SIZE + MULTIPART_OVERHEAD

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_size:
            logger.warning(
                f"Rejected {declared}-byte body on {request.url.path}",
                extra={"event_type": "request_too_large", "max_size": self.max_size},
            )
            limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
            return JSONResponse(
                status_code=413,
                content={"detail": f"Upload too large. Files may be at most {limit_mb}MB"},
            )
        return await call_next(request)
