"""
Rephrase Backend: Access Log Middleware
=========================================

Writes one line per request to the `rephrase.access` logger:

    PATCH /api/rephrase/sessions/3f2a... -> 404 in 4.2ms [a1b2c3d4] user=user-42

Request and response bodies are never logged; they carry the user's texts.
Probe and documentation paths are not logged at all.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("rephrase.access")

QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _caller_id(request: Request) -> str:
    user = getattr(request.state, "user", None)
    return user.id if user is not None else "-"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by request id and caller."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Reached only when no exception handler produced a response
            self._log(request, 500, started)
            raise

        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status: int, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        rid = request_id_var.get("")
        caller = _caller_id(request)

        logger.log(
            _level_for(status),
            "%s %s -> %d in %.1fms [%s] user=%s",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            rid,
            caller,
            extra={
                "request_id": rid,
                "user_id": caller,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
