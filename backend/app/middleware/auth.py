"""
Rephrase Backend: Caller Identity Middleware
==============================================

What:  Attaches the authenticated caller (if any) to each request.
Why:   Authentication is done upstream by the gateway; this service only
       needs to know who the caller is. Keeping that lookup here lets route
       handlers pass the identity explicitly into every service call.
How:   Reads the trusted header named by `settings.auth_user_header`
       (default X-User-ID) and stores a CurrentUser on `request.state.user`.
       A missing or blank header leaves `request.state.user = None`; the
       services' authentication guard rejects such calls.

The identity is request-scoped (`request.state`), never a module global.
"""

from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.schemas.rephrase import CurrentUser


class AuthContextMiddleware(BaseHTTPMiddleware):
    """Resolves the caller identity header into `request.state.user`."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        raw = request.headers.get(settings.auth_user_header, "").strip()
        request.state.user = CurrentUser(id=raw) if raw else None
        return await call_next(request)


def get_current_user(request: Request) -> Optional[CurrentUser]:
    """
    FastAPI dependency returning the caller attached by AuthContextMiddleware.

    Returns None rather than raising: rejecting anonymous callers is the
    service layer's job, so the same rule applies to non-HTTP callers.
    """
    return getattr(request.state, "user", None)
