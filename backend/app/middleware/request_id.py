"""
Rephrase Backend: Request Correlation IDs
===========================================

Every request gets an id that appears in the access log, in error log
lines, in the `requestId` field of error envelopes and in the
`X-Request-ID` response header.

A client (or gateway) may supply its own id in `X-Request-ID`. It is reused
if it looks like an id (letters, digits, `-`, `_`, `.`, at most 64 chars);
anything else is replaced so arbitrary header content never reaches logs.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_ACCEPTABLE_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Read by log calls and exception handlers anywhere below the middleware
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(supplied: Optional[str]) -> str:
    """Reuse a well-formed client id, otherwise mint a short random one."""
    if supplied and _ACCEPTABLE_ID.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # Not reset afterwards: the outermost 500 handler still reads it
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
