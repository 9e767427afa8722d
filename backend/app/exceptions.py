"""
Rephrase Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the failures a caller can see.
Why:   Each exception carries a machine-readable code and an HTTP status,
       so global handlers (registered in main.py) can build the uniform
       `{success: false, error: {...}}` envelope without per-route code.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by the guards and services; caught by global handlers.
When:  At the point of detection; the operation halts immediately.

Exception Hierarchy:
    RephraseError (base)
    ├── UnauthorizedError   → 401 UNAUTHORIZED
    ├── NotFoundError       → 404 NOT_FOUND
    └── ValidationError     → 400 BAD_REQUEST

Storage failures are deliberately absent: SQLAlchemy errors propagate
untranslated and the app-level handler turns them into a generic 500.
"""

from typing import Any, Dict, Optional


class RephraseError(Exception):
    """
    Base exception for all Rephrase application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only as `details`
                  for validation errors)
        code:     Machine-readable error code
        status_code: HTTP status used by the global handler
    """

    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = dict(context or {})
        super().__init__(self.message)


class UnauthorizedError(RephraseError):
    """
    Raised when no authenticated caller is attached to the request.

    When:    First step of every operation, before any input or storage work.
    HTTP:    401 Unauthorized
    """

    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(
        self,
        message: str = "You must be signed in to perform this action.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(RephraseError):
    """
    Raised when a session or variant is outside the caller's ownership scope.

    "Does not exist" and "exists but belongs to another user" produce the
    same message, so callers cannot probe for other users' ids. The id is
    kept in `context` for server-side logs only.

    HTTP:    404 Not Found
    """

    code = "NOT_FOUND"
    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found.", context=ctx)
        self.resource = resource


class ValidationError(RephraseError):
    """
    Raised when client input fails a business validation rule.

    When:    An update operation supplies none of its mutable fields.
    HTTP:    400 Bad Request

    Shape rules (non-empty strings, types) are enforced by the pydantic
    schemas; FastAPI's RequestValidationError is re-shaped into the same
    BAD_REQUEST envelope by the handler in main.py.
    """

    code = "BAD_REQUEST"
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
