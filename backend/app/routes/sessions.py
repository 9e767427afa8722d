"""
Rephrase Backend: Session Route Handlers
==========================================

What:  POST/GET /api/rephrase/sessions and PATCH /api/rephrase/sessions/{id}.
How:   Extracts the body and caller, delegates to SessionService, returns
       the envelope. No business rules live here.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import get_current_user
from app.schemas.rephrase import (
    CurrentUser,
    ErrorResponse,
    SessionCreate,
    SessionEnvelope,
    SessionListEnvelope,
    SessionUpdate,
)
from app.services.session_service import session_service


router = APIRouter(prefix="/api/rephrase", tags=["Sessions"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    401: {"description": "No authenticated caller", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/sessions",
    response_model=SessionEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a rephrase session",
    description="Stores an original text for the caller. `originalText` must be non-empty.",
)
async def create_session(
    body: SessionCreate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> SessionEnvelope:
    return await session_service.create_session(db=db, user=user, data=body)


@router.get(
    "/sessions",
    response_model=SessionListEnvelope,
    responses={401: _ERRORS[401], 500: _ERRORS[500]},
    summary="List the caller's sessions",
    description="Returns every session owned by the caller, newest first, with a total.",
)
async def list_sessions(
    response: Response,
    db: AsyncSession = Depends(get_db_session, scope="function"),
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> SessionListEnvelope:
    result = await session_service.list_sessions(db=db, user=user)
    response.headers["X-Total-Count"] = str(result.data.total)
    return result


@router.patch(
    "/sessions/{session_id}",
    response_model=SessionEnvelope,
    responses={**_ERRORS, 404: {"description": "Session not found", "model": ErrorResponse}},
    summary="Update a session",
    description=(
        "Overwrites only the supplied fields among `language`, `context` and "
        "`originalText`. At least one must be supplied. `updatedAt` is always refreshed."
    ),
)
async def update_session(
    session_id: str,
    body: SessionUpdate,
    db: AsyncSession = Depends(get_db_session, scope="function"),
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> SessionEnvelope:
    return await session_service.update_session(
        db=db, user=user, session_id=session_id, data=body
    )
