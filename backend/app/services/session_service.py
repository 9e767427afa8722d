"""
Rephrase Backend: Session Service
===================================

What:  createSession, updateSession and listSessions.
Why:   Encapsulates the session rules independent of HTTP concerns.
How:   Each method authenticates, validates, resolves ownership where an
       existing session is referenced, and issues one write or read.
Who:   Called by the session route handlers.

Design Decision:
    SessionService is stateless. It receives the database session and the
    caller identity on each call, so every operation re-authenticates and
    re-resolves ownership from persisted state.

Error Handling Strategy:
    UnauthorizedError, ValidationError and NotFoundError are raised at the
    point of detection. Storage errors are not caught here; they propagate
    to get_db_session (rollback) and the global handler (500).
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ValidationError
from app.models.rephrase import RephraseSession, new_id, utcnow
from app.schemas.rephrase import (
    CurrentUser,
    SessionCreate,
    SessionData,
    SessionEnvelope,
    SessionListData,
    SessionListEnvelope,
    SessionRecord,
    SessionUpdate,
)
from app.services.guards import get_owned_session, require_user

logger = logging.getLogger(__name__)

UPDATE_REQUIRES_FIELDS = "At least one field must be provided to update."


def _envelope(session: RephraseSession) -> SessionEnvelope:
    return SessionEnvelope(data=SessionData(session=SessionRecord.model_validate(session)))


class SessionService:
    """
    Business logic layer for rephrase sessions.

    Sessions are created and updated here but never deleted: the API has no
    delete operation, and variants are not cascade-deleted.
    """

    async def create_session(
        self,
        db: AsyncSession,
        user: Optional[CurrentUser],
        data: SessionCreate,
    ) -> SessionEnvelope:
        """
        Store a new session owned by the caller.

        Both timestamps are set to the same instant, so a fresh session has
        created_at == updated_at.

        Raises:
            UnauthorizedError: no authenticated caller
        """
        caller = require_user(user)
        now = utcnow()

        session = RephraseSession(
            id=new_id(),
            user_id=caller.id,
            language=data.language,
            context=data.context,
            original_text=data.original_text,
            created_at=now,
            updated_at=now,
        )
        db.add(session)
        await db.flush()
        logger.info("Session %s created for user %s", session.id, caller.id)

        return _envelope(session)

    async def update_session(
        self,
        db: AsyncSession,
        user: Optional[CurrentUser],
        session_id: str,
        data: SessionUpdate,
    ) -> SessionEnvelope:
        """
        Partially update an owned session.

        Only supplied fields are overwritten. updated_at is refreshed on every
        successful call, even when the supplied values equal the stored ones.

        Raises:
            UnauthorizedError: no authenticated caller
            ValidationError: none of language/context/originalText supplied
            NotFoundError: session missing or owned by someone else
        """
        caller = require_user(user)
        changes = data.supplied_fields()
        if not changes:
            raise ValidationError(UPDATE_REQUIRES_FIELDS)

        session = await get_owned_session(db, session_id, caller.id)
        for field, value in changes.items():
            setattr(session, field, value)
        session.updated_at = utcnow()
        await db.flush()
        logger.info("Session %s updated (%s)", session.id, ", ".join(changes))

        return _envelope(session)

    async def list_sessions(
        self,
        db: AsyncSession,
        user: Optional[CurrentUser],
    ) -> SessionListEnvelope:
        """
        All sessions owned by the caller, newest first, with a count.

        Query plan:
            SELECT ... WHERE user_id = :uid ORDER BY created_at DESC, id
            → ix_rephrase_sessions_user_id

        Raises:
            UnauthorizedError: no authenticated caller
        """
        caller = require_user(user)

        result = await db.execute(
            select(RephraseSession)
            .where(RephraseSession.user_id == caller.id)
            .order_by(RephraseSession.created_at.desc(), RephraseSession.id)
        )
        sessions = list(result.scalars().all())

        items = [SessionRecord.model_validate(s) for s in sessions]
        return SessionListEnvelope(data=SessionListData(items=items, total=len(items)))


# ── Singleton Instance ────────────────────────────────────────────────────
session_service = SessionService()
