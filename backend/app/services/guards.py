"""
Rephrase Backend: Authentication Guard and Ownership Resolver
===============================================================

What:  The two preconditions every operation runs before touching data.
Why:   Sessions and variants are private to the user who created the
       session. These helpers are the only place that rule is enforced.
How:   `require_user` turns a missing caller into UnauthorizedError.
       `get_owned_session` loads a session with one combined
       id-AND-owner predicate and turns "no row" into NotFoundError.

Ownership is resolved from the database on every call, never cached on the
request or on the variant rows. A session that exists but belongs to
another user is indistinguishable from one that does not exist.
"""

import logging
from typing import Optional

from sqlalchemy import ColumnElement, and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, UnauthorizedError
from app.models.rephrase import RephraseSession
from app.schemas.rephrase import CurrentUser

logger = logging.getLogger(__name__)


def require_user(user: Optional[CurrentUser]) -> CurrentUser:
    """
    Authentication guard, called first by every service operation.

    Raises:
        UnauthorizedError: no authenticated caller is attached to the request
    """
    if user is None:
        raise UnauthorizedError()
    return user


def owned_session_clause(session_id: str, user_id: str) -> ColumnElement[bool]:
    """Single predicate matching a session only when the caller owns it."""
    return and_(RephraseSession.id == session_id, RephraseSession.user_id == user_id)


async def get_owned_session(
    db: AsyncSession, session_id: str, user_id: str
) -> RephraseSession:
    """
    Load a session owned by `user_id`.

    Query plan:
        SELECT ... FROM rephrase_sessions WHERE id = :id AND user_id = :uid
        → primary key lookup, owner compared on the same row

    Raises:
        NotFoundError: no session with this id belongs to the caller
    """
    result = await db.execute(
        select(RephraseSession).where(owned_session_clause(session_id, user_id))
    )
    session = result.scalar_one_or_none()
    if session is None:
        # Logged with both ids so support can tell "missing" from "foreign"
        # server side; the caller only ever sees the generic message.
        logger.info("Session %s not found for user %s", session_id, user_id)
        raise NotFoundError(resource="Rephrase session", resource_id=session_id)
    return session
