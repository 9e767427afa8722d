"""
Rephrase Backend: Variant Service
===================================

What:  createVariant, updateVariant, deleteVariant and listVariants.
Why:   Variants carry no owner of their own; every operation must prove the
       caller owns the parent session before reading or writing variants.
How:   authenticate → validate → get_owned_session → one variant statement.

Absence detection:
    Update and delete both look the variant up with `id AND session_id`
    before acting (_get_session_variant). A variant id that exists under a
    different session than the one claimed is reported as not found, and a
    second delete of the same id fails the same way as a first delete of a
    missing id.
"""

import logging
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, ValidationError
from app.models.rephrase import RephraseVariant, new_id, utcnow
from app.schemas.rephrase import (
    AckEnvelope,
    CurrentUser,
    VariantCreate,
    VariantData,
    VariantEnvelope,
    VariantListData,
    VariantListEnvelope,
    VariantRecord,
    VariantUpdate,
)
from app.services.guards import get_owned_session, require_user
from app.services.session_service import UPDATE_REQUIRES_FIELDS

logger = logging.getLogger(__name__)


def _envelope(variant: RephraseVariant) -> VariantEnvelope:
    return VariantEnvelope(data=VariantData(variant=VariantRecord.model_validate(variant)))


async def _get_session_variant(
    db: AsyncSession, session_id: str, variant_id: str
) -> RephraseVariant:
    """Load a variant only if it belongs to `session_id`."""
    result = await db.execute(
        select(RephraseVariant).where(
            and_(RephraseVariant.id == variant_id, RephraseVariant.session_id == session_id)
        )
    )
    variant = result.scalar_one_or_none()
    if variant is None:
        raise NotFoundError(resource="Rephrase variant", resource_id=variant_id)
    return variant


class VariantService:
    """Business logic layer for the variants of a rephrase session."""

    async def create_variant(
        self,
        db: AsyncSession,
        user: Optional[CurrentUser],
        session_id: str,
        data: VariantCreate,
    ) -> VariantEnvelope:
        """
        Attach a new variant to an owned session.

        is_favorite defaults to False when omitted.

        Raises:
            UnauthorizedError: no authenticated caller
            NotFoundError: session missing or owned by someone else
        """
        caller = require_user(user)
        await get_owned_session(db, session_id, caller.id)

        variant = RephraseVariant(
            id=new_id(),
            session_id=session_id,
            tone=data.tone,
            complexity=data.complexity,
            variant_label=data.variant_label,
            content=data.content,
            is_favorite=data.is_favorite,
            created_at=utcnow(),
        )
        db.add(variant)
        await db.flush()
        logger.info("Variant %s created in session %s", variant.id, session_id)

        return _envelope(variant)

    async def update_variant(
        self,
        db: AsyncSession,
        user: Optional[CurrentUser],
        session_id: str,
        variant_id: str,
        data: VariantUpdate,
    ) -> VariantEnvelope:
        """
        Partially update a variant of an owned session.

        Raises:
            UnauthorizedError: no authenticated caller
            ValidationError: none of tone/complexity/variantLabel/content/isFavorite supplied
            NotFoundError: session not owned, or variant not in that session
        """
        caller = require_user(user)
        changes = data.supplied_fields()
        if not changes:
            raise ValidationError(UPDATE_REQUIRES_FIELDS)

        await get_owned_session(db, session_id, caller.id)
        variant = await _get_session_variant(db, session_id, variant_id)

        for field, value in changes.items():
            setattr(variant, field, value)
        await db.flush()
        logger.info("Variant %s updated (%s)", variant.id, ", ".join(changes))

        return _envelope(variant)

    async def delete_variant(
        self,
        db: AsyncSession,
        user: Optional[CurrentUser],
        session_id: str,
        variant_id: str,
    ) -> AckEnvelope:
        """
        Delete a variant of an owned session. Not idempotent: deleting an
        already-deleted id raises NotFoundError.

        Raises:
            UnauthorizedError: no authenticated caller
            NotFoundError: session not owned, or variant not in that session
        """
        caller = require_user(user)
        await get_owned_session(db, session_id, caller.id)
        variant = await _get_session_variant(db, session_id, variant_id)

        await db.delete(variant)
        await db.flush()
        logger.info("Variant %s deleted from session %s", variant_id, session_id)

        return AckEnvelope()

    async def list_variants(
        self,
        db: AsyncSession,
        user: Optional[CurrentUser],
        session_id: str,
        favorites_only: bool = False,
    ) -> VariantListEnvelope:
        """
        Variants of an owned session in creation order, with a count.

        Ownership is checked even though this is a read: a foreign session id
        yields NotFoundError, never an empty list.

        Raises:
            UnauthorizedError: no authenticated caller
            NotFoundError: session missing or owned by someone else
        """
        caller = require_user(user)
        await get_owned_session(db, session_id, caller.id)

        filters = [RephraseVariant.session_id == session_id]
        if favorites_only:
            filters.append(RephraseVariant.is_favorite.is_(True))

        result = await db.execute(
            select(RephraseVariant)
            .where(and_(*filters))
            .order_by(RephraseVariant.created_at, RephraseVariant.id)
        )
        variants = list(result.scalars().all())

        items = [VariantRecord.model_validate(v) for v in variants]
        return VariantListEnvelope(data=VariantListData(items=items, total=len(items)))


# ── Singleton Instance ────────────────────────────────────────────────────
variant_service = VariantService()
