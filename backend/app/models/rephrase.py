"""
Rephrase Backend: Session and Variant SQLAlchemy Models
=========================================================

What:  ORM models for the `rephrase_sessions` and `rephrase_variants` tables.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads these for migrations.
Who:   Used by the guards and services for CRUD, and by Alembic.

Table Design Rationale:
    - Text primary keys holding random UUID4 strings: non-sequential, so ids
      cannot be enumerated. Generated by the application, not the database,
      so the same schema works on PostgreSQL and SQLite.
    - Variants reference sessions by foreign key WITHOUT cascade delete.
      A variant has no owner column; its ownership is always derived from
      its session's `user_id` at query time.
    - Timestamps are timezone-aware and written in UTC.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, false, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from app.database import Base


def new_id() -> str:
    """Random, globally unique identifier for a new row."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp that always comes back in UTC.

    PostgreSQL returns aware values in the connection's zone; SQLite drops
    the zone entirely. Both are normalized here so a re-read row serializes
    the same way as the freshly written one.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class RephraseSession(Base):
    """
    One original text submitted for rephrasing, owned by a single user.

    Lifecycle:
        1. Created by createSession (created_at == updated_at)
        2. Partially updated by updateSession (updated_at refreshed every time)
        3. Never deleted through the API

    Query Patterns:
        - Ownership check: WHERE id = :id AND user_id = :uid (primary key)
        - List for a user: WHERE user_id = :uid ORDER BY created_at DESC
    """

    __tablename__ = "rephrase_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # Set once from the authenticated caller, never updated
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owner of the session (authenticated caller at creation)",
    )

    # Free-text labels, e.g. language="en", context="academic"
    language: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    context: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    original_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Source text the variants rephrase",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("ix_rephrase_sessions_user_id", "user_id"),
        Index("ix_rephrase_sessions_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<RephraseSession(id={self.id}, user_id='{self.user_id}')>"


class RephraseVariant(Base):
    """
    One generated paraphrase attached to a session.

    Any number of variants in a session may be favorites at the same time.
    """

    __tablename__ = "rephrase_variants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    session_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rephrase_sessions.id"),
        nullable=False,
    )

    # e.g. tone="formal", complexity="advanced", variant_label="Short version"
    tone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    complexity: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    variant_label: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Paraphrased text, stored as supplied by the caller",
    )

    is_favorite: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("ix_rephrase_variants_session_id", "session_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<RephraseVariant(id={self.id}, session_id='{self.session_id}', "
            f"is_favorite={self.is_favorite})>"
        )
