"""Create rephrase_sessions and rephrase_variants tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the two tables behind the rephrase API.
How:   Text primary keys (application-generated UUID4 strings), timezone-aware
       timestamps, and a variants → sessions foreign key without cascade.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rephrase_sessions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column(
            "user_id",
            sa.String(255),
            nullable=False,
            comment="Owner of the session (authenticated caller at creation)",
        ),
        sa.Column("language", sa.Text(), nullable=True),
        sa.Column("context", sa.Text(), nullable=True),
        sa.Column(
            "original_text",
            sa.Text(),
            nullable=False,
            comment="Source text the variants rephrase",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rephrase_sessions_user_id", "rephrase_sessions", ["user_id"])
    op.create_index(
        "ix_rephrase_sessions_created_at",
        "rephrase_sessions",
        [sa.text("created_at DESC")],
    )

    op.create_table(
        "rephrase_variants",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("session_id", sa.String(36), nullable=False),
        sa.Column("tone", sa.Text(), nullable=True),
        sa.Column("complexity", sa.Text(), nullable=True),
        sa.Column("variant_label", sa.Text(), nullable=True),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Paraphrased text, stored as supplied by the caller",
        ),
        sa.Column(
            "is_favorite",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        # No ON DELETE CASCADE: sessions are never deleted through the API
        sa.ForeignKeyConstraint(["session_id"], ["rephrase_sessions.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rephrase_variants_session_id", "rephrase_variants", ["session_id"])


def downgrade() -> None:
    """WARNING: destructive, all sessions and variants are lost."""
    op.drop_index("ix_rephrase_variants_session_id", table_name="rephrase_variants")
    op.drop_table("rephrase_variants")
    op.drop_index("ix_rephrase_sessions_created_at", table_name="rephrase_sessions")
    op.drop_index("ix_rephrase_sessions_user_id", table_name="rephrase_sessions")
    op.drop_table("rephrase_sessions")
