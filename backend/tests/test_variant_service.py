"""
Rephrase Backend: Variant Service Tests
=========================================

What we test:
    ✅ Every operation rejects anonymous callers before touching the database
    ✅ Every operation on another user's session is NOT_FOUND and changes nothing
    ✅ Create defaults isFavorite to false
    ✅ Update overwrites only supplied fields; empty update rejected
    ✅ A variant addressed through the wrong session is NOT_FOUND
    ✅ Delete is not idempotent
    ✅ List is in creation order, favoritesOnly filters, total matches items
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from app.exceptions import NotFoundError, UnauthorizedError, ValidationError
from app.schemas.rephrase import SessionCreate, VariantCreate, VariantUpdate
from app.services.session_service import UPDATE_REQUIRES_FIELDS, session_service
from app.services.variant_service import VariantService


async def _new_session(db, user, text="Source text"):
    result = await session_service.create_session(db, user, SessionCreate(original_text=text))
    return result.data.session


class TestVariantServiceAuthentication:

    def setup_method(self):
        self.service = VariantService()

    @pytest.mark.asyncio
    async def test_all_operations_require_user(self, mock_db_session):
        calls = [
            self.service.create_variant(
                mock_db_session, None, "s-1", VariantCreate(content="x")
            ),
            self.service.update_variant(
                mock_db_session, None, "s-1", "v-1", VariantUpdate(tone="formal")
            ),
            self.service.delete_variant(mock_db_session, None, "s-1", "v-1"),
            self.service.list_variants(mock_db_session, None, "s-1"),
        ]
        for call in calls:
            with pytest.raises(UnauthorizedError):
                await call

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.add.assert_not_called()
        mock_db_session.delete.assert_not_awaited()


class TestVariantServiceCreate:

    def setup_method(self):
        self.service = VariantService()

    @pytest.mark.asyncio
    async def test_create_variant(self, db_session, alice):
        session = await _new_session(db_session, alice)

        result = await self.service.create_variant(
            db_session,
            alice,
            session.id,
            VariantCreate(tone="formal", complexity="advanced", variant_label="A", content="Hi."),
        )

        variant = result.data.variant
        assert result.success is True
        assert variant.session_id == session.id
        assert variant.tone == "formal"
        assert variant.complexity == "advanced"
        assert variant.variant_label == "A"
        assert variant.content == "Hi."
        assert variant.is_favorite is False

    @pytest.mark.asyncio
    async def test_create_as_favorite(self, db_session, alice):
        session = await _new_session(db_session, alice)
        result = await self.service.create_variant(
            db_session, alice, session.id, VariantCreate(content="Hi.", is_favorite=True)
        )
        assert result.data.variant.is_favorite is True

    @pytest.mark.asyncio
    async def test_create_in_foreign_session(self, db_session, alice, bob):
        session = await _new_session(db_session, alice)

        with pytest.raises(NotFoundError):
            await self.service.create_variant(
                db_session, bob, session.id, VariantCreate(content="intrusion")
            )

        listed = await self.service.list_variants(db_session, alice, session.id)
        assert listed.data.total == 0

    @pytest.mark.asyncio
    async def test_create_in_missing_session(self, db_session, alice):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.create_variant(
                db_session, alice, "no-such-session", VariantCreate(content="x")
            )
        assert exc_info.value.message == "Rephrase session not found."


class TestVariantServiceUpdate:

    def setup_method(self):
        self.service = VariantService()

    async def _setup(self, db, user, **fields):
        session = await _new_session(db, user)
        fields.setdefault("content", "Original content")
        created = await self.service.create_variant(db, user, session.id, VariantCreate(**fields))
        return session, created.data.variant

    @pytest.mark.asyncio
    async def test_only_supplied_fields_change(self, db_session, alice):
        session, variant = await self._setup(db_session, alice, tone="formal", variant_label="A")

        result = await self.service.update_variant(
            db_session, alice, session.id, variant.id, VariantUpdate(is_favorite=True)
        )

        updated = result.data.variant
        assert updated.is_favorite is True
        assert updated.tone == "formal"
        assert updated.variant_label == "A"
        assert updated.content == "Original content"
        assert updated.session_id == session.id
        assert updated.created_at == variant.created_at

    @pytest.mark.asyncio
    async def test_session_timestamp_untouched(self, db_session, alice):
        session, variant = await self._setup(db_session, alice)

        await self.service.update_variant(
            db_session, alice, session.id, variant.id, VariantUpdate(content="New")
        )

        listed = await session_service.list_sessions(db_session, alice)
        assert listed.data.items[0].updated_at == session.updated_at

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, db_session, alice):
        session, variant = await self._setup(db_session, alice)

        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_variant(
                db_session, alice, session.id, variant.id, VariantUpdate()
            )
        assert exc_info.value.message == UPDATE_REQUIRES_FIELDS

    @pytest.mark.asyncio
    async def test_foreign_session(self, db_session, alice, bob):
        session, variant = await self._setup(db_session, alice)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_variant(
                db_session, bob, session.id, variant.id, VariantUpdate(content="hijack")
            )
        assert exc_info.value.message == "Rephrase session not found."

        listed = await self.service.list_variants(db_session, alice, session.id)
        assert listed.data.items[0].content == "Original content"

    @pytest.mark.asyncio
    async def test_variant_through_wrong_session(self, db_session, alice):
        """A variant id is only reachable through the session that holds it."""
        session, variant = await self._setup(db_session, alice)
        other = await _new_session(db_session, alice, text="Another text")

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_variant(
                db_session, alice, other.id, variant.id, VariantUpdate(tone="casual")
            )
        assert exc_info.value.message == "Rephrase variant not found."

    @pytest.mark.asyncio
    async def test_missing_variant(self, db_session, alice):
        session = await _new_session(db_session, alice)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_variant(
                db_session, alice, session.id, "no-such-variant", VariantUpdate(tone="casual")
            )
        assert exc_info.value.message == "Rephrase variant not found."


class TestVariantServiceDelete:

    def setup_method(self):
        self.service = VariantService()

    @pytest.mark.asyncio
    async def test_delete_then_delete_again(self, db_session, alice):
        session = await _new_session(db_session, alice)
        created = await self.service.create_variant(
            db_session, alice, session.id, VariantCreate(content="bye")
        )
        variant_id = created.data.variant.id

        ack = await self.service.delete_variant(db_session, alice, session.id, variant_id)
        assert ack.success is True

        listed = await self.service.list_variants(db_session, alice, session.id)
        assert listed.data.total == 0

        with pytest.raises(NotFoundError):
            await self.service.delete_variant(db_session, alice, session.id, variant_id)

    @pytest.mark.asyncio
    async def test_delete_in_foreign_session(self, db_session, alice, bob):
        session = await _new_session(db_session, alice)
        created = await self.service.create_variant(
            db_session, alice, session.id, VariantCreate(content="keep me")
        )

        with pytest.raises(NotFoundError):
            await self.service.delete_variant(
                db_session, bob, session.id, created.data.variant.id
            )

        listed = await self.service.list_variants(db_session, alice, session.id)
        assert listed.data.total == 1

    @pytest.mark.asyncio
    async def test_delete_through_wrong_session(self, db_session, alice):
        session = await _new_session(db_session, alice)
        other = await _new_session(db_session, alice, text="Other")
        created = await self.service.create_variant(
            db_session, alice, session.id, VariantCreate(content="keep me")
        )

        with pytest.raises(NotFoundError):
            await self.service.delete_variant(
                db_session, alice, other.id, created.data.variant.id
            )

        listed = await self.service.list_variants(db_session, alice, session.id)
        assert listed.data.total == 1


class TestVariantServiceList:

    def setup_method(self):
        self.service = VariantService()

    @pytest.mark.asyncio
    async def test_creation_order_and_favorites_filter(self, db_session, alice):
        session = await _new_session(db_session, alice)
        base = datetime(2030, 5, 1, tzinfo=timezone.utc)
        stamps = [base + timedelta(seconds=i) for i in range(3)]

        with patch("app.services.variant_service.utcnow", side_effect=stamps):
            first = await self.service.create_variant(
                db_session, alice, session.id, VariantCreate(content="one", is_favorite=True)
            )
            second = await self.service.create_variant(
                db_session, alice, session.id, VariantCreate(content="two")
            )
            third = await self.service.create_variant(
                db_session, alice, session.id, VariantCreate(content="three", is_favorite=True)
            )

        everything = await self.service.list_variants(db_session, alice, session.id)
        assert everything.data.total == 3
        assert [v.id for v in everything.data.items] == [
            first.data.variant.id,
            second.data.variant.id,
            third.data.variant.id,
        ]

        favorites = await self.service.list_variants(
            db_session, alice, session.id, favorites_only=True
        )
        assert favorites.data.total == 2
        assert [v.content for v in favorites.data.items] == ["one", "three"]
        assert all(v.is_favorite for v in favorites.data.items)

    @pytest.mark.asyncio
    async def test_only_this_sessions_variants(self, db_session, alice):
        session = await _new_session(db_session, alice)
        other = await _new_session(db_session, alice, text="Other")
        await self.service.create_variant(db_session, alice, session.id, VariantCreate(content="a"))
        await self.service.create_variant(db_session, alice, other.id, VariantCreate(content="b"))

        result = await self.service.list_variants(db_session, alice, session.id)
        assert result.data.total == 1
        assert result.data.items[0].content == "a"

    @pytest.mark.asyncio
    async def test_foreign_session_is_not_empty_list(self, db_session, alice, bob):
        session = await _new_session(db_session, alice)
        await self.service.create_variant(
            db_session, alice, session.id, VariantCreate(content="private")
        )

        with pytest.raises(NotFoundError):
            await self.service.list_variants(db_session, bob, session.id)
