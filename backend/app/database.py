"""
Rephrase Backend: Database Engine and Sessions
================================================

Owns the async engine, the session factory, the declarative `Base` shared by
the ORM models, and the `get_db_session` dependency that gives each HTTP
request its own transaction.

Transaction rule:
    One request = one AsyncSession = one transaction. The dependency commits
    when the route returns normally and rolls back when anything raises,
    including the service-layer errors (Unauthorized / NotFound /
    BadRequest), which by construction are raised before any write.

    Routes declare it as `Depends(get_db_session, scope="function")` so the
    commit finishes before the response is sent. A failed commit then
    reaches the SQLAlchemyError handler as a 500 instead of following a
    success envelope the client already received.

Pooling:
    PostgreSQL gets a bounded pool (DB_POOL_SIZE + DB_MAX_OVERFLOW) with
    pre-ping and hourly recycling. SQLite URLs get the dialect defaults.
"""

from typing import Any, AsyncIterator, Dict

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


engine = create_async_engine(settings.database_url, **_engine_options())

# Rows stay readable after commit; response records are built from them
async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base; its metadata feeds Alembic and the test schema."""


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency: a request-scoped session wrapped in one transaction.

    Exceptions are re-raised after rollback so the app-level handlers can
    map them to the error envelope.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()


async def dispose_engine() -> None:
    """Close pooled connections (app shutdown)."""
    await engine.dispose()
