"""Database engine and async session factory."""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from appointment_manager.config import settings
from appointment_manager.models.tables import Base


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, enforcing foreign keys on SQLite.

    An in-memory SQLite URL gets a single shared connection so the schema
    survives across sessions.
    """
    kwargs: dict = {"echo": echo}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite and (database_url.endswith("://") or ":memory:" in database_url):
        kwargs["poolclass"] = StaticPool

    new_engine = create_async_engine(database_url, **kwargs)

    if is_sqlite:

        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.database_url, echo=settings.debug)

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def init_db(target: AsyncEngine = engine) -> None:
    """Create all tables that don't yet exist."""
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session, rolling back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
