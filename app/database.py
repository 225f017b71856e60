"""Database engine and session lifecycle."""
import logging

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def _configure_sqlite(dbapi_connection, connection_record):
    """Enable foreign keys and WAL so readers only see committed writes."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """Owns the async engine and hands out sessions.

    Constructed once per backing store and disposed explicitly; nothing
    else in the process holds a connection to the store.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.url = database_url
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _configure_sqlite)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def shares_connection(self) -> bool:
        """True when every session uses the same connection (in-memory SQLite).

        Such a store cannot isolate a reader from an open write transaction.
        """
        return isinstance(self.engine.sync_engine.pool, StaticPool)

    async def create_all(self) -> None:
        """Create all tables that don't exist yet."""
        # Import models so they register with Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready at %s", self.engine.url.render_as_string(hide_password=True))

    async def drop_all(self) -> None:
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database health check failed: %s", e)
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()

