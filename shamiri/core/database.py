"""
Relational storage handle.

One ``Database`` per process, created lazily by ``get_database()`` and shared
by every store. Tables are declared with SQLAlchemy Core.
"""

from typing import Optional
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from server.config import config
from server.logging_config import get_logger

logger = get_logger(__name__)


class Database:
    def __init__(self, url: str, echo: bool = False):
        """Create the async engine and table definitions (no I/O yet)."""
        self.url = url
        engine_kwargs = {"echo": echo}
        if ":memory:" in url:
            # A single shared connection, otherwise every checkout sees an empty database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.metadata = MetaData()

        self.users = Table(
            'users', self.metadata,
            Column('id', String, primary_key=True),
            Column('auth_user_id', String, unique=True, nullable=False),
            Column('created_at', DateTime, nullable=False),
        )

        self.categories = Table(
            'categories', self.metadata,
            Column('id', String, primary_key=True),
            Column('user_id', String, ForeignKey('users.id'), index=True, nullable=False),
            Column('name', String, nullable=False),
            Column('description', Text),
            Column('created_at', DateTime, nullable=False),
            Column('updated_at', DateTime, nullable=False),
        )

        self.entries = Table(
            'entries', self.metadata,
            Column('id', String, primary_key=True),
            Column('user_id', String, ForeignKey('users.id'), index=True, nullable=False),
            Column('title', String, nullable=False),
            Column('content', Text, nullable=False),
            Column('mood', String, nullable=False),
            Column('mood_score', Integer, nullable=False),
            Column('mood_image_url', String),
            Column('category_id', String, ForeignKey('categories.id'), index=True),
            Column('created_at', DateTime, nullable=False),
            Column('updated_at', DateTime, nullable=False),
        )

        self.drafts = Table(
            'drafts', self.metadata,
            Column('id', String, primary_key=True),
            Column('user_id', String, ForeignKey('users.id'), unique=True, nullable=False),
            Column('title', String),
            Column('content', Text),
            Column('mood', String),
            Column('updated_at', DateTime, nullable=False),
        )

    async def init_schema(self):
        """Create tables if they don't exist"""
        async with self.engine.begin() as conn:
            await conn.run_sync(self.metadata.create_all)

    async def close(self):
        await self.engine.dispose()


# Global handle
_database: Optional[Database] = None


def get_database() -> Database:
    """
    Get the process-wide database handle, creating it on first use.

    Returns:
        The shared Database instance
    """
    global _database

    if _database is None:
        _database = Database(config.DATABASE.URL, echo=config.DATABASE.ECHO)
        logger.info(f"Initialized database handle: {_database.engine.url.render_as_string(hide_password=True)}")

    return _database


async def reset_database():
    """Dispose the current handle (useful for testing)"""
    global _database
    if _database is not None:
        await _database.close()
    _database = None
