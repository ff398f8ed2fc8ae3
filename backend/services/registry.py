"""
Channel Registry - Subscribed podcast channels in the `podcasts` table.

Statements are built with SQLAlchemy Core, so every value is a bound parameter.
"""
import asyncio
import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy import Column, Integer, MetaData, Table, Text, create_engine, delete, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from services.errors import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

metadata = MetaData()

podcasts = Table(
    "podcasts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("rss_url", Text, nullable=False),
    Column("title", Text, nullable=False),
    sqlite_autoincrement=True,
)


def make_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared with the executor threads."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


class ChannelRegistry:
    """CRUD over registered channels. Holds no rows between calls."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def init_schema(self) -> None:
        """Create the podcasts table if it does not exist."""
        metadata.create_all(self.engine)

    async def _run(self, func: Callable[[], T], action: str) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, func)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to {action}: {e}") from e

    def _list(self) -> list[dict]:
        stmt = select(podcasts.c.id, podcasts.c.rss_url, podcasts.c.title).order_by(podcasts.c.id.desc())
        with self.engine.connect() as conn:
            return [dict(row._mapping) for row in conn.execute(stmt)]

    def _add(self, rss_url: str, title: str) -> Optional[int]:
        stmt = insert(podcasts).values(rss_url=rss_url, title=title)
        with self.engine.begin() as conn:
            result = conn.execute(stmt)
            return result.inserted_primary_key[0]

    def _delete(self, channel_id: int) -> int:
        stmt = delete(podcasts).where(podcasts.c.id == channel_id)
        with self.engine.begin() as conn:
            return conn.execute(stmt).rowcount

    async def list_channels(self) -> list[dict]:
        """All channels, newest id first."""
        return await self._run(self._list, "list channels")

    async def add_channel(self, rss_url: str, title: str) -> Optional[int]:
        """Insert a channel row. Duplicate URLs are allowed."""
        channel_id = await self._run(lambda: self._add(rss_url, title), "register channel")
        logger.info(f"Registered channel {channel_id}: '{title}' ({rss_url})")
        return channel_id

    async def delete_channel(self, channel_id: int) -> int:
        """Delete a channel by id; returns the number of rows removed."""
        deleted = await self._run(lambda: self._delete(channel_id), "delete channel")
        if deleted:
            logger.info(f"Deleted channel {channel_id}")
        else:
            logger.warning(f"Delete requested for unknown channel {channel_id}")
        return deleted
