from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storerate.core.config import DatabaseSettings


class Database:
    """Engine + session factory owned by one application instance.

    Built once at startup and disposed by the app lifespan on shutdown.
    """

    def __init__(self, url: str, **engine_kwargs):
        self.engine = create_async_engine(url, **engine_kwargs)
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        url = settings.DATABASE_URL
        if url.startswith("sqlite"):
            # In-memory sqlite only survives on a single shared connection.
            return cls(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
        return cls(
            url,
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
