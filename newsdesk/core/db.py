from __future__ import annotations

from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from newsdesk.core.config import Settings

class DataStoreNotConfigured(RuntimeError):
    pass

class Base(DeclarativeBase):
    pass

def _database_url(settings: Settings):
    if not settings.database_url:
        raise DataStoreNotConfigured("DATABASE_URL is not set")
    url = make_url(settings.database_url)
    if settings.database_key is not None:
        url = url.set(password=settings.database_key.get_secret_value())
    return url

class Database:
    """Owns the engine and session factory for the configured data store."""

    def __init__(self, settings: Settings):
        self.url = _database_url(settings)
        self.engine = create_async_engine(self.url, echo=settings.database_echo)
        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    def session(self) -> AsyncSession:
        return self.sessionmaker()

    async def create_tables(self) -> None:
        # Registers the mapped tables on Base.metadata
        import newsdesk.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Tables ready on {self.url.render_as_string(hide_password=True)}")

    async def dispose(self) -> None:
        await self.engine.dispose()
