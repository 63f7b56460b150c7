from __future__ import annotations

from typing import Optional

from sqlalchemy import select, update, delete, desc

from newsdesk.core.db import Database
from newsdesk.models import News

class NewsRepository:
    """Queries against the ``news`` table. SQLAlchemy errors propagate to callers."""

    def __init__(self, database: Database):
        self._database = database

    async def list_all(self) -> list[News]:
        async with self._database.session() as session:
            stmt = select(News).order_by(desc(News.published_at), desc(News.id))
            return list((await session.execute(stmt)).scalars().all())

    async def get(self, news_id: int) -> Optional[News]:
        async with self._database.session() as session:
            return (await session.execute(select(News).where(News.id == news_id))).scalars().first()

    async def insert(self, payload: dict) -> News:
        async with self._database.session() as session:
            news = News(**payload)
            session.add(news)
            await session.commit()
            await session.refresh(news)
            return news

    async def update(self, news_id: int, payload: dict) -> int:
        async with self._database.session() as session:
            res = await session.execute(update(News).where(News.id == news_id).values(**payload))
            await session.commit()
            return res.rowcount

    async def delete(self, news_id: int) -> int:
        async with self._database.session() as session:
            res = await session.execute(delete(News).where(News.id == news_id))
            await session.commit()
            return res.rowcount
