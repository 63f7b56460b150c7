from __future__ import annotations

import datetime as dt
import enum

from sqlalchemy import String, Integer, DateTime, Text, func, Index
from sqlalchemy.orm import Mapped, mapped_column
from newsdesk.core.db import Base

class TargetSite(str, enum.Enum):
    LP = "LP"
    HP = "HP"
    BOTH = "BOTH"

class NewsStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"

def _as_utc(value: dt.datetime | None) -> dt.datetime | None:
    # SQLite hands back naive datetimes; everything stored is UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)

class News(Base):
    __tablename__ = "news"
    __table_args__ = (
        Index("ix_news_published_at", "published_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String, nullable=False)
    body_html: Mapped[str] = mapped_column(Text, nullable=False)

    # LP / HP / BOTH
    target_site: Mapped[str] = mapped_column(String(8), nullable=False)
    # draft / published
    status: Mapped[str] = mapped_column(String(16), nullable=False)

    published_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "body_html": self.body_html,
            "target_site": self.target_site,
            "status": self.status,
            "published_at": _as_utc(self.published_at).isoformat(),
            "created_at": _as_utc(self.created_at).isoformat() if self.created_at else None,
            "updated_at": _as_utc(self.updated_at).isoformat() if self.updated_at else None,
        }
