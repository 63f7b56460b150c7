from __future__ import annotations

import datetime as dt
import enum
from dataclasses import dataclass
from typing import Any, Mapping, Union

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from newsdesk.core.cache import PageCache
from newsdesk.models import News
from newsdesk.services.repository import NewsRepository
from newsdesk.services.sanitize import sanitize_html
from newsdesk.services.validation import NewsValidationError, validate_news_form

ADMIN_LISTING_KEY = "/admin"

class Outcome(str, enum.Enum):
    OK = "ok"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    FAILED = "failed"

@dataclass
class ActionResult:
    success: bool
    message: str
    outcome: Outcome = Outcome.OK

    def to_dict(self) -> dict:
        return {"success": self.success, "message": self.message}

@dataclass
class Found:
    news: News

@dataclass
class NotFound:
    pass

@dataclass
class StoreError:
    detail: str

Lookup = Union[Found, NotFound, StoreError]

class NewsRetrievalError(Exception):
    pass

class NewsService:
    """Validate, sanitize, persist and invalidate the admin listing for each news operation."""

    def __init__(self, repository: NewsRepository, cache: PageCache, tzinfo: dt.tzinfo = dt.timezone.utc):
        self.repository = repository
        self.cache = cache
        self.tzinfo = tzinfo

    async def list_news(self) -> list[News]:
        try:
            return await self.repository.list_all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching news: {type(e).__name__}: {e}")
            raise NewsRetrievalError("Failed to fetch articles") from e

    async def get_news(self, news_id: int) -> Lookup:
        try:
            news = await self.repository.get(news_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching news {news_id}: {type(e).__name__}: {e}")
            return StoreError(detail=f"{type(e).__name__}: {e}")
        if news is None:
            return NotFound()
        return Found(news)

    def _prepare(self, fields: Mapping[str, Any]) -> dict:
        form = validate_news_form(fields, self.tzinfo)
        body_html = sanitize_html(form.body_html)
        if not body_html.strip():
            # Accepted as submitted; the raw body was non-empty
            logger.warning(f"Body of {form.title!r} is empty after sanitization")
        return form.to_payload(body_html)

    async def create_news(self, fields: Mapping[str, Any]) -> ActionResult:
        try:
            payload = self._prepare(fields)
        except NewsValidationError as e:
            logger.info(f"Rejected news create: {e.message}")
            return ActionResult(False, e.message, Outcome.INVALID)

        try:
            news = await self.repository.insert(payload)
        except SQLAlchemyError as e:
            logger.error(f"Error creating news: {type(e).__name__}: {e}")
            return ActionResult(False, "Failed to create article", Outcome.FAILED)

        logger.info(f"Created news {news.id}")
        self.cache.invalidate(ADMIN_LISTING_KEY)
        return ActionResult(True, "Article created")

    async def update_news(self, news_id: int, fields: Mapping[str, Any]) -> ActionResult:
        try:
            payload = self._prepare(fields)
        except NewsValidationError as e:
            logger.info(f"Rejected news update {news_id}: {e.message}")
            return ActionResult(False, e.message, Outcome.INVALID)

        try:
            matched = await self.repository.update(news_id, payload)
        except SQLAlchemyError as e:
            logger.error(f"Error updating news {news_id}: {type(e).__name__}: {e}")
            return ActionResult(False, "Failed to update article", Outcome.FAILED)

        if matched == 0:
            return ActionResult(False, "Article not found", Outcome.NOT_FOUND)

        logger.info(f"Updated news {news_id}")
        self.cache.invalidate(ADMIN_LISTING_KEY)
        return ActionResult(True, "Article updated")

    async def delete_news(self, news_id: int) -> ActionResult:
        try:
            deleted = await self.repository.delete(news_id)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting news {news_id}: {type(e).__name__}: {e}")
            return ActionResult(False, "Failed to delete article", Outcome.FAILED)

        if deleted == 0:
            return ActionResult(False, "Article not found", Outcome.NOT_FOUND)

        logger.info(f"Deleted news {news_id}")
        self.cache.invalidate(ADMIN_LISTING_KEY)
        return ActionResult(True, "Article deleted")
