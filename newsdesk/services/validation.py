from __future__ import annotations

import datetime as dt
from email.utils import parsedate_to_datetime
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from newsdesk.models import NewsStatus, TargetSite

TITLE_REQUIRED = "Title is required"
BODY_REQUIRED = "Body is required"
INVALID_TARGET_SITE = "Target site must be one of LP, HP, BOTH"
INVALID_STATUS = "Status must be one of draft, published"
INVALID_PUBLISHED_AT = "Please enter a valid date and time"

class NewsValidationError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

def parse_published_at(value: str, tzinfo: dt.tzinfo = dt.timezone.utc) -> dt.datetime:
    """Parse an ISO-8601 or RFC 2822 date/time and return it as a UTC instant.

    Values without an offset are read as wall-clock time in ``tzinfo``.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty date")
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError):
            raise ValueError(f"unparseable date: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tzinfo)
    return parsed.astimezone(dt.timezone.utc)

class NewsForm(BaseModel):
    """Submitted article fields. Fields are checked in declaration order."""

    model_config = ConfigDict(validate_default=True, extra="ignore")

    # "genre" is the alternate name some admin forms submit for the same field
    title: str = Field(default=None, validation_alias=AliasChoices("title", "genre"))
    body_html: str = None
    target_site: TargetSite = None
    status: NewsStatus = None
    published_at: dt.datetime = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise PydanticCustomError("title_required", TITLE_REQUIRED)
        return v.strip()

    @field_validator("body_html", mode="before")
    @classmethod
    def _body_required(cls, v: Any) -> str:
        # Checked on the raw body, before sanitization
        if not isinstance(v, str) or len(v) < 1:
            raise PydanticCustomError("body_required", BODY_REQUIRED)
        return v

    @field_validator("target_site", mode="before")
    @classmethod
    def _known_target_site(cls, v: Any) -> Any:
        if not isinstance(v, str) or v not in {t.value for t in TargetSite}:
            raise PydanticCustomError("invalid_target_site", INVALID_TARGET_SITE)
        return v

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, v: Any) -> Any:
        if not isinstance(v, str) or v not in {s.value for s in NewsStatus}:
            raise PydanticCustomError("invalid_status", INVALID_STATUS)
        return v

    @field_validator("published_at", mode="before")
    @classmethod
    def _parseable_published_at(cls, v: Any, info: ValidationInfo) -> dt.datetime:
        tzinfo = (info.context or {}).get("tzinfo", dt.timezone.utc)
        if not isinstance(v, str):
            raise PydanticCustomError("invalid_published_at", INVALID_PUBLISHED_AT)
        try:
            return parse_published_at(v, tzinfo)
        except (ValueError, OverflowError):
            raise PydanticCustomError("invalid_published_at", INVALID_PUBLISHED_AT)

    def to_payload(self, body_html: str) -> dict:
        return {
            "title": self.title,
            "body_html": body_html,
            "target_site": self.target_site.value,
            "status": self.status.value,
            "published_at": self.published_at,
        }

def validate_news_form(fields: Mapping[str, Any], tzinfo: dt.tzinfo = dt.timezone.utc) -> NewsForm:
    """Validate submitted fields; raise NewsValidationError with the first violation."""
    try:
        return NewsForm.model_validate(dict(fields), context={"tzinfo": tzinfo})
    except ValidationError as e:
        raise NewsValidationError(e.errors()[0]["msg"]) from None
