from __future__ import annotations

import datetime as dt
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASIC_USER = "admin"
DEFAULT_BASIC_PASS = "password"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    basic_user: str = Field(default=DEFAULT_BASIC_USER, alias="BASIC_USER")
    basic_pass: SecretStr = Field(default=SecretStr(DEFAULT_BASIC_PASS), alias="BASIC_PASS")
    auth_realm: str = Field(default="Secure Area", alias="AUTH_REALM")

    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    database_key: Optional[SecretStr] = Field(default=None, alias="DATABASE_KEY")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    create_tables: bool = Field(default=True, alias="CREATE_TABLES")

    default_timezone: str = Field(default="UTC", alias="DEFAULT_TIMEZONE")
    listing_cache_seconds: int = Field(default=300, ge=0, alias="LISTING_CACHE_SECONDS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: str = Field(default="", alias="LOG_FILE")

    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    @field_validator("default_timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        if v.upper() != "UTC":
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError):
                raise ValueError(f"Unknown timezone: {v}")
        return v

    @property
    def uses_default_credentials(self) -> bool:
        return (
            self.basic_user == DEFAULT_BASIC_USER
            or self.basic_pass.get_secret_value() == DEFAULT_BASIC_PASS
        )

    def tzinfo(self) -> dt.tzinfo:
        # Zone applied to published_at values submitted without an offset
        if self.default_timezone.upper() == "UTC":
            return dt.timezone.utc
        return ZoneInfo(self.default_timezone)
