"""
Configuration module for the catalog service.

The Settings object centralizes environment-driven configuration with strict
typing and validation rules so that the rest of the codebase can rely on a
single source of truth.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    project_name: str = Field(default="Catalog Service", alias="PROJECT_NAME")
    environment: Literal["local", "test", "staging", "production"] = Field(
        default="local",
        alias="APP_ENV",
    )
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(alias="DATABASE_URL")

    inventory_service_url: str = Field(
        alias="INVENTORY_SERVICE_URL",
        description="Base URL of the inventory peer (GET /{productId}).",
    )
    notification_service_url: str = Field(
        alias="NOTIFICATION_SERVICE_URL",
        description="Base URL of the notification peer (POST /low-stock).",
    )
    http_connect_timeout_ms: int = Field(default=2000, alias="HTTP_CONNECT_TIMEOUT_MS")
    http_read_timeout_ms: int = Field(default=5000, alias="HTTP_READ_TIMEOUT_MS")

    cache_ttl_seconds: int = Field(
        default=600,
        alias="CACHE_TTL_SECONDS",
        description="Expire-after-write TTL shared by the product and category caches.",
    )
    cache_max_entries: int = Field(
        default=500,
        alias="CACHE_MAX_ENTRIES",
        description="Upper bound of entries per named cache before LRU eviction.",
    )

    low_stock_threshold: int = Field(
        default=10,
        alias="LOW_STOCK_THRESHOLD",
        description="Stock level below which a downward crossing triggers a notification.",
    )

    @field_validator(
        "database_url",
        "inventory_service_url",
        "notification_service_url",
        mode="before",
    )
    @classmethod
    def _strip_string(cls, value: str | None, info: ValidationInfo) -> str:
        if value is None:
            field = (info.field_name or "value").upper()
            raise ValueError(f"{field} must be provided.")
        trimmed = value.strip()
        if not trimmed:
            field = (info.field_name or "value").upper()
            raise ValueError(f"{field} must not be empty.")
        return trimmed

    @field_validator("inventory_service_url", "notification_service_url")
    @classmethod
    def _validate_service_url(cls, value: str, info: ValidationInfo) -> str:
        if not value.startswith(("http://", "https://")):
            field = (info.field_name or "value").upper()
            raise ValueError(f"{field} must be an http(s) URL.")
        return value.rstrip("/")

    @field_validator(
        "http_connect_timeout_ms",
        "http_read_timeout_ms",
        "cache_ttl_seconds",
        "cache_max_entries",
    )
    @classmethod
    def _validate_positive(cls, value: int, info: ValidationInfo) -> int:
        if value <= 0:
            field = (info.field_name or "value").upper()
            raise ValueError(f"{field} must be a positive integer.")
        return value

    @field_validator("low_stock_threshold")
    @classmethod
    def _validate_threshold(cls, value: int) -> int:
        if value < 0:
            raise ValueError("LOW_STOCK_THRESHOLD must be >= 0.")
        return value

    @property
    def http_connect_timeout(self) -> float:
        """Connect timeout in seconds, as httpx expects it."""
        return self.http_connect_timeout_ms / 1000

    @property
    def http_read_timeout(self) -> float:
        """Read timeout in seconds, as httpx expects it."""
        return self.http_read_timeout_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance so configuration is evaluated once."""
    # BaseSettings loads required values from env/.env during instantiation.
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
