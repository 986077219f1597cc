"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from glassy.config.defaults import (
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_MAX_AGE_SECONDS,
    DEFAULT_HOST,
    DEFAULT_LOG_FORMAT,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ScraperConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0.0)
    user_agent: str = DEFAULT_USER_AGENT


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    cache_max_age_seconds: int = Field(default=DEFAULT_CACHE_MAX_AGE_SECONDS, ge=0)


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: LogLevel = LogLevel.INFO
    format: str = DEFAULT_LOG_FORMAT


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    scraper: ScraperConfig = ScraperConfig()
    server: ServerConfig = ServerConfig()
    logging: LoggingConfig = LoggingConfig()
