"""Application configuration."""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the provided configuration."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    bot_token: str
    allowed_users: str
    database_url: str
    database_service_key: str
    timezone: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator(
        "bot_token", "allowed_users", "database_url", "database_service_key"
    )
    @classmethod
    def _require_value(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        name = value.strip()
        if not is_valid_timezone(name):
            raise ValueError(f"unknown time zone {name!r}")
        return name


def load_settings(**overrides: object) -> Settings:
    """Load settings, raising ConfigurationError on missing or bad values."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc


def parse_allowed_user_ids(raw: str | None) -> frozenset[int]:
    """Parse allowed Telegram user IDs from env, dropping unparsable entries."""
    if raw is None:
        return frozenset()
    ids: set[int] = set()
    for chunk in raw.split(","):
        value = chunk.strip()
        if value.isascii() and value.isdigit():
            ids.add(int(value))
    return frozenset(ids)


def is_valid_timezone(value: str) -> bool:
    """Return True when the name is a known IANA time zone."""
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
