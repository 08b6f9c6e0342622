"""Package configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app_asserts.domain.value_objects import DEFAULT_WEB_SCHEMES, normalize_web_schemes


class Settings(BaseSettings):
    """Central configuration loaded from ``APP_ASSERTS_*`` env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_prefix="APP_ASSERTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    web_schemes: list[str] = list(DEFAULT_WEB_SCHEMES)

    @field_validator("web_schemes")
    @classmethod
    def _normalize_schemes(cls, v: list[str]) -> list[str]:
        return list(normalize_web_schemes(v))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings (cached after first call)."""
    return Settings()
