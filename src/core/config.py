"""Application configuration using pydantic-settings."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.raindrop.io/rest/v1"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Raindrop.io test token or OAuth access token, obtained out of band
    raindrop_token: str = Field(default="", validation_alias="RAINDROP_TOKEN")

    raindrop_api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias="RAINDROP_API_URL",
    )

    # Upper bound for a single upstream call, in seconds
    raindrop_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias="RAINDROP_TIMEOUT",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
    )

    @field_validator("raindrop_token", mode="before")
    @classmethod
    def strip_token(cls, value: object) -> object:
        """Trim surrounding whitespace so a blank token counts as missing."""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log levels in any case."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("raindrop_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Endpoint paths are appended with a leading slash."""
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
