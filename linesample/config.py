"""
Configuration settings for linesample.

Uses Pydantic Settings to load environment variables (and an optional `.env`
file) for logging and stream defaults. Command-line options override these.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = Field("WARNING", alias="LINESAMPLE_LOG_LEVEL")
    json_logs: bool = Field(False, alias="LINESAMPLE_JSON_LOGS")

    # Streams
    delimiter: str = Field(",", alias="LINESAMPLE_DELIMITER")
    encoding: str = Field("utf-8", alias="LINESAMPLE_ENCODING")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
