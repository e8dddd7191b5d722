"""
Process-level runtime settings.

Values the app factory reads once at startup: the deployment stage that
tags every log line, the root log level, and the browser origins allowed
to call the API. Concern-specific settings (storage, queues, IMS, ...)
live in their own modules and are aggregated in settings.py.

Dependencies: pydantic, pydantic_settings
System role: Process configuration for the API entry point
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RuntimeSettings(BaseSettings):
    """Stage, log level and CORS origins of the running API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="dev",
        description="Deployment stage (dev, stage, prod), shown on every log line",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed by CORS, as a JSON list",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level
