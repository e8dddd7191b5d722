"""
Sandbox audit configuration.

Dependencies: pydantic_settings
System role: Rate limit window for sandbox audit triggers
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SandboxSettings(BaseSettings):
    """Sandbox audit trigger settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SANDBOX_AUDIT_",
        case_sensitive=False,
        extra="ignore",
    )

    rate_limit_hours: float = Field(
        default=1,
        ge=0,
        description="Minimum hours between two runs of the same audit on a site",
    )
