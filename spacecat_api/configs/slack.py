"""
Slack configuration.

Dependencies: pydantic_settings
System role: Chat notification configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlackSettings(BaseSettings):
    """Slack bot credentials and channels."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SLACK_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    bot_token: str = Field(default="", description="Bot OAuth token")
    s2s_channel_id: str = Field(
        default="",
        validation_alias="S2S_SLACK_CHANNEL_ID",
        description="Channel receiving consumer lifecycle notifications",
    )
    target_channels: str = Field(
        default="",
        description="Comma separated target=channel pairs",
    )
