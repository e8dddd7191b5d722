"""
IMS (identity management service) configuration.

Dependencies: pydantic_settings
System role: Credentials for service tokens and token validation
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImsSettings(BaseSettings):
    """IMS client credentials."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMS_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="", description="IMS host name, without scheme")
    client_id: str = Field(default="", description="Service client ID")
    client_code: str = Field(default="", description="Service authorization code")
    client_secret: str = Field(default="", description="Service client secret")
    timeout: float = Field(default=10.0, description="HTTP timeout in seconds")

    @property
    def is_configured(self) -> bool:
        """Whether enough credentials exist to request a service token."""
        return bool(self.host and self.client_id and self.client_secret)
