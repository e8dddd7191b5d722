"""
Pull-request webhook configuration.

Endpoints of the sites-optimizer GitHub app that turns generated
accessibility fixes into pull requests.

Dependencies: pydantic_settings
System role: External webhook configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AsoSettings(BaseSettings):
    """Settings for the pull-request handling webhook."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ASO_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    app_url: str = Field(
        default="https://283250-asosampleapp-stage.adobeioruntime.net",
        description="Base URL of the optimizer app",
    )
    pr_handler_path: str = Field(
        default="/api/v1/web/aem-sites-optimizer-gh-app/pull-request-handler",
        description="Path of the pull-request handler action",
    )
    autofix_api_url: str = Field(
        default="",
        validation_alias="AIO_AUTOFIX_API_URL",
        description="Legacy form accessibility autofix endpoint",
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    @property
    def pull_request_handler_url(self) -> str:
        """Full URL of the pull-request handler."""
        return f"{self.app_url.rstrip('/')}{self.pr_handler_path}"
