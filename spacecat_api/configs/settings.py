"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from spacecat_api.configs.base import RuntimeSettings
from spacecat_api.configs.aso import AsoSettings
from spacecat_api.configs.database import DatabaseSettings
from spacecat_api.configs.ims import ImsSettings
from spacecat_api.configs.queues import QueueSettings
from spacecat_api.configs.sandbox import SandboxSettings
from spacecat_api.configs.slack import SlackSettings
from spacecat_api.configs.storage import StorageSettings


class Settings(RuntimeSettings):
    """Runtime settings plus one nested settings object per concern."""

    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()
    queues: QueueSettings = QueueSettings()
    ims: ImsSettings = ImsSettings()
    aso: AsoSettings = AsoSettings()
    slack: SlackSettings = SlackSettings()
    sandbox: SandboxSettings = SandboxSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from spacecat_api.configs import get_settings
        settings = get_settings()
    """
    return Settings()
