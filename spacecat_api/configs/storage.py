"""
S3 bucket configuration.

Buckets holding scraped content, generated reports, enhanced (mystique)
reports and the accessibility fix assets consumed by the apply-fixes flow.

Dependencies: pydantic_settings
System role: Object storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for S3 bucket operations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="S3_",
        case_sensitive=False,
        extra="ignore",
    )

    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 buckets",
    )
    scraper_bucket: str = Field(
        default="",
        description="Bucket with scrapes, imports and accessibility results",
    )
    report_bucket: str = Field(
        default="",
        description="Bucket with raw generated reports",
    )
    mystique_bucket: str = Field(
        default="",
        description="Bucket with enhanced reports",
    )
    mystique_assets_bucket: str = Field(
        default="spacecat-dev-mystique-assets",
        description="Bucket with generated accessibility fix reports and assets",
    )
    presigned_url_expiry: int = Field(
        default=7 * 24 * 60 * 60,
        description="Presigned URL expiry in seconds (default 7 days)",
    )
