"""
SQS queue configuration.

Dependencies: pydantic_settings
System role: Job queue configuration for audits and reports
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QueueSettings(BaseSettings):
    """Queue URLs for asynchronous job submission."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    region: str = Field(
        default="us-east-1",
        validation_alias="SQS_REGION",
        description="AWS region for SQS",
    )
    audit_jobs_queue_url: str = Field(
        default="",
        description="Queue receiving audit jobs",
    )
    report_jobs_queue_url: str = Field(
        default="",
        description="Queue receiving report generation jobs",
    )
