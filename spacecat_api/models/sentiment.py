"""
Sentiment configuration DTOs.

Dependencies: pydantic
System role: Sentiment API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from spacecat_api.models.common import CamelModel


class SentimentTopicDto(CamelModel):
    """Sentiment topic as returned by the API."""

    topic_id: uuid.UUID = Field(validation_alias="id", serialization_alias="topicId")
    site_id: uuid.UUID
    name: str
    description: str | None = None
    topic_name: str = ""
    sub_prompts: list[str] = Field(default_factory=list)
    audits: list[str] = Field(default_factory=list)
    enabled: bool
    created_at: datetime
    updated_at: datetime
    created_by: str
    updated_by: str


class SentimentGuidelineDto(CamelModel):
    """Sentiment guideline as returned by the API."""

    guideline_id: uuid.UUID = Field(validation_alias="id", serialization_alias="guidelineId")
    site_id: uuid.UUID
    name: str
    instruction: str
    enabled: bool
    created_at: datetime
    updated_at: datetime
    created_by: str
    updated_by: str
