"""
Sentiment configuration ORM models.

Per-site topics and guidelines steering sentiment analysis audits.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Sentiment configuration persistence
"""

import uuid

from sqlalchemy import JSON, Boolean, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SentimentTopicModel(Base, UUIDMixin, TimestampMixin):
    """
    Topic tracked for a site.

    Attributes:
        id: UUID primary key, exposed as topicId
        site_id: Owning site
        name: Topic name
        description: Optional description
        topic_name: Optional canonical topic label
        sub_prompts: Prompt strings refining the topic
        audits: Audit types the topic is linked to
        enabled: Whether audits pick the topic up
        created_by: Creator identifier
        updated_by: Last editor identifier
    """

    __tablename__ = "sentiment_topics"

    site_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    topic_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    sub_prompts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    audits: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_by: Mapped[str] = mapped_column(String(255), nullable=False, default="system")

    updated_by: Mapped[str] = mapped_column(String(255), nullable=False, default="system")


class SentimentGuidelineModel(Base, UUIDMixin, TimestampMixin):
    """
    Free-text instruction applied to a site's sentiment analysis.

    Attributes:
        id: UUID primary key, exposed as guidelineId
        site_id: Owning site
        name: Guideline name
        instruction: Instruction text
        enabled: Whether audits pick the guideline up
        created_by: Creator identifier
        updated_by: Last editor identifier
    """

    __tablename__ = "sentiment_guidelines"

    site_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    instruction: Mapped[str] = mapped_column(Text, nullable=False)

    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_by: Mapped[str] = mapped_column(String(255), nullable=False, default="system")

    updated_by: Mapped[str] = mapped_column(String(255), nullable=False, default="system")
