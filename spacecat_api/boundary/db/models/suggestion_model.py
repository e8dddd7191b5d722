"""
Suggestion ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Remediation suggestion persistence
"""

import uuid

from sqlalchemy import JSON, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SuggestionModel(Base, UUIDMixin, TimestampMixin):
    """
    Suggestion ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        opportunity_id: Parent opportunity
        type: Suggestion kind (CODE_CHANGE, CONTENT_UPDATE, ...)
        status: Lifecycle status
        rank: Ordering hint
        data: Payload with url, source and issues[]
        fix_entity_id: Fix that remediates this suggestion, if any
    """

    __tablename__ = "suggestions"

    opportunity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )

    type: Mapped[str] = mapped_column(String(128), nullable=False, default="CODE_CHANGE")

    status: Mapped[str] = mapped_column(String(64), nullable=False, default="NEW")

    rank: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    data: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Suggestion payload (url, source, issues)",
    )

    fix_entity_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        index=True,
        default=None,
        doc="Linked fix entity",
    )
