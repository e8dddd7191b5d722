"""
Trial user ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Trial user persistence for user-detail lookups
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class TrialUserModel(Base, UUIDMixin, TimestampMixin):
    """User invited to an organization's trial, keyed by external IMS id."""

    __tablename__ = "trial_users"

    organization_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), nullable=False, index=True
    )

    external_user_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True, index=True, doc="IMS user id"
    )

    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    email_id: Mapped[str] = mapped_column(String(320), nullable=False)
