"""
Opportunity ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Audit finding persistence
"""

import uuid

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class OpportunityModel(Base, UUIDMixin, TimestampMixin):
    """
    Opportunity raised by an audit for a site.

    The data payload is audit specific. Accessibility opportunities keep
    per-form findings under ``data["accessibility"]``.
    """

    __tablename__ = "opportunities"

    site_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
        doc="Site the opportunity belongs to",
    )

    type: Mapped[str] = mapped_column(String(128), nullable=False)

    status: Mapped[str] = mapped_column(String(64), nullable=False, default="NEW")

    title: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)

    data: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Audit specific payload",
    )
