"""
Audit ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Audit run history, read for sandbox rate limiting
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin
from spacecat_api.core.timestamps import now_utc


class AuditModel(Base, UUIDMixin, TimestampMixin):
    """
    One completed audit run.

    Attributes:
        site_id: Audited site
        audit_type: Audit kind (meta-tags, alt-text, ...)
        audited_at: When the audit ran
        audit_result: Audit output
    """

    __tablename__ = "audits"

    site_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)

    audit_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

    audited_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=now_utc
    )

    audit_result: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
