"""
Site ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Audited website persistence
"""

import uuid

from sqlalchemy import Boolean, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SiteModel(Base, UUIDMixin, TimestampMixin):
    """
    Site ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        base_url: Canonical base URL, unique across sites
        organization_id: Owning organization
        github_url: Repository receiving generated code fixes
        is_sandbox: Sandbox sites may trigger audits on demand
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "sites"

    base_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        unique=True,
        doc="Base URL of the site",
    )

    organization_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        index=True,
        doc="Owning organization id",
    )

    github_url: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        default=None,
        doc="GitHub repository URL",
    )

    is_sandbox: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        doc="Whether the site is a sandbox site",
    )
