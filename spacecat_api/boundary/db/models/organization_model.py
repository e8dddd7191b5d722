"""
Organization ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Tenant persistence used by access control
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class OrganizationModel(Base, UUIDMixin, TimestampMixin):
    """
    Organization (tenant) owning sites.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Display name
        ims_org_id: IMS organization id; callers whose tenants include it
            may access the organization's sites
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Organization name",
    )

    ims_org_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        doc="IMS organization id (e.g. ABC123@AdobeOrg)",
    )
