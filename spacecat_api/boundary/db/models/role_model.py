"""
Role ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: ACL role persistence
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class RoleModel(Base, UUIDMixin, TimestampMixin):
    """
    Role granting a list of ACL entries within an IMS organization.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Role name
        ims_org_id: IMS organization the role is scoped to
        acl: List of ACL entries ({actions, path})
        updated_by: Identifier of the last editor
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    ims_org_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    acl: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    updated_by: Mapped[str] = mapped_column(String(255), nullable=False, default="system")
