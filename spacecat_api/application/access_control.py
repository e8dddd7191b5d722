"""
Caller identity and access control.

The API gateway authenticates every request and forwards the resolved
identity in headers. AuthInfo carries that identity; AccessControl answers
whether the caller may act on a site or organization.

Dependencies: pydantic, sqlalchemy
System role: Authorization predicates shared by all services
"""

import logging

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.CRUD.site_crud import organization_crud, site_crud
from spacecat_api.boundary.db.models.organization_model import OrganizationModel
from spacecat_api.boundary.db.models.site_model import SiteModel
from spacecat_api.core.exceptions import AccessDeniedError, NotFoundError

logger = logging.getLogger(__name__)


class AuthInfo(BaseModel):
    """Authenticated caller."""

    email: str | None = None
    name: str | None = None
    is_admin: bool = False
    is_s2s_admin: bool = False
    tenants: list[str] = Field(
        default_factory=list,
        description="IMS organization ids the caller belongs to",
    )

    @property
    def user_identifier(self) -> str:
        """Value written to createdBy/updatedBy fields."""
        return self.email or self.name or "system"


class AccessControl:
    """Access predicates for one request."""

    def __init__(self, auth_info: AuthInfo, db: AsyncSession) -> None:
        """
        Initialize access control for a caller.

        Args:
            auth_info: Authenticated caller
            db: Async database session used to resolve site organizations
        """
        self.auth_info = auth_info
        self.db = db

    def has_admin_access(self) -> bool:
        return self.auth_info.is_admin

    def has_s2s_admin_access(self) -> bool:
        return self.auth_info.is_s2s_admin

    async def has_access(self, entity: SiteModel | OrganizationModel) -> bool:
        """
        Whether the caller may access a site or organization.

        Admins may access everything. Other callers need the owning
        organization's IMS org id among their tenants.

        Args:
            entity: SiteModel or OrganizationModel

        Returns:
            bool: True if access is granted
        """
        if self.auth_info.is_admin:
            return True

        if isinstance(entity, OrganizationModel):
            organization = entity
        else:
            if entity.organization_id is None:
                return False
            organization = await organization_crud.get_by_id(self.db, entity.organization_id)

        if organization is None or not organization.ims_org_id:
            return False

        granted = organization.ims_org_id in self.auth_info.tenants
        if not granted:
            logger.info(
                "Access denied",
                extra={"entity_id": str(entity.id), "ims_org_id": organization.ims_org_id},
            )
        return granted

    async def require_site_access(self, site_id: str, denied_message: str) -> SiteModel:
        """
        Load a site and check the caller may access it.

        Args:
            site_id: Validated site UUID
            denied_message: 403 message for this operation

        Returns:
            SiteModel: The accessible site

        Raises:
            NotFoundError: 'Site not found'
            AccessDeniedError: denied_message
        """
        site = await site_crud.get_by_id(self.db, site_id)
        if site is None:
            raise NotFoundError("Site not found", entity="site", entity_id=site_id)
        if not await self.has_access(site):
            raise AccessDeniedError(denied_message)
        return site
