"""
Site and organization CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: Site and tenant persistence operations
"""

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.organization_model import OrganizationModel
from spacecat_api.boundary.db.models.site_model import SiteModel
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD


class OrganizationCRUD(BaseCRUD[OrganizationModel]):
    """CRUD operations for OrganizationModel."""

    def __init__(self) -> None:
        """Initialize OrganizationCRUD with OrganizationModel."""
        super().__init__(OrganizationModel)


class SiteCRUD(BaseCRUD[SiteModel]):
    """CRUD operations for SiteModel."""

    def __init__(self) -> None:
        """Initialize SiteCRUD with SiteModel."""
        super().__init__(SiteModel)

    async def find_by_base_url(self, session: AsyncSession, base_url: str) -> SiteModel | None:
        """
        Retrieve a site by its base URL.

        Args:
            session: Async database session
            base_url: Exact base URL

        Returns:
            SiteModel if found, None otherwise
        """
        return await self.find_by(session, base_url=base_url)


organization_crud = OrganizationCRUD()
site_crud = SiteCRUD()
