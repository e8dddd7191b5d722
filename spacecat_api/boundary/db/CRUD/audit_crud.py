"""
Audit and configuration CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: Audit history and handler configuration lookups
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.audit_model import AuditModel
from spacecat_api.boundary.db.models.configuration_model import ConfigurationModel
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD, coerce_uuid


class AuditCRUD(BaseCRUD[AuditModel]):
    """CRUD operations for AuditModel."""

    def __init__(self) -> None:
        """Initialize AuditCRUD with AuditModel."""
        super().__init__(AuditModel)

    async def find_latest_for_site(
        self,
        session: AsyncSession,
        site_id: UUID | str,
        audit_type: str,
    ) -> AuditModel | None:
        """
        Retrieve the most recent audit of a type for a site.

        Args:
            session: Async database session
            site_id: Site UUID
            audit_type: Audit type

        Returns:
            Latest AuditModel, None if the audit never ran
        """
        stmt = (
            select(AuditModel)
            .where(AuditModel.site_id == coerce_uuid(site_id))
            .where(AuditModel.audit_type == audit_type)
            .order_by(AuditModel.audited_at.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()


class ConfigurationCRUD(BaseCRUD[ConfigurationModel]):
    """CRUD operations for ConfigurationModel."""

    def __init__(self) -> None:
        """Initialize ConfigurationCRUD with ConfigurationModel."""
        super().__init__(ConfigurationModel)

    async def find_latest(self, session: AsyncSession) -> ConfigurationModel | None:
        stmt = select(ConfigurationModel).order_by(ConfigurationModel.version.desc()).limit(1)
        result = await session.execute(stmt)
        return result.scalars().first()


audit_crud = AuditCRUD()
configuration_crud = ConfigurationCRUD()
