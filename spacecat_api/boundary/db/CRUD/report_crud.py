"""
Report CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: Report persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.report_model import ReportModel
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD, coerce_uuid


class ReportCRUD(BaseCRUD[ReportModel]):
    """CRUD operations for ReportModel."""

    def __init__(self) -> None:
        """Initialize ReportCRUD with ReportModel."""
        super().__init__(ReportModel)

    async def all_by_site_id(
        self,
        session: AsyncSession,
        site_id: UUID | str,
    ) -> Sequence[ReportModel]:
        return await self.all_by(session, site_id=coerce_uuid(site_id))


report_crud = ReportCRUD()
