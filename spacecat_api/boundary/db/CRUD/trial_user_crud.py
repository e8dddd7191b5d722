"""
Trial user CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: Trial user persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.trial_user_model import TrialUserModel
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD, coerce_uuid


class TrialUserCRUD(BaseCRUD[TrialUserModel]):
    """CRUD operations for TrialUserModel."""

    def __init__(self) -> None:
        """Initialize TrialUserCRUD with TrialUserModel."""
        super().__init__(TrialUserModel)

    async def all_by_organization_id(
        self,
        session: AsyncSession,
        organization_id: UUID | str,
    ) -> Sequence[TrialUserModel]:
        return await self.all_by(session, organization_id=coerce_uuid(organization_id))


trial_user_crud = TrialUserCRUD()
