"""
Opportunity, suggestion and fix CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: Persistence for audit findings and their remediations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.fix_model import FixModel, FixStatus
from spacecat_api.boundary.db.models.opportunity_model import OpportunityModel
from spacecat_api.boundary.db.models.suggestion_model import SuggestionModel
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD, coerce_uuid


class OpportunityCRUD(BaseCRUD[OpportunityModel]):
    """CRUD operations for OpportunityModel."""

    def __init__(self) -> None:
        """Initialize OpportunityCRUD with OpportunityModel."""
        super().__init__(OpportunityModel)

    async def all_by_site_id(
        self,
        session: AsyncSession,
        site_id: UUID | str,
    ) -> Sequence[OpportunityModel]:
        return await self.all_by(session, site_id=coerce_uuid(site_id))


class SuggestionCRUD(BaseCRUD[SuggestionModel]):
    """CRUD operations for SuggestionModel."""

    def __init__(self) -> None:
        """Initialize SuggestionCRUD with SuggestionModel."""
        super().__init__(SuggestionModel)

    async def all_by_opportunity_id(
        self,
        session: AsyncSession,
        opportunity_id: UUID | str,
    ) -> Sequence[SuggestionModel]:
        return await self.all_by(session, opportunity_id=coerce_uuid(opportunity_id))

    async def all_by_fix_entity_id(
        self,
        session: AsyncSession,
        fix_id: UUID | str,
    ) -> Sequence[SuggestionModel]:
        """
        Retrieve suggestions remediated by a fix.

        Args:
            session: Async database session
            fix_id: Fix entity UUID

        Returns:
            Sequence of linked suggestions, oldest first
        """
        return await self.all_by(session, fix_entity_id=coerce_uuid(fix_id))

    async def link_to_fix(
        self,
        session: AsyncSession,
        suggestion_ids: Sequence[UUID],
        fix_id: UUID,
    ) -> None:
        """
        Point suggestions at the fix that remediates them.

        Args:
            session: Async database session
            suggestion_ids: Suggestions to link
            fix_id: Fix entity UUID
        """
        if not suggestion_ids:
            return
        stmt = (
            update(SuggestionModel)
            .where(SuggestionModel.id.in_(list(suggestion_ids)))
            .values(fix_entity_id=fix_id)
            .execution_options(synchronize_session="fetch")
        )
        await session.execute(stmt)


class FixCRUD(BaseCRUD[FixModel]):
    """CRUD operations for FixModel."""

    def __init__(self) -> None:
        """Initialize FixCRUD with FixModel."""
        super().__init__(FixModel)

    async def all_by_opportunity_id(
        self,
        session: AsyncSession,
        opportunity_id: UUID | str,
    ) -> Sequence[FixModel]:
        return await self.all_by(session, opportunity_id=coerce_uuid(opportunity_id))

    async def all_by_opportunity_id_and_status(
        self,
        session: AsyncSession,
        opportunity_id: UUID | str,
        status: str,
    ) -> Sequence[FixModel]:
        """
        Retrieve an opportunity's fixes in a given status.

        Unknown status values match nothing.

        Args:
            session: Async database session
            opportunity_id: Opportunity UUID
            status: FixStatus value

        Returns:
            Sequence of matching fixes, oldest first
        """
        try:
            fix_status = FixStatus(status)
        except ValueError:
            return []
        stmt = (
            select(FixModel)
            .where(FixModel.opportunity_id == coerce_uuid(opportunity_id))
            .where(FixModel.status == fix_status)
            .order_by(FixModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


opportunity_crud = OpportunityCRUD()
suggestion_crud = SuggestionCRUD()
fix_crud = FixCRUD()
