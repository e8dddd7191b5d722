"""
Fix handler contract.

Dependencies: sqlalchemy
System role: Extension point for apply-fixes; one handler per fix type
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.opportunity_model import OpportunityModel
from spacecat_api.boundary.db.models.site_model import SiteModel


class FixHandlerType(str, Enum):
    """Fix types accepted by the apply-fixes endpoint."""

    ACCESSIBILITY = "accessibility"


class FixHandler(ABC):
    """Applies a batch of suggestions of one fix type."""

    @abstractmethod
    async def apply(
        self,
        db: AsyncSession,
        site: SiteModel,
        opportunity: OpportunityModel,
        suggestion_ids: Sequence[str],
    ) -> dict[str, Any]:
        """
        Apply fixes for the given suggestions.

        Args:
            db: Request-scoped session
            site: Site the opportunity belongs to
            opportunity: Opportunity owning the suggestions
            suggestion_ids: Validated suggestion UUIDs

        Returns:
            dict: {fixes: [...], metadata: {total, success, failed}}
        """
