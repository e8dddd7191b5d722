"""
Sentiment topic and guideline CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: Sentiment configuration persistence operations
"""

from typing import Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.sentiment_model import (
    SentimentGuidelineModel,
    SentimentTopicModel,
)
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD, coerce_uuid

SiteScopedT = TypeVar("SiteScopedT", SentimentTopicModel, SentimentGuidelineModel)


class _SiteScopedCRUD(BaseCRUD[SiteScopedT]):
    """Queries shared by entities addressed as (siteId, id)."""

    async def find_for_site(
        self,
        session: AsyncSession,
        site_id: UUID | str,
        item_id: UUID | str,
    ) -> SiteScopedT | None:
        """
        Retrieve an item only if it belongs to the site.

        Args:
            session: Async database session
            site_id: Site UUID
            item_id: Item UUID (malformed ids never match)

        Returns:
            Model instance if found, None otherwise
        """
        item = await self.get_by_id(session, item_id)
        if item is None or item.site_id != coerce_uuid(site_id):
            return None
        return item

    async def all_by_site_id(
        self,
        session: AsyncSession,
        site_id: UUID | str,
        enabled_only: bool = False,
    ) -> Sequence[SiteScopedT]:
        """
        Retrieve a site's items, oldest first.

        Args:
            session: Async database session
            site_id: Site UUID
            enabled_only: Restrict to enabled items

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).where(self.model.site_id == coerce_uuid(site_id))
        if enabled_only:
            stmt = stmt.where(self.model.enabled.is_(True))
        stmt = stmt.order_by(self.model.created_at, self.model.id)
        result = await session.execute(stmt)
        return result.scalars().all()


class SentimentTopicCRUD(_SiteScopedCRUD[SentimentTopicModel]):
    """CRUD operations for SentimentTopicModel."""

    def __init__(self) -> None:
        """Initialize SentimentTopicCRUD with SentimentTopicModel."""
        super().__init__(SentimentTopicModel)

    async def all_by_site_id_and_audit_type(
        self,
        session: AsyncSession,
        site_id: UUID | str,
        audit_type: str,
    ) -> list[SentimentTopicModel]:
        """
        Retrieve a site's topics linked to an audit type.

        The audit list is a JSON column, so matching happens after loading.
        """
        topics = await self.all_by_site_id(session, site_id)
        return [topic for topic in topics if audit_type in (topic.audits or [])]


class SentimentGuidelineCRUD(_SiteScopedCRUD[SentimentGuidelineModel]):
    """CRUD operations for SentimentGuidelineModel."""

    def __init__(self) -> None:
        """Initialize SentimentGuidelineCRUD with SentimentGuidelineModel."""
        super().__init__(SentimentGuidelineModel)


sentiment_topic_crud = SentimentTopicCRUD()
sentiment_guideline_crud = SentimentGuidelineCRUD()
