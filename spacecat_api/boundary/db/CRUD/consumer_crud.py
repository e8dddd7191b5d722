"""
Consumer CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: API consumer persistence operations
"""

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.boundary.db.models.consumer_model import ConsumerModel
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD


class ConsumerCRUD(BaseCRUD[ConsumerModel]):
    """CRUD operations for ConsumerModel."""

    def __init__(self) -> None:
        """Initialize ConsumerCRUD with ConsumerModel."""
        super().__init__(ConsumerModel)

    async def find_by_client_id(
        self,
        session: AsyncSession,
        client_id: str,
    ) -> ConsumerModel | None:
        return await self.find_by(session, client_id=client_id)


consumer_crud = ConsumerCRUD()
