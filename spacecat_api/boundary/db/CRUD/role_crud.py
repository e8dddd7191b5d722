"""
Role CRUD operations.

Dependencies: sqlalchemy, spacecat_api.boundary.db.models
System role: Role persistence operations
"""

from spacecat_api.boundary.db.models.role_model import RoleModel
from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD


class RoleCRUD(BaseCRUD[RoleModel]):
    """CRUD operations for RoleModel."""

    def __init__(self) -> None:
        """Initialize RoleCRUD with RoleModel."""
        super().__init__(RoleModel)


role_crud = RoleCRUD()
