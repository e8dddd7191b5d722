"""
Role service.

Dependencies: sqlalchemy, spacecat_api.boundary.db
System role: Role lookup, creation and patching
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AuthInfo
from spacecat_api.boundary.db.CRUD.role_crud import role_crud
from spacecat_api.boundary.db.models.role_model import RoleModel
from spacecat_api.core.exceptions import NotFoundError, ValidationError
from spacecat_api.core.validators import has_text, is_non_empty_object, is_valid_uuid
from spacecat_api.models.role import RoleDto

logger = logging.getLogger(__name__)


class RoleService:
    """ACL role operations."""

    def __init__(self, db: AsyncSession, auth_info: AuthInfo) -> None:
        """
        Initialize role service.

        Args:
            db: AsyncSession for database operations
            auth_info: Caller identity, used for updatedBy
        """
        self.db = db
        self.auth_info = auth_info

    async def _load(self, role_id: str) -> RoleModel:
        if not is_valid_uuid(role_id):
            raise ValidationError("Role ID required", field="roleId")
        role = await role_crud.get_by_id(self.db, role_id)
        if role is None:
            raise NotFoundError("Role not found", entity="role", entity_id=role_id)
        return role

    async def get_by_id(self, role_id: str) -> dict[str, Any]:
        role = await self._load(role_id)
        return RoleDto.model_validate(role).to_json()

    async def create_role(self, payload: Any) -> dict[str, Any]:
        """
        Create a role.

        Args:
            payload: {name, imsOrgId, acl}

        Returns:
            dict: Serialized role

        Raises:
            ValidationError: Empty body, missing name/imsOrgId or non-list acl
        """
        if not is_non_empty_object(payload):
            raise ValidationError("No data provided")
        if not has_text(payload.get("name")):
            raise ValidationError("name is required", field="name")
        if not has_text(payload.get("imsOrgId")):
            raise ValidationError("imsOrgId is required", field="imsOrgId")
        acl = payload.get("acl", [])
        if not isinstance(acl, list):
            raise ValidationError("acl must be an array", field="acl")

        role = await role_crud.create(
            self.db,
            name=payload["name"],
            ims_org_id=payload["imsOrgId"],
            acl=acl,
            updated_by=self.auth_info.email or "system",
        )
        logger.info("Created role", extra={"role_id": str(role.id)})
        return RoleDto.model_validate(role).to_json()

    async def patch_role(self, role_id: str, payload: Any) -> dict[str, Any]:
        """
        Update name, imsOrgId and acl of a role.

        Raises:
            ValidationError: 'No updates provided' when nothing changes
            NotFoundError: Unknown role
        """
        role = await self._load(role_id)
        if not is_non_empty_object(payload):
            raise ValidationError("No updates provided")

        name = payload.get("name")
        ims_org_id = payload.get("imsOrgId")
        acl = payload.get("acl")
        has_updates = False

        if name and name != role.name:
            if not has_text(name):
                raise ValidationError("name must be a non-empty string", field="name")
            role.name = name
            has_updates = True
        if ims_org_id and ims_org_id != role.ims_org_id:
            if not has_text(ims_org_id):
                raise ValidationError("imsOrgId must be a non-empty string", field="imsOrgId")
            role.ims_org_id = ims_org_id
            has_updates = True
        if (acl or isinstance(acl, list)) and acl != role.acl:
            if not isinstance(acl, list):
                raise ValidationError("acl must be an array", field="acl")
            role.acl = acl
            has_updates = True

        if not has_updates:
            raise ValidationError("No updates provided")

        role.updated_by = self.auth_info.email or "system"
        role = await role_crud.save(self.db, role)
        logger.info("Updated role", extra={"role_id": role_id})
        return RoleDto.model_validate(role).to_json()
