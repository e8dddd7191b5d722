"""
Role API endpoints.

Routes:
- GET /roles/{role_id} - Get single role
- POST /roles - Create role
- PATCH /roles/{role_id} - Update role

Dependencies: spacecat_api.application.services
System role: ACL role HTTP API
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from spacecat_api.api.deps.dependencies import get_role_service
from spacecat_api.application.services.role_service import RoleService

from .router_utils import handle_api_errors

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("/{role_id}")
@handle_api_errors("Error getting role")
async def get_role(
    role_id: str,
    role_service: RoleService = Depends(get_role_service),
) -> dict[str, Any]:
    return await role_service.get_by_id(role_id)


@router.post("", status_code=status.HTTP_201_CREATED)
@handle_api_errors("Error creating role")
async def create_role(
    payload: Any = Body(default=None),
    role_service: RoleService = Depends(get_role_service),
) -> dict[str, Any]:
    """
    Create an ACL role.

    Args:
        payload: {name, imsOrgId, acl}
        role_service: Injected RoleService

    Returns:
        dict: Created role

    Raises:
        HTTPException(400): Missing name or imsOrgId, or acl not a list
        HTTPException(500): Creation failed
    """
    return await role_service.create_role(payload)


@router.patch("/{role_id}")
@handle_api_errors("Error updating role")
async def patch_role(
    role_id: str,
    payload: Any = Body(default=None),
    role_service: RoleService = Depends(get_role_service),
) -> dict[str, Any]:
    return await role_service.patch_role(role_id, payload)
