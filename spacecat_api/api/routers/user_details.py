"""
User details API endpoints.

Routes:
- GET /organizations/{organization_id}/user-details/{external_user_id} - One user
- POST /organizations/{organization_id}/user-details - Several users by id

Dependencies: spacecat_api.application.services
System role: User detail lookup HTTP API
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from spacecat_api.api.deps.dependencies import get_user_details_service
from spacecat_api.application.services.user_details_service import UserDetailsService

from .router_utils import handle_api_errors

router = APIRouter(prefix="/organizations/{organization_id}/user-details", tags=["user-details"])


@router.get("/{external_user_id}")
@handle_api_errors("Failed to retrieve user details")
async def get_user_details(
    organization_id: str,
    external_user_id: str,
    user_details_service: UserDetailsService = Depends(get_user_details_service),
) -> dict[str, Any]:
    """
    Details of one user of an organization.

    Returns:
        dict: {firstName, lastName, email, organizationId}
    """
    return await user_details_service.get_user_details(organization_id, external_user_id)


@router.post("")
@handle_api_errors("Failed to retrieve user details")
async def get_user_details_in_bulk(
    organization_id: str,
    payload: Any = Body(default=None),
    user_details_service: UserDetailsService = Depends(get_user_details_service),
) -> dict[str, Any]:
    return await user_details_service.get_user_details_in_bulk(organization_id, payload)
