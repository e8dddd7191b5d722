"""
Fix API endpoints.

Routes (all below /sites/{site_id}/opportunities/{opportunity_id}):
- GET /fixes - List fixes of an opportunity
- GET /fixes/by-status/{status} - List fixes in one status
- GET /fixes/{fix_id} - Get single fix
- GET /fixes/{fix_id}/suggestions - Suggestions remediated by a fix
- POST /fixes - Create fixes in bulk (207)
- PATCH /status - Update fix statuses in bulk (207)
- PATCH /fixes/{fix_id} - Update one fix
- DELETE /fixes/{fix_id} - Remove one fix
- POST /apply-fixes - Generate fixes for suggestions through a handler
- POST /accessibility-fix - Legacy single-rule form accessibility fix

Dependencies: spacecat_api.application.services
System role: Fix management HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from spacecat_api.api.deps.dependencies import get_apply_fixes_service, get_fix_service
from spacecat_api.application.services.apply_fixes_service import ApplyFixesService
from spacecat_api.application.services.fix_service import FixService

from .router_utils import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sites/{site_id}/opportunities/{opportunity_id}", tags=["fixes"])


@router.get("/fixes")
@handle_api_errors("Error retrieving fixes")
async def list_fixes(
    site_id: str,
    opportunity_id: str,
    fix_service: FixService = Depends(get_fix_service),
) -> list[dict[str, Any]]:
    """List every fix of an opportunity."""
    return await fix_service.get_all_for_opportunity(site_id, opportunity_id)


@router.get("/fixes/by-status/{fix_status}")
@handle_api_errors("Error retrieving fixes")
async def list_fixes_by_status(
    site_id: str,
    opportunity_id: str,
    fix_status: str,
    fix_service: FixService = Depends(get_fix_service),
) -> list[dict[str, Any]]:
    """List an opportunity's fixes in one status."""
    return await fix_service.get_by_status(site_id, opportunity_id, fix_status)


@router.get("/fixes/{fix_id}")
@handle_api_errors("Error retrieving fix")
async def get_fix(
    site_id: str,
    opportunity_id: str,
    fix_id: str,
    fix_service: FixService = Depends(get_fix_service),
) -> dict[str, Any]:
    return await fix_service.get_by_id(site_id, opportunity_id, fix_id)


@router.get("/fixes/{fix_id}/suggestions")
@handle_api_errors("Error retrieving suggestions for fix")
async def list_fix_suggestions(
    site_id: str,
    opportunity_id: str,
    fix_id: str,
    fix_service: FixService = Depends(get_fix_service),
) -> list[dict[str, Any]]:
    return await fix_service.get_suggestions_for_fix(site_id, opportunity_id, fix_id)


@router.post("/fixes")
@handle_api_errors("Error creating fixes")
async def create_fixes(
    site_id: str,
    opportunity_id: str,
    payload: Any = Body(default=None),
    fix_service: FixService = Depends(get_fix_service),
) -> JSONResponse:
    """
    Create fixes in bulk.

    Args:
        site_id: Site UUID
        opportunity_id: Opportunity UUID
        payload: Array of fix descriptions
        fix_service: Injected FixService

    Returns:
        JSONResponse(207): {fixes: [...], metadata: {total, success, failed}}

    Raises:
        HTTPException(400): Body missing or not an array
        HTTPException(403): Caller outside the site's organization
        HTTPException(404): Site or opportunity not found
    """
    result = await fix_service.create_fixes(site_id, opportunity_id, payload)
    return JSONResponse(status_code=status.HTTP_207_MULTI_STATUS, content=result)


@router.patch("/status")
@handle_api_errors("Error updating fix statuses")
async def patch_fixes_status(
    site_id: str,
    opportunity_id: str,
    payload: Any = Body(default=None),
    fix_service: FixService = Depends(get_fix_service),
) -> JSONResponse:
    """
    Update the status of several fixes.

    Args:
        payload: Array of {id, status}

    Returns:
        JSONResponse(207): {fixes: [...], metadata: {total, success, failed}}
    """
    result = await fix_service.patch_fixes_status(site_id, opportunity_id, payload)
    return JSONResponse(status_code=status.HTTP_207_MULTI_STATUS, content=result)


@router.patch("/fixes/{fix_id}")
@handle_api_errors("Error updating fix")
async def patch_fix(
    site_id: str,
    opportunity_id: str,
    fix_id: str,
    payload: Any = Body(default=None),
    fix_service: FixService = Depends(get_fix_service),
) -> dict[str, Any]:
    return await fix_service.patch_fix(site_id, opportunity_id, fix_id, payload)


@router.delete("/fixes/{fix_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors("Error removing fix")
async def remove_fix(
    site_id: str,
    opportunity_id: str,
    fix_id: str,
    fix_service: FixService = Depends(get_fix_service),
) -> Response:
    await fix_service.remove_fix(site_id, opportunity_id, fix_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/apply-fixes")
@handle_api_errors("Failed to apply fixes")
async def apply_fixes(
    site_id: str,
    opportunity_id: str,
    payload: Any = Body(default=None),
    apply_fixes_service: ApplyFixesService = Depends(get_apply_fixes_service),
) -> dict[str, Any]:
    """
    Apply fixes of one type for a set of suggestions.

    Args:
        payload: {type, suggestionIds}

    Returns:
        dict: {fixes: [...], metadata: {total, success, failed}}

    Raises:
        HTTPException(400): Malformed request or unsupported type
        HTTPException(403): Caller outside the site's organization
        HTTPException(404): Site, opportunity or suggestion not found
        HTTPException(500): Handler failure
    """
    logger.info(
        "Applying fixes",
        extra={"site_id": site_id, "opportunity_id": opportunity_id},
    )
    return await apply_fixes_service.apply_fixes(site_id, opportunity_id, payload)


@router.post("/accessibility-fix")
@handle_api_errors("Failed to apply accessibility fix")
async def apply_accessibility_fix(
    site_id: str,
    opportunity_id: str,
    payload: Any = Body(default=None),
    fix_service: FixService = Depends(get_fix_service),
) -> dict[str, Any]:
    """Send one form accessibility rule to the autofix service."""
    return await fix_service.apply_accessibility_fix(site_id, opportunity_id, payload)
