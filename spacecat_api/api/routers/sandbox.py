"""
Sandbox audit API endpoints.

Routes: POST /sandbox/audit?baseURL=&auditType=

Dependencies: spacecat_api.application.services
System role: On-demand sandbox audit trigger HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from spacecat_api.api.deps.dependencies import get_sandbox_audit_service
from spacecat_api.application.services.sandbox_audit_service import SandboxAuditService

from .router_utils import handle_api_errors

router = APIRouter(prefix="/sandbox", tags=["sandbox"])


@router.post("/audit")
@handle_api_errors("Failed to trigger sandbox audit")
async def trigger_sandbox_audit(
    base_url: str | None = Query(default=None, alias="baseURL"),
    audit_type: str | None = Query(default=None, alias="auditType"),
    sandbox_service: SandboxAuditService = Depends(get_sandbox_audit_service),
) -> dict[str, Any]:
    """
    Trigger audits for a sandbox site.

    Args:
        base_url: Sandbox site base URL
        audit_type: Optional comma separated audit types; all enabled when omitted
        sandbox_service: Injected SandboxAuditService

    Returns:
        dict: Trigger summary

    Raises:
        HTTPException(400): Bad URL, non-sandbox site, unknown or disabled types
        HTTPException(403): Caller outside the site's organization
        HTTPException(404): No site with this base URL
        HTTPException(429): An audit ran inside the rate-limit window
    """
    return await sandbox_service.trigger_audits(base_url, audit_type)
