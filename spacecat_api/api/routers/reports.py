"""
Report API endpoints.

Routes:
- POST /sites/{site_id}/reports - Queue a report generation job
- GET /sites/{site_id}/reports - List reports of a site
- GET /sites/{site_id}/reports/{report_id} - Get single report with download links
- DELETE /sites/{site_id}/reports/{report_id} - Delete report and its files
- PATCH /sites/{site_id}/reports/{report_id} - Replace the enhanced report

Dependencies: spacecat_api.application.services
System role: Report HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from spacecat_api.api.deps.dependencies import get_report_service
from spacecat_api.application.services.report_service import ReportService

from .router_utils import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sites/{site_id}/reports", tags=["reports"])


@router.post("")
@handle_api_errors("Failed to create report job")
async def create_report(
    site_id: str,
    payload: Any = Body(default=None),
    report_service: ReportService = Depends(get_report_service),
) -> dict[str, Any]:
    """
    Queue a report generation job.

    Args:
        site_id: Site UUID
        payload: {name, reportType, reportPeriod, comparisonPeriod}
        report_service: Injected ReportService

    Returns:
        dict: Acknowledgement with jobId

    Raises:
        HTTPException(400): Invalid input or duplicate report
        HTTPException(403): Caller outside the site's organization
        HTTPException(404): Site not found
        HTTPException(500): Queue missing or send failed
    """
    logger.info("Creating report job", extra={"site_id": site_id})
    return await report_service.create_report(site_id, payload)


@router.get("")
@handle_api_errors("Failed to retrieve reports")
async def list_reports(
    site_id: str,
    report_service: ReportService = Depends(get_report_service),
) -> dict[str, Any]:
    return await report_service.list_reports(site_id)


@router.get("/{report_id}")
@handle_api_errors("Failed to retrieve report")
async def get_report(
    site_id: str,
    report_id: str,
    report_service: ReportService = Depends(get_report_service),
) -> dict[str, Any]:
    return await report_service.get_report(site_id, report_id)


@router.delete("/{report_id}")
@handle_api_errors("Failed to delete report")
async def delete_report(
    site_id: str,
    report_id: str,
    report_service: ReportService = Depends(get_report_service),
) -> dict[str, Any]:
    return await report_service.delete_report(site_id, report_id)


@router.patch("/{report_id}")
@handle_api_errors("Failed to update enhanced report")
async def update_enhanced_report(
    site_id: str,
    report_id: str,
    payload: Any = Body(default=None),
    report_service: ReportService = Depends(get_report_service),
) -> dict[str, Any]:
    """Replace the enhanced (mystique) report JSON of a successful report."""
    return await report_service.update_enhanced_report(site_id, report_id, payload)
