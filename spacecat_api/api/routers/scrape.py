"""
Scraped content API endpoints.

Routes:
- GET /sites/{site_id}/files?key= - Redirect to a presigned download URL
- GET /sites/{site_id}/scraped-content/{content_type} - List scraped files

Dependencies: spacecat_api.application.services
System role: Scraper bucket HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse

from spacecat_api.api.deps.dependencies import get_scrape_service
from spacecat_api.application.services.scrape_service import ScrapeService

from .router_utils import handle_api_errors

router = APIRouter(prefix="/sites/{site_id}", tags=["scrape"])


@router.get("/files")
@handle_api_errors("Error occurred generating a pre-signed URL")
async def get_file_by_key(
    site_id: str,
    key: str | None = Query(default=None),
    scrape_service: ScrapeService = Depends(get_scrape_service),
) -> RedirectResponse:
    """
    Redirect to a presigned download URL for a scraper bucket object.

    Returns:
        RedirectResponse(302): Location is the presigned URL

    Raises:
        HTTPException(400): Missing key
        HTTPException(403): Caller outside the site's organization
        HTTPException(404): Site or file not found
    """
    url = await scrape_service.get_file_url(site_id, key)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/scraped-content/{content_type}")
@handle_api_errors("Failed to list scraped content")
async def list_scraped_content(
    site_id: str,
    content_type: str,
    path: str | None = Query(default=None),
    root_only: str | None = Query(default=None, alias="rootOnly"),
    page_size: str | None = Query(default=None, alias="pageSize"),
    page_token: str | None = Query(default=None, alias="pageToken"),
    scrape_service: ScrapeService = Depends(get_scrape_service),
) -> dict[str, Any]:
    """
    List one page of a site's scrapes, imports or accessibility results.

    Returns:
        dict: {items: [{name, type, size, lastModified, key}], nextPageToken}
    """
    return await scrape_service.list_scraped_content(
        site_id, content_type, path, root_only, page_size, page_token
    )
