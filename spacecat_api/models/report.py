"""
Report DTOs.

Dependencies: pydantic
System role: Report API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from spacecat_api.boundary.db.models.report_model import ReportStatus
from spacecat_api.models.common import CamelModel


class ReportDataUrls(CamelModel):
    """Presigned download links of a successful report."""

    raw_presigned_url: str
    raw_presigned_url_expires_at: datetime
    mystique_presigned_url: str
    mystique_presigned_url_expires_at: datetime


class ReportDto(CamelModel):
    """Report as returned by the API."""

    id: uuid.UUID
    site_id: uuid.UUID
    name: str = ""
    report_type: str
    status: ReportStatus
    report_period: dict[str, Any] = Field(default_factory=dict)
    comparison_period: dict[str, Any] = Field(default_factory=dict)
    storage_path: str
    created_at: datetime
    updated_at: datetime
    updated_by: str
    data: ReportDataUrls | None = None

    def to_json(self) -> dict[str, Any]:
        """Serialize, leaving out data when no presigned links exist."""
        payload = super().to_json()
        if payload.get("data") is None:
            payload.pop("data", None)
        return payload
