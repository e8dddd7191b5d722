"""
Report ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Generated report persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ReportStatus(str, enum.Enum):
    """
    Report generation states.

    PROCESSING: Job queued, worker has not finished
    SUCCESS: Raw report written to storage
    FAILED: Generation failed
    """

    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


class ReportModel(Base, UUIDMixin, TimestampMixin):
    """
    Report ORM model.

    Periods are {startDate, endDate} mappings of YYYY-MM-DD strings. No two
    reports of a site may share (report_type, report_period,
    comparison_period) while processing or successful.

    Storage layout below storage_path:
        raw/report.json       generated report (report bucket)
        mystique/report.json  enhanced report (mystique bucket)

    Attributes:
        id: UUID primary key (auto-generated)
        site_id: Site the report covers
        name: Report name
        report_type: Report kind (e.g. performance)
        report_period: Analysed date range
        comparison_period: Baseline date range
        status: ReportStatus
        storage_path: Key prefix ending in '/'
        updated_by: Identifier of the last editor
    """

    __tablename__ = "reports"

    site_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    report_type: Mapped[str] = mapped_column(String(128), nullable=False)

    report_period: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    comparison_period: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ReportStatus.PROCESSING,
    )

    storage_path: Mapped[str] = mapped_column(String(1024), nullable=False, default="")

    updated_by: Mapped[str] = mapped_column(String(255), nullable=False, default="system")

    @property
    def raw_storage_path(self) -> str:
        return f"{self.storage_path}raw/" if self.storage_path else ""

    @property
    def enhanced_storage_path(self) -> str:
        return f"{self.storage_path}mystique/" if self.storage_path else ""
