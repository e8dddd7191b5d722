"""
Report service.

Queues report generation jobs and serves finished reports through
presigned S3 links. A report's raw output lives under
{storage_path}raw/report.json in the report bucket; the enhanced version
lives under {storage_path}mystique/report.json in the mystique bucket.

Dependencies: boto3 (via S3StorageClient, SQSClient), sqlalchemy
System role: Report lifecycle behind the reports router
"""

import asyncio
import logging
import uuid
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.boundary.aws.s3_client import S3StorageClient
from spacecat_api.boundary.aws.sqs_client import SQSClient
from spacecat_api.boundary.db.CRUD.report_crud import report_crud
from spacecat_api.boundary.db.models.report_model import ReportModel, ReportStatus
from spacecat_api.configs.queues import QueueSettings
from spacecat_api.configs.storage import StorageSettings
from spacecat_api.core.exceptions import (
    ConfigurationError,
    NotFoundError,
    UpstreamServiceError,
    ValidationError,
)
from spacecat_api.core.periods import periods_equal, validate_period
from spacecat_api.core.s3_keys import report_storage_path
from spacecat_api.core.timestamps import iso_utc, now_utc
from spacecat_api.core.validators import has_text, is_non_empty_object, is_valid_uuid
from spacecat_api.models.report import ReportDataUrls, ReportDto

logger = logging.getLogger(__name__)

REPORT_ACCESS_DENIED = "User does not have access to this site"
REPORT_FILE = "report.json"
ACTIVE_STATUSES = (ReportStatus.SUCCESS, ReportStatus.PROCESSING)


class ReportService:
    """Report generation, retrieval, deletion and enhancement."""

    def __init__(
        self,
        db: AsyncSession,
        access_control: AccessControl,
        s3_client: S3StorageClient,
        sqs_client: SQSClient,
        storage_settings: StorageSettings,
        queue_settings: QueueSettings,
    ) -> None:
        """
        Initialize report service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization
            s3_client: Storage client for report files
            sqs_client: Queue client for report jobs
            storage_settings: Bucket names and presign expiry
            queue_settings: Report jobs queue URL
        """
        self.db = db
        self.access_control = access_control
        self.s3_client = s3_client
        self.sqs_client = sqs_client
        self.storage = storage_settings
        self.queues = queue_settings

    @staticmethod
    def _validate_ids(site_id: str, report_id: str | None = None) -> None:
        if not is_valid_uuid(site_id):
            raise ValidationError("Valid site ID is required", field="siteId")
        if report_id is not None and not is_valid_uuid(report_id):
            raise ValidationError("Valid report ID is required", field="reportId")

    async def _load_report(self, report_id: str) -> ReportModel:
        report = await report_crud.get_by_id(self.db, report_id)
        if report is None:
            raise NotFoundError("Report not found", entity="report", entity_id=report_id)
        return report

    def _presign_urls(self, report: ReportModel) -> ReportDataUrls:
        expiry = self.storage.presigned_url_expiry
        raw_url, raw_expires = self.s3_client.generate_presigned_download_url(
            self.storage.report_bucket, f"{report.raw_storage_path}{REPORT_FILE}", expiry
        )
        enhanced_url, enhanced_expires = self.s3_client.generate_presigned_download_url(
            self.storage.mystique_bucket, f"{report.enhanced_storage_path}{REPORT_FILE}", expiry
        )
        return ReportDataUrls(
            raw_presigned_url=raw_url,
            raw_presigned_url_expires_at=raw_expires,
            mystique_presigned_url=enhanced_url,
            mystique_presigned_url_expires_at=enhanced_expires,
        )

    async def create_report(self, site_id: str, payload: Any) -> dict[str, Any]:
        """
        Queue a report generation job.

        Flow:
        1. Validate name, type and both periods
        2. Check site access
        3. Reject duplicates of an active report with equal type and periods
        4. Persist the report as processing and send the job message

        Args:
            site_id: Site UUID
            payload: {name, reportType, reportPeriod, comparisonPeriod}

        Returns:
            dict: Job acknowledgement with jobId and timestamp

        Raises:
            ValidationError: Invalid input or duplicate report
            ConfigurationError: Reports queue URL not set
        """
        self._validate_ids(site_id)
        if not is_non_empty_object(payload):
            raise ValidationError("Request data is required")
        name = payload.get("name")
        report_type = payload.get("reportType")
        if not has_text(name):
            raise ValidationError("Report name is required", field="name")
        if not has_text(report_type):
            raise ValidationError("Report type is required", field="reportType")
        for key, label in (("reportPeriod", "Report period"), ("comparisonPeriod", "Comparison period")):
            error = validate_period(payload.get(key), label)
            if error:
                raise ValidationError(error, field=key)

        await self.access_control.require_site_access(site_id, REPORT_ACCESS_DENIED)

        report_period = payload["reportPeriod"]
        comparison_period = payload["comparisonPeriod"]
        existing = await report_crud.all_by_site_id(self.db, site_id)
        duplicate = next(
            (
                r
                for r in existing
                if r.status in ACTIVE_STATUSES
                and r.report_type == report_type
                and periods_equal(r.report_period, report_period)
                and periods_equal(r.comparison_period, comparison_period)
            ),
            None,
        )
        if duplicate is not None:
            logger.info(f"Report already exists for site {site_id} with the same parameters")
            raise ValidationError(
                "A report with the same type and duration already exists for this site"
            )

        queue_url = self.queues.report_jobs_queue_url
        if not has_text(queue_url):
            logger.error("Report jobs queue URL is not configured")
            raise ConfigurationError("Reports queue is not configured")

        report_id = uuid.uuid4()
        initiated_by = self.access_control.auth_info.email or "unknown"
        report = await report_crud.create(
            self.db,
            id=report_id,
            site_id=uuid.UUID(site_id),
            name=name,
            report_type=report_type,
            report_period=report_period,
            comparison_period=comparison_period,
            status=ReportStatus.PROCESSING,
            storage_path=report_storage_path(site_id, report_type, str(report_id)),
            updated_by=initiated_by,
        )

        timestamp = iso_utc(now_utc())
        message = {
            "reportId": str(report.id),
            "siteId": site_id,
            "name": name,
            "reportType": report_type,
            "reportPeriod": report_period,
            "comparisonPeriod": comparison_period,
            "initiatedBy": initiated_by,
            "timestamp": timestamp,
        }
        await asyncio.to_thread(self.sqs_client.send_message, queue_url, message)
        logger.info(
            f"Report job queued for site {site_id}, report type: {report_type}, jobId: {report.id}"
        )
        return {
            "message": "Report generation job queued successfully",
            "siteId": site_id,
            "reportType": report_type,
            "status": ReportStatus.PROCESSING.value,
            "jobId": str(report.id),
            "timestamp": timestamp,
        }

    async def list_reports(self, site_id: str) -> dict[str, Any]:
        """
        List a site's reports; successful ones carry presigned links.

        A presign failure leaves that report without links.
        """
        self._validate_ids(site_id)
        await self.access_control.require_site_access(site_id, REPORT_ACCESS_DENIED)

        reports = await report_crud.all_by_site_id(self.db, site_id)
        items = []
        for report in reports:
            dto = ReportDto.model_validate(report)
            if report.status == ReportStatus.SUCCESS:
                try:
                    dto.data = await asyncio.to_thread(self._presign_urls, report)
                except (BotoCoreError, ClientError) as e:
                    logger.warning(f"Failed to generate presigned URLs for report {report.id}: {e}")
            items.append(dto.to_json())

        logger.info(f"Retrieved {len(reports)} reports for site {site_id}")
        return {"siteId": site_id, "reports": items, "count": len(items)}

    async def get_report(self, site_id: str, report_id: str) -> dict[str, Any]:
        self._validate_ids(site_id, report_id)
        await self.access_control.require_site_access(site_id, REPORT_ACCESS_DENIED)

        report = await self._load_report(report_id)
        if report.status != ReportStatus.SUCCESS:
            raise ValidationError("Report is still processing.")
        if str(report.site_id) != site_id:
            raise ValidationError("Report does not belong to the specified site")

        dto = ReportDto.model_validate(report)
        dto.data = await asyncio.to_thread(self._presign_urls, report)
        return dto.to_json()

    async def delete_report(self, site_id: str, report_id: str) -> dict[str, Any]:
        """
        Delete a report; stored files of successful reports are removed best-effort.
        """
        self._validate_ids(site_id, report_id)
        await self.access_control.require_site_access(site_id, REPORT_ACCESS_DENIED)

        report = await self._load_report(report_id)
        if str(report.site_id) != site_id:
            raise ValidationError("Report does not belong to the specified site")

        if report.status == ReportStatus.SUCCESS and report.raw_storage_path:
            raw_key = f"{report.raw_storage_path}{REPORT_FILE}"
            enhanced_key = f"{report.enhanced_storage_path}{REPORT_FILE}"
            try:
                await asyncio.gather(
                    asyncio.to_thread(self.s3_client.delete_object, self.storage.report_bucket, raw_key),
                    asyncio.to_thread(self.s3_client.delete_object, self.storage.mystique_bucket, enhanced_key),
                )
                logger.info(f"S3 files deleted for report {report_id}: {raw_key}, {enhanced_key}")
            except (BotoCoreError, ClientError) as e:
                logger.warning(f"Failed to delete S3 files for report {report_id}: {e}")

        await report_crud.remove(self.db, report)
        logger.info(f"Report {report_id} deleted for site {site_id}")
        return {"message": "Report deleted successfully", "siteId": site_id, "reportId": report_id}

    async def update_enhanced_report(
        self, site_id: str, report_id: str, payload: Any
    ) -> dict[str, Any]:
        """
        Replace the enhanced report JSON of a successful report.

        Args:
            site_id: Site UUID
            report_id: Report UUID
            payload: Enhanced report document

        Returns:
            dict: Confirmation with updatedAt

        Raises:
            ValidationError: Empty body, wrong status or no storage path
            UpstreamServiceError: Upload failed
        """
        self._validate_ids(site_id, report_id)
        if not is_non_empty_object(payload):
            raise ValidationError("Request data is required")
        await self.access_control.require_site_access(site_id, REPORT_ACCESS_DENIED)

        report = await self._load_report(report_id)
        if str(report.site_id) != site_id:
            raise ValidationError("Report does not belong to the specified site")
        if report.status != ReportStatus.SUCCESS:
            raise ValidationError("Can only update reports that are in success status")
        if not report.enhanced_storage_path:
            raise ValidationError("Report does not have a valid storage path")

        key = f"{report.enhanced_storage_path}{REPORT_FILE}"
        try:
            await asyncio.to_thread(self.s3_client.put_json, self.storage.mystique_bucket, key, payload)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to upload enhanced report for report {report_id}: {e}")
            raise UpstreamServiceError(f"Failed to update report in S3: {e}", service="s3") from e

        report.updated_by = self.access_control.auth_info.user_identifier
        report = await report_crud.save(self.db, report)
        logger.info(f"Enhanced report updated for report {report_id} at key: {key}")
        return {
            "message": "Enhanced report updated successfully",
            "siteId": site_id,
            "reportId": report_id,
            "updatedAt": iso_utc(report.updated_at),
        }
