"""
Sandbox audit service.

Triggers audits on sandbox sites on demand. Each audit type may run at most
once per rate-limit window, measured from the type's latest audit.

Dependencies: boto3 (via SQSClient), sqlalchemy
System role: POST /sandbox/audit business logic
"""

import asyncio
import logging
import math
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.boundary.aws.sqs_client import SQSClient
from spacecat_api.boundary.db.CRUD.audit_crud import audit_crud, configuration_crud
from spacecat_api.boundary.db.CRUD.site_crud import site_crud
from spacecat_api.boundary.db.models.configuration_model import ConfigurationModel
from spacecat_api.boundary.db.models.site_model import SiteModel
from spacecat_api.configs.queues import QueueSettings
from spacecat_api.configs.sandbox import SandboxSettings
from spacecat_api.core.exceptions import (
    AccessDeniedError,
    ConfigurationError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from spacecat_api.core.timestamps import as_utc, now_utc
from spacecat_api.core.validators import has_text, is_valid_url

logger = logging.getLogger(__name__)

SUPPORTED_AUDITS = ("meta-tags", "alt-text", "broken-internal-links")


def parse_audit_types(audit_type: str | None) -> list[str]:
    """Split a comma-separated auditType query value, keeping first-seen order."""
    if not audit_type:
        return []
    types: list[str] = []
    for part in audit_type.split(","):
        name = part.strip()
        if name and name not in types:
            types.append(name)
    return types


def minutes_remaining(last_run_seconds_ago: float, window_hours: float) -> int:
    """
    Minutes left in the rate-limit window, 0 when it has passed.

    Args:
        last_run_seconds_ago: Seconds since the latest audit
        window_hours: Window length in hours

    Returns:
        int: window minutes minus whole elapsed minutes, or 0
    """
    elapsed_minutes = int(last_run_seconds_ago // 60)
    window_minutes = window_hours * 60
    if last_run_seconds_ago >= window_hours * 3600:
        return 0
    return max(math.ceil(window_minutes - elapsed_minutes), 1)


class SandboxAuditService:
    """Rate-limited audit triggering for sandbox sites."""

    def __init__(
        self,
        db: AsyncSession,
        access_control: AccessControl,
        sqs_client: SQSClient,
        queue_settings: QueueSettings,
        sandbox_settings: SandboxSettings,
    ) -> None:
        """
        Initialize sandbox audit service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization
            sqs_client: Queue client for audit jobs
            queue_settings: Audit jobs queue URL
            sandbox_settings: Rate-limit window
        """
        self.db = db
        self.access_control = access_control
        self.sqs_client = sqs_client
        self.queues = queue_settings
        self.sandbox = sandbox_settings

    async def _load_sandbox_site(self, base_url: str) -> SiteModel:
        site = await site_crud.find_by_base_url(self.db, base_url)
        if site is None:
            raise NotFoundError(f"Site not found for baseURL: {base_url}", entity="site")
        if not site.is_sandbox:
            raise ValidationError(
                "Sandbox audit endpoint only supports sandbox sites. "
                f"Site {site.id} is not a sandbox."
            )
        if not await self.access_control.has_access(site):
            raise AccessDeniedError("User does not have access to this site")
        return site

    @staticmethod
    def _select_audits(
        requested: list[str],
        configuration: ConfigurationModel | None,
        site: SiteModel,
        base_url: str,
    ) -> list[str]:
        def enabled(audit: str) -> bool:
            return configuration is not None and configuration.is_handler_enabled_for_site(audit, site)

        if not requested:
            audits = [a for a in SUPPORTED_AUDITS if enabled(a)]
            logger.info(f"Enabled sandbox audits for {base_url}: {', '.join(audits)}")
            if not audits:
                raise ValidationError(f"No audits configured for site: {base_url}")
            return audits

        invalid = [t for t in requested if t not in SUPPORTED_AUDITS]
        if invalid:
            raise ValidationError(
                f"Invalid audit types: {', '.join(invalid)}. "
                f"Supported types: {', '.join(SUPPORTED_AUDITS)}",
                field="auditType",
            )
        disabled = [t for t in requested if not enabled(t)]
        if disabled:
            raise ValidationError(
                f"The following audit types are disabled for this site: {', '.join(disabled)}"
            )
        return requested

    async def _check_rate_limit(self, site: SiteModel, audit_types: list[str]) -> None:
        """
        Reject the request if any audit ran inside the window.

        Raises:
            RateLimitExceededError: With the longest remaining wait
        """
        window = self.sandbox.rate_limit_hours
        if window <= 0:
            return

        now = now_utc()
        limited: dict[str, int] = {}
        for audit_type in audit_types:
            latest = await audit_crud.find_latest_for_site(self.db, site.id, audit_type)
            if latest is None:
                continue
            elapsed = (now - as_utc(latest.audited_at)).total_seconds()
            remaining = minutes_remaining(elapsed, window)
            if remaining > 0:
                limited[audit_type] = remaining

        if limited:
            wait = max(limited.values())
            logger.info(
                "Sandbox audit rate limited",
                extra={"site_id": str(site.id), "limited": limited},
            )
            raise RateLimitExceededError(
                f"Rate limit exceeded for audit types: {', '.join(limited)}. "
                f"Try again in {wait} minutes.",
                minutes_remaining=wait,
            )

    async def _trigger(self, queue_url: str, site: SiteModel, audit_type: str) -> dict[str, Any]:
        message = {"type": audit_type, "siteId": str(site.id), "auditContext": {}}
        try:
            await asyncio.to_thread(self.sqs_client.send_message, queue_url, message)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error running audit {audit_type} for site {site.base_url}: {e}")
            return {"auditType": audit_type, "status": "failed", "error": str(e)}
        return {"auditType": audit_type, "status": "triggered"}

    async def trigger_audits(self, base_url: str | None, audit_type: str | None) -> dict[str, Any]:
        """
        Trigger one, several or all enabled audits for a sandbox site.

        Args:
            base_url: Site base URL (query parameter)
            audit_type: Optional comma-separated audit types

        Returns:
            dict: Single-audit confirmation or multi-audit summary

        Raises:
            ValidationError: Bad URL, unknown/disabled types, or non-sandbox site
            NotFoundError: No site with this base URL
            RateLimitExceededError: An audit ran inside the window
            ConfigurationError: Audit queue URL not set
        """
        if not has_text(base_url):
            raise ValidationError("baseURL query parameter is required", field="baseURL")
        if not is_valid_url(base_url):
            raise ValidationError("Invalid baseURL provided", field="baseURL")

        site = await self._load_sandbox_site(base_url)
        configuration = await configuration_crud.find_latest(self.db)
        requested = parse_audit_types(audit_type)
        audits = self._select_audits(requested, configuration, site, base_url)

        await self._check_rate_limit(site, audits)

        queue_url = self.queues.audit_jobs_queue_url
        if not has_text(queue_url):
            logger.error("Audit jobs queue URL is not configured")
            raise ConfigurationError("Audit queue is not configured")

        results = list(await asyncio.gather(*(self._trigger(queue_url, site, a) for a in audits)))
        triggered = [r["auditType"] for r in results if r["status"] == "triggered"]

        if len(requested) == 1:
            return {
                "message": f"Successfully triggered {audits[0]} audit for {base_url}",
                "siteId": str(site.id),
                "auditType": audits[0],
                "baseURL": base_url,
            }

        if requested:
            message = f"Triggered {len(triggered)} of {len(audits)} audits for {base_url}"
        else:
            message = f"Triggered {len(triggered)} audits for {base_url}"
        return {
            "message": message,
            "siteId": str(site.id),
            "baseURL": base_url,
            "auditsTriggered": triggered,
            "results": results,
        }
