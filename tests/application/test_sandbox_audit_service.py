"""
Tests for SandboxAuditService.

Dependencies: pytest, pytest-asyncio, aiosqlite, botocore
System role: Sandbox audit triggering and rate limit verification
"""

from datetime import timedelta

import pytest
from botocore.exceptions import ClientError

from spacecat_api.application.services.sandbox_audit_service import (
    SandboxAuditService,
    minutes_remaining,
    parse_audit_types,
)
from spacecat_api.boundary.db.CRUD import audit_crud, configuration_crud, site_crud
from spacecat_api.configs.queues import QueueSettings
from spacecat_api.configs.sandbox import SandboxSettings
from spacecat_api.core.exceptions import (
    AccessDeniedError,
    ConfigurationError,
    NotFoundError,
    RateLimitExceededError,
    ValidationError,
)
from spacecat_api.core.timestamps import now_utc

SANDBOX_URL = "https://sandbox.example.com"
QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123/audit-jobs"


@pytest.fixture
async def sandbox_site(test_async_db, organization):
    return await site_crud.create(
        test_async_db, base_url=SANDBOX_URL, organization_id=organization.id, is_sandbox=True
    )


@pytest.fixture
async def configuration(test_async_db, sandbox_site):
    return await configuration_crud.create(
        test_async_db,
        version=1,
        handlers={
            "meta-tags": {"enabledByDefault": True},
            "alt-text": {"enabled": {"sites": [str(sandbox_site.id)], "orgs": []}},
            "broken-internal-links": {"enabledByDefault": True, "disabled": {"sites": [str(sandbox_site.id)]}},
        },
    )


def build_service(db, access_control, sqs_client, hours: float = 1, queue_url: str = QUEUE_URL) -> SandboxAuditService:
    return SandboxAuditService(
        db=db,
        access_control=access_control,
        sqs_client=sqs_client,
        queue_settings=QueueSettings(audit_jobs_queue_url=queue_url),
        sandbox_settings=SandboxSettings(rate_limit_hours=hours),
    )


@pytest.fixture
def sandbox_service(test_async_db, member_access, mock_sqs_client) -> SandboxAuditService:
    return build_service(test_async_db, member_access, mock_sqs_client)


class TestHelpers:
    def test_parse_audit_types(self):
        assert parse_audit_types(None) == []
        assert parse_audit_types(" meta-tags, alt-text,meta-tags,") == ["meta-tags", "alt-text"]

    @pytest.mark.parametrize(
        "seconds_ago,hours,expected",
        [
            (0, 1, 60),
            (30 * 60, 1, 30),
            (30 * 60 + 59, 1, 30),
            (3599, 1, 1),
            (3600, 1, 0),
            (2 * 3600, 1, 0),
            (15 * 60, 0.5, 15),
        ],
    )
    def test_minutes_remaining(self, seconds_ago, hours, expected):
        assert minutes_remaining(seconds_ago, hours) == expected


class TestTriggerAudits:
    """Site resolution, audit selection and queueing."""

    async def test_single_audit(self, sandbox_service, sandbox_site, configuration, mock_sqs_client):
        # Act
        result = await sandbox_service.trigger_audits(SANDBOX_URL, "meta-tags")

        # Assert
        assert result == {
            "message": f"Successfully triggered meta-tags audit for {SANDBOX_URL}",
            "siteId": str(sandbox_site.id),
            "auditType": "meta-tags",
            "baseURL": SANDBOX_URL,
        }
        queue_url, message = mock_sqs_client.send_message.call_args.args
        assert queue_url == QUEUE_URL
        assert message == {"type": "meta-tags", "siteId": str(sandbox_site.id), "auditContext": {}}

    async def test_all_enabled_audits(self, sandbox_service, sandbox_site, configuration, mock_sqs_client):
        # Act
        result = await sandbox_service.trigger_audits(SANDBOX_URL, None)

        # Assert
        assert result["auditsTriggered"] == ["meta-tags", "alt-text"]
        assert result["message"] == f"Triggered 2 audits for {SANDBOX_URL}"
        assert mock_sqs_client.send_message.call_count == 2

    async def test_partial_queue_failure(self, sandbox_service, sandbox_site, configuration, mock_sqs_client):
        # Arrange
        def send(queue_url, message):
            if message["type"] == "alt-text":
                raise ClientError({"Error": {"Code": "Throttling", "Message": "slow down"}}, "SendMessage")
            return "message-id"

        mock_sqs_client.send_message.side_effect = send

        # Act
        result = await sandbox_service.trigger_audits(SANDBOX_URL, "meta-tags,alt-text")

        # Assert
        assert result["message"] == f"Triggered 1 of 2 audits for {SANDBOX_URL}"
        assert result["auditsTriggered"] == ["meta-tags"]
        failed = [r for r in result["results"] if r["status"] == "failed"]
        assert failed[0]["auditType"] == "alt-text"

    async def test_missing_base_url(self, sandbox_service):
        with pytest.raises(ValidationError, match="baseURL query parameter is required"):
            await sandbox_service.trigger_audits(None, None)

    async def test_invalid_base_url(self, sandbox_service):
        with pytest.raises(ValidationError, match="Invalid baseURL provided"):
            await sandbox_service.trigger_audits("not a url", None)

    async def test_unknown_site(self, sandbox_service):
        with pytest.raises(NotFoundError, match="Site not found for baseURL"):
            await sandbox_service.trigger_audits("https://unknown.example.com", None)

    async def test_non_sandbox_site(self, sandbox_service, site):
        with pytest.raises(ValidationError, match="only supports sandbox sites"):
            await sandbox_service.trigger_audits("https://example.com", None)

    async def test_outsider_denied(self, test_async_db, outsider_access, mock_sqs_client, sandbox_site):
        # Arrange
        service = build_service(test_async_db, outsider_access, mock_sqs_client)

        # Act / Assert
        with pytest.raises(AccessDeniedError):
            await service.trigger_audits(SANDBOX_URL, None)

    async def test_unknown_audit_type(self, sandbox_service, sandbox_site, configuration):
        with pytest.raises(ValidationError, match="Invalid audit types: cwv"):
            await sandbox_service.trigger_audits(SANDBOX_URL, "meta-tags,cwv")

    async def test_disabled_audit_type(self, sandbox_service, sandbox_site, configuration):
        with pytest.raises(ValidationError, match="disabled for this site: broken-internal-links"):
            await sandbox_service.trigger_audits(SANDBOX_URL, "broken-internal-links")

    async def test_no_configuration(self, sandbox_service, sandbox_site):
        with pytest.raises(ValidationError, match="No audits configured for site"):
            await sandbox_service.trigger_audits(SANDBOX_URL, None)

    async def test_missing_queue(self, test_async_db, member_access, mock_sqs_client, sandbox_site, configuration):
        # Arrange
        service = build_service(test_async_db, member_access, mock_sqs_client, queue_url="")

        # Act / Assert
        with pytest.raises(ConfigurationError):
            await service.trigger_audits(SANDBOX_URL, "meta-tags")


class TestRateLimit:
    """One run per audit type per window."""

    async def test_recent_audit_is_limited(self, test_async_db, sandbox_service, sandbox_site, configuration, mock_sqs_client):
        # Arrange
        await audit_crud.create(
            test_async_db,
            site_id=sandbox_site.id,
            audit_type="meta-tags",
            audited_at=now_utc() - timedelta(minutes=20),
        )

        # Act
        with pytest.raises(RateLimitExceededError) as exc_info:
            await sandbox_service.trigger_audits(SANDBOX_URL, "meta-tags,alt-text")

        # Assert
        assert exc_info.value.minutes_remaining in (40, 41)
        assert "meta-tags" in exc_info.value.message
        mock_sqs_client.send_message.assert_not_called()

    async def test_old_audit_is_not_limited(self, test_async_db, sandbox_service, sandbox_site, configuration):
        # Arrange
        await audit_crud.create(
            test_async_db,
            site_id=sandbox_site.id,
            audit_type="meta-tags",
            audited_at=now_utc() - timedelta(hours=2),
        )

        # Act
        result = await sandbox_service.trigger_audits(SANDBOX_URL, "meta-tags")

        # Assert
        assert result["auditType"] == "meta-tags"

    async def test_zero_window_disables_limit(self, test_async_db, member_access, mock_sqs_client, sandbox_site, configuration):
        # Arrange
        await audit_crud.create(
            test_async_db, site_id=sandbox_site.id, audit_type="meta-tags", audited_at=now_utc()
        )
        service = build_service(test_async_db, member_access, mock_sqs_client, hours=0)

        # Act
        result = await service.trigger_audits(SANDBOX_URL, "meta-tags")

        # Assert
        assert result["auditType"] == "meta-tags"
