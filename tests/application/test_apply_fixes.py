"""
Tests for ApplyFixesService and the accessibility fix handler.

The handler reads generated fixes from a mocked S3 client and submits them
to a mocked pull-request webhook.

Dependencies: pytest, pytest-asyncio, aiosqlite, botocore
System role: Apply-fixes flow verification
"""

import uuid
from unittest.mock import AsyncMock

import httpx
import pytest
from botocore.exceptions import ClientError

from spacecat_api.application.fix_handlers import (
    AccessibilityFixHandler,
    FixHandler,
    FixHandlerType,
)
from spacecat_api.application.services.apply_fixes_service import ApplyFixesService
from spacecat_api.boundary.db.CRUD import (
    fix_crud,
    organization_crud,
    site_crud,
    suggestion_crud,
)
from spacecat_api.core.exceptions import (
    AccessDeniedError,
    NotFoundError,
    SpacecatApiError,
    UpstreamServiceError,
    ValidationError,
)
from spacecat_api.core.fingerprint import url_source_fingerprint

PAGE_URL = "https://example.com/contact"
SOURCE = "#contact-form"
PR_HANDLER_URL = "https://aso.example.com/pull-request-handler"


class TestApplyFixesService:
    """Request validation and dispatch."""

    @pytest.fixture
    def handler(self):
        handler = AsyncMock(spec=FixHandler)
        handler.apply.return_value = {"fixes": [], "metadata": {"total": 0, "success": 0, "failed": 0}}
        return handler

    @pytest.fixture
    def service(self, test_async_db, member_access, handler) -> ApplyFixesService:
        return ApplyFixesService(
            db=test_async_db,
            access_control=member_access,
            handlers={FixHandlerType.ACCESSIBILITY: handler},
        )

    async def test_dispatches_to_handler(self, service, handler, site, opportunity, random_id):
        # Act
        result = await service.apply_fixes(
            str(site.id), str(opportunity.id), {"type": "accessibility", "suggestionIds": [random_id]}
        )

        # Assert
        assert result["metadata"]["total"] == 0
        _, called_site, called_opportunity, ids = handler.apply.call_args.args
        assert called_site.id == site.id
        assert called_opportunity.id == opportunity.id
        assert ids == [random_id]

    @pytest.mark.parametrize(
        "payload,message",
        [
            (None, "Request body is required"),
            ({"suggestionIds": ["x"]}, "type field is required"),
            ({"type": "accessibility", "suggestionIds": []}, "suggestionIds array is required"),
            ({"type": "meta-tags", "suggestionIds": ["x"]}, "Unsupported fix type: meta-tags"),
            ({"type": "accessibility", "suggestionIds": ["bad-id"]}, "Invalid suggestion ID format: bad-id"),
        ],
    )
    async def test_rejects_invalid_requests(self, service, site, opportunity, payload, message):
        with pytest.raises(ValidationError, match=message):
            await service.apply_fixes(str(site.id), str(opportunity.id), payload)

    async def test_unsupported_type_lists_supported(self, service, site, opportunity):
        # Act
        with pytest.raises(ValidationError) as exc_info:
            await service.apply_fixes(
                str(site.id), str(opportunity.id), {"type": "x", "suggestionIds": ["y"]}
            )

        # Assert
        assert "Supported types: accessibility" in exc_info.value.message

    async def test_denied_for_outsider(self, test_async_db, outsider_access, handler, site, opportunity, random_id):
        # Arrange
        service = ApplyFixesService(
            db=test_async_db,
            access_control=outsider_access,
            handlers={FixHandlerType.ACCESSIBILITY: handler},
        )

        # Act / Assert
        with pytest.raises(AccessDeniedError):
            await service.apply_fixes(
                str(site.id), str(opportunity.id), {"type": "accessibility", "suggestionIds": [random_id]}
            )
        handler.apply.assert_not_called()

    async def test_unknown_opportunity(self, service, site, random_id):
        with pytest.raises(NotFoundError, match="Opportunity not found"):
            await service.apply_fixes(
                str(site.id), str(uuid.uuid4()), {"type": "accessibility", "suggestionIds": [random_id]}
            )

    async def test_unexpected_handler_error_is_wrapped(self, service, handler, site, opportunity, random_id):
        # Arrange
        handler.apply.side_effect = RuntimeError("boom")

        # Act / Assert
        with pytest.raises(SpacecatApiError, match="Failed to apply accessibility fixes"):
            await service.apply_fixes(
                str(site.id), str(opportunity.id), {"type": "accessibility", "suggestionIds": [random_id]}
            )


class TestAccessibilityFixHandler:
    """Grouping, S3 lookup and pull-request submission."""

    @pytest.fixture
    def handler(self, mock_s3_client, mock_ims_client, mock_webhook_client) -> AccessibilityFixHandler:
        return AccessibilityFixHandler(
            s3_client=mock_s3_client,
            ims_client=mock_ims_client,
            webhook_client=mock_webhook_client,
            assets_bucket="assets-bucket",
            pull_request_handler_url=PR_HANDLER_URL,
        )

    @pytest.fixture
    async def suggestion(self, test_async_db, opportunity):
        return await suggestion_crud.create(
            test_async_db,
            opportunity_id=opportunity.id,
            data={
                "url": PAGE_URL,
                "source": SOURCE,
                "issues": [{"type": "aria-label", "description": "Add aria labels"}],
            },
        )

    @pytest.fixture
    def stored_fixes(self, mock_s3_client, site):
        """Lay out report.json plus one patched asset for the suggestion group."""
        folder = f"fixes/{site.id}/{url_source_fingerprint(PAGE_URL, SOURCE)}/aria-label/"
        mock_s3_client.list_keys.return_value = [
            f"{folder}report.json",
            f"{folder}assets/blocks/form/form.js",
            f"{folder}assets/unrelated.js",
        ]
        mock_s3_client.get_json.return_value = {
            "type": "aria-label",
            "updatedFiles": ["blocks/form/form.js"],
        }
        mock_s3_client.get_text.return_value = "export default function decorate() {}"
        return folder

    async def test_creates_fix_and_links_suggestions(
        self, test_async_db, handler, site, opportunity, suggestion, stored_fixes,
        mock_s3_client, mock_webhook_client,
    ):
        # Act
        result = await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])

        # Assert
        assert result["metadata"] == {"total": 1, "success": 1, "failed": 0}
        fix = result["fixes"][0]["fix"]
        assert fix["type"] == "CODE_CHANGE"
        assert fix["status"] == "PENDING"
        assert fix["changeDetails"]["updatedFiles"] == ["blocks/form/form.js"]

        url, payload, ims_org_id, token = mock_webhook_client.submit.call_args.args
        assert url == PR_HANDLER_URL
        assert payload["title"] == "Add aria labels"
        assert payload["repoURL"] == "https://github.com/example/site"
        assert payload["updatedFiles"] == [
            {"path": "blocks/form/form.js", "content": "export default function decorate() {}"}
        ]
        assert ims_org_id == "1234567890ABCDEF@AdobeOrg"
        assert token == "service-token"
        mock_s3_client.get_text.assert_called_once_with(
            "assets-bucket", f"{stored_fixes}assets/blocks/form/form.js"
        )

        linked = await suggestion_crud.all_by_fix_entity_id(test_async_db, fix["id"])
        assert [s.id for s in linked] == [suggestion.id]

    async def test_rejected_submission_is_reported(
        self, test_async_db, handler, site, opportunity, suggestion, stored_fixes, mock_webhook_client,
    ):
        # Arrange
        mock_webhook_client.submit.return_value = httpx.Response(
            500, request=httpx.Request("POST", PR_HANDLER_URL)
        )

        # Act
        result = await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])

        # Assert
        assert result["metadata"] == {"total": 1, "success": 0, "failed": 1}
        assert result["fixes"][0]["statusCode"] == 400
        assert "AIO app returned 500" in result["fixes"][0]["message"]
        assert await fix_crud.all_by_opportunity_id(test_async_db, opportunity.id) == []

    async def test_network_error_is_reported(
        self, test_async_db, handler, site, opportunity, suggestion, stored_fixes, mock_webhook_client,
    ):
        # Arrange
        mock_webhook_client.submit.side_effect = httpx.ConnectError("refused")

        # Act
        result = await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])

        # Assert
        assert result["metadata"]["failed"] == 1
        assert "AIO app request failed" in result["fixes"][0]["message"]

    async def test_requires_github_url(self, test_async_db, handler, organization, opportunity, suggestion):
        # Arrange
        site = await site_crud.create(
            test_async_db, base_url="https://nogit.example.com", organization_id=organization.id
        )

        # Act / Assert
        with pytest.raises(ValidationError, match="GitHub repository URL"):
            await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])

    async def test_requires_ims_org_id(self, test_async_db, handler, opportunity, suggestion):
        # Arrange
        org = await organization_crud.create(test_async_db, name="No IMS")
        site = await site_crud.create(
            test_async_db,
            base_url="https://noims.example.com",
            organization_id=org.id,
            github_url="https://github.com/example/noims",
        )

        # Act / Assert
        with pytest.raises(ValidationError, match="IMS Org ID"):
            await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])

    async def test_unknown_suggestion(self, test_async_db, handler, site, opportunity):
        with pytest.raises(NotFoundError, match="Suggestion not found"):
            await handler.apply(test_async_db, site, opportunity, [str(uuid.uuid4())])

    async def test_suggestion_without_url_and_source(self, test_async_db, handler, site, opportunity):
        # Arrange
        bare = await suggestion_crud.create(test_async_db, opportunity_id=opportunity.id, data={})

        # Act / Assert
        with pytest.raises(ValidationError, match="No valid suggestions with URL and source"):
            await handler.apply(test_async_db, site, opportunity, [str(bare.id)])

    async def test_no_stored_fixes(self, test_async_db, handler, site, opportunity, suggestion, mock_s3_client):
        # Arrange
        mock_s3_client.list_keys.return_value = []

        # Act / Assert
        with pytest.raises(ValidationError, match="No matching fixes found"):
            await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])

    async def test_s3_listing_error_is_treated_as_empty(
        self, test_async_db, handler, site, opportunity, suggestion, mock_s3_client,
    ):
        # Arrange
        mock_s3_client.list_keys.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "ListObjectsV2"
        )

        # Act / Assert
        with pytest.raises(ValidationError, match="No matching fixes found"):
            await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])

    async def test_report_type_without_matching_issue(
        self, test_async_db, handler, site, opportunity, suggestion, stored_fixes, mock_s3_client, mock_webhook_client,
    ):
        # Arrange
        mock_s3_client.get_json.return_value = {"type": "color-contrast", "updatedFiles": ["a.css"]}

        # Act / Assert
        with pytest.raises(ValidationError, match="No matching fixes found"):
            await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])
        mock_webhook_client.submit.assert_not_called()

    async def test_token_failure(
        self, test_async_db, handler, site, opportunity, suggestion, stored_fixes, mock_ims_client,
    ):
        # Arrange
        mock_ims_client.settings = mock_ims_client.settings.model_copy(update={"host": ""})

        # Act / Assert
        with pytest.raises(UpstreamServiceError, match="Authentication failed"):
            await handler.apply(test_async_db, site, opportunity, [str(suggestion.id)])
