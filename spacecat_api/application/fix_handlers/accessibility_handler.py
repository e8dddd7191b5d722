"""
Accessibility fix handler.

Turns accessibility suggestions into pull requests. Suggestions are grouped
by (url, source) fingerprint; for each group the generated fix reports and
patched assets are read from the mystique assets bucket and submitted to
the ASO pull-request webhook. Each accepted submission becomes a
CODE_CHANGE fix linked to the suggestions it remediates.

Dependencies: boto3 (via S3StorageClient), httpx, sqlalchemy
System role: FixHandlerType.ACCESSIBILITY implementation
"""

import asyncio
import logging
from typing import Any, Sequence

import httpx
from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.fix_handlers.base import FixHandler
from spacecat_api.application.service_token import fetch_service_access_token
from spacecat_api.boundary.aws.s3_client import S3StorageClient
from spacecat_api.boundary.db.CRUD.opportunity_crud import fix_crud, suggestion_crud
from spacecat_api.boundary.db.CRUD.site_crud import organization_crud
from spacecat_api.boundary.db.models.fix_model import FixStatus, FixType
from spacecat_api.boundary.db.models.opportunity_model import OpportunityModel
from spacecat_api.boundary.db.models.site_model import SiteModel
from spacecat_api.boundary.db.models.suggestion_model import SuggestionModel
from spacecat_api.boundary.ims.ims_client import ImsClient
from spacecat_api.boundary.webhooks.pull_request_client import PullRequestWebhookClient
from spacecat_api.core.exceptions import (
    NotFoundError,
    SpacecatApiError,
    UpstreamServiceError,
    ValidationError,
)
from spacecat_api.core.fingerprint import group_by_fingerprint
from spacecat_api.core.s3_keys import assets_folder_for_report, fixes_prefix
from spacecat_api.core.validators import has_text
from spacecat_api.models.fix import fix_to_json

logger = logging.getLogger(__name__)

S3_READ_ERRORS = (BotoCoreError, ClientError, ValueError)


def _issue_for_type(suggestion: SuggestionModel, issue_type: Any) -> dict[str, Any] | None:
    issues = (suggestion.data or {}).get("issues") or []
    return next(
        (i for i in issues if isinstance(i, dict) and i.get("type") == issue_type),
        None,
    )


class AccessibilityFixHandler(FixHandler):
    """
    Submits generated accessibility fixes as pull requests.

    Attributes:
        s3_client: Storage client for the mystique assets bucket
        ims_client: IMS client for the webhook bearer token
        webhook_client: Pull-request webhook client
        assets_bucket: Bucket holding fixes/{siteId}/{fingerprint}/...
        pull_request_handler_url: Absolute webhook URL
    """

    def __init__(
        self,
        s3_client: S3StorageClient,
        ims_client: ImsClient,
        webhook_client: PullRequestWebhookClient,
        assets_bucket: str,
        pull_request_handler_url: str,
    ) -> None:
        self.s3_client = s3_client
        self.ims_client = ims_client
        self.webhook_client = webhook_client
        self.assets_bucket = assets_bucket
        self.pull_request_handler_url = pull_request_handler_url

    async def _list_keys(self, prefix: str) -> list[str]:
        try:
            return await asyncio.to_thread(self.s3_client.list_keys, self.assets_bucket, prefix)
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Failed to list fixes under {prefix}: {e}")
            return []

    async def _read_json(self, key: str) -> dict[str, Any] | None:
        try:
            report = await asyncio.to_thread(self.s3_client.get_json, self.assets_bucket, key)
        except S3_READ_ERRORS as e:
            logger.warning(f"Failed to read report from {key}: {e}")
            return None
        return report if isinstance(report, dict) else None

    async def _read_text(self, key: str) -> str | None:
        try:
            return await asyncio.to_thread(self.s3_client.get_text, self.assets_bucket, key)
        except S3_READ_ERRORS as e:
            logger.warning(f"Failed to read asset {key}: {e}")
            return None

    async def _collect_updated_files(
        self, keys: list[str], report_key: str, report: dict[str, Any]
    ) -> list[dict[str, str]]:
        """Read the assets a report lists in updatedFiles."""
        wanted = report.get("updatedFiles") or []
        folder = assets_folder_for_report(report_key)
        files: list[dict[str, str]] = []
        for key in keys:
            if not key.startswith(folder) or key == folder:
                continue
            relative_path = key[len(folder):]
            if relative_path not in wanted:
                continue
            content = await self._read_text(key)
            if content:
                files.append({"path": relative_path, "content": content})
        return files

    async def _load_suggestions(
        self, db: AsyncSession, opportunity: OpportunityModel, suggestion_ids: Sequence[str]
    ) -> list[SuggestionModel]:
        suggestions = []
        for suggestion_id in suggestion_ids:
            suggestion = await suggestion_crud.get_by_id(db, suggestion_id)
            if suggestion is None:
                raise NotFoundError(
                    f"Suggestion not found: {suggestion_id}",
                    entity="suggestion",
                    entity_id=suggestion_id,
                )
            if suggestion.opportunity_id != opportunity.id:
                raise ValidationError(
                    f"Suggestion {suggestion_id} does not belong to opportunity {opportunity.id}"
                )
            suggestions.append(suggestion)
        return suggestions

    async def apply(
        self,
        db: AsyncSession,
        site: SiteModel,
        opportunity: OpportunityModel,
        suggestion_ids: Sequence[str],
    ) -> dict[str, Any]:
        """
        Apply accessibility fixes for the given suggestions.

        Flow:
        1. Require a GitHub URL and an organization IMS org id
        2. Load and group suggestions by (url, source) fingerprint
        3. For each report.json of each group, submit the patched files
        4. Record a fix per accepted submission, a failure per rejected one

        Raises:
            ValidationError: Site misconfiguration, foreign suggestions or
                nothing to submit
            NotFoundError: Unknown suggestion
            UpstreamServiceError: 'Authentication failed', or
                'Failed to apply accessibility fix' on unexpected errors
        """
        repo_url = site.github_url
        if not has_text(repo_url):
            raise ValidationError("Site must have a GitHub repository URL configured")

        organization = (
            await organization_crud.get_by_id(db, site.organization_id)
            if site.organization_id
            else None
        )
        if organization is None or not organization.ims_org_id:
            raise ValidationError("Site must belong to an organization with IMS Org ID")

        suggestions = await self._load_suggestions(db, opportunity, suggestion_ids)
        groups = group_by_fingerprint(suggestions)
        if not groups:
            raise ValidationError("No valid suggestions with URL and source found")

        results: list[dict[str, Any]] = []
        token: str | None = None
        try:
            for group in groups.values():
                fingerprint = group["fingerprint"]
                logger.info(
                    f"Processing group for URL: {group['url']}, Source: {group['source']}, "
                    f"Hash: {fingerprint}"
                )
                keys = await self._list_keys(fixes_prefix(str(site.id), fingerprint))
                if not keys:
                    logger.warning(f"No fixes found in S3 for hash key: {fingerprint}")
                    continue

                for report_key in (k for k in keys if k.endswith("/report.json")):
                    report = await self._read_json(report_key)
                    if report is None:
                        continue

                    report_type = report.get("type")
                    matching = [
                        s for s in group["suggestions"] if _issue_for_type(s, report_type)
                    ]
                    if not matching:
                        continue

                    updated_files = await self._collect_updated_files(keys, report_key, report)
                    if not updated_files:
                        logger.warning(f"No updated files found for report: {report_key}")
                        continue

                    if token is None:
                        token = await fetch_service_access_token(self.ims_client)

                    issue = _issue_for_type(matching[0], report_type)
                    payload = {
                        "title": issue.get("description"),
                        "vcsType": "github",
                        "updatedFiles": updated_files,
                        "repoURL": repo_url,
                    }
                    results.append(
                        await self._submit(
                            db, opportunity, organization.ims_org_id, token,
                            report_type, payload, matching,
                        )
                    )
        except SpacecatApiError:
            raise
        except Exception as e:
            logger.exception(f"Error applying accessibility fix: {e}")
            raise UpstreamServiceError("Failed to apply accessibility fix") from e

        if not results:
            raise ValidationError("No matching fixes found in S3 for the provided suggestions")

        fixes = [
            {"index": index, "statusCode": 200, "fix": r["fix"]}
            if r["success"]
            else {"index": index, "statusCode": 400, "message": r["message"]}
            for index, r in enumerate(results)
        ]
        succeeded = sum(1 for r in results if r["success"])
        return {
            "fixes": fixes,
            "metadata": {
                "total": len(results),
                "success": succeeded,
                "failed": len(results) - succeeded,
            },
        }

    async def _submit(
        self,
        db: AsyncSession,
        opportunity: OpportunityModel,
        ims_org_id: str,
        token: str,
        report_type: Any,
        payload: dict[str, Any],
        matching: list[SuggestionModel],
    ) -> dict[str, Any]:
        """POST one pull request and persist the resulting fix."""
        try:
            response = await self.webhook_client.submit(
                self.pull_request_handler_url, payload, ims_org_id, token
            )
        except httpx.HTTPError as e:
            logger.error(f"AIO app request failed: {e}")
            return {"success": False, "type": report_type, "message": f"AIO app request failed: {e}"}

        if not response.is_success:
            logger.error(
                f"AIO app request failed: {response.status_code} {response.reason_phrase}",
                extra={"response_body": response.text},
            )
            return {
                "success": False,
                "type": report_type,
                "message": f"AIO app returned {response.status_code}: {response.reason_phrase}",
            }

        pull_request_url = response.json().get("pullRequest")
        fix = await fix_crud.create(
            db,
            opportunity_id=opportunity.id,
            type=FixType.CODE_CHANGE,
            status=FixStatus.PENDING,
            change_details={
                "pullRequestUrl": pull_request_url,
                "updatedFiles": [f["path"] for f in payload["updatedFiles"]],
            },
        )
        await suggestion_crud.link_to_fix(db, [s.id for s in matching], fix.id)
        logger.info(
            f"Applied accessibility fix for type: {report_type}",
            extra={"fix_id": str(fix.id), "pull_request_url": pull_request_url},
        )
        return {"success": True, "type": report_type, "fix": fix_to_json(fix)}
