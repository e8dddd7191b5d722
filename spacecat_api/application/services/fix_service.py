"""
Fix entity service.

Manages the fixes attached to an opportunity: listing, batch creation,
batch status changes, single-fix patches and removal. Also hosts the legacy
single-rule accessibility fix, which forwards opportunity guidance to the
AIO autofix endpoint.

Dependencies: sqlalchemy, httpx, spacecat_api.boundary
System role: Fix business logic behind the fixes router
"""

import logging
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.application.service_token import fetch_service_access_token
from spacecat_api.boundary.db.CRUD.opportunity_crud import (
    fix_crud,
    opportunity_crud,
    suggestion_crud,
)
from spacecat_api.boundary.db.CRUD.site_crud import organization_crud
from spacecat_api.boundary.db.models.fix_model import FixModel, FixStatus, FixType
from spacecat_api.boundary.db.models.opportunity_model import OpportunityModel
from spacecat_api.boundary.ims.ims_client import ImsClient
from spacecat_api.boundary.webhooks.pull_request_client import PullRequestWebhookClient
from spacecat_api.configs.aso import AsoSettings
from spacecat_api.core.exceptions import (
    NotFoundError,
    SpacecatApiError,
    UpstreamServiceError,
    ValidationError,
)
from spacecat_api.core.timestamps import as_utc
from spacecat_api.core.validators import (
    has_text,
    is_iso_date,
    is_non_empty_object,
    is_valid_uuid,
    parse_iso_datetime,
)
from spacecat_api.models.common import BatchMetadata
from spacecat_api.models.fix import fix_to_json, suggestion_to_json

logger = logging.getLogger(__name__)

FIX_ACCESS_DENIED = "Only users belonging to the organization may access fix entities."


def validate_fix_path(site_id: str, opportunity_id: str, fix_id: str | None = None) -> None:
    """
    Validate the path parameters shared by all fix operations.

    Raises:
        ValidationError: On the first malformed identifier
    """
    if not is_valid_uuid(site_id):
        raise ValidationError("Site ID required", field="siteId")
    if not is_valid_uuid(opportunity_id):
        raise ValidationError("Opportunity ID required", field="opportunityId")
    if fix_id is not None and not is_valid_uuid(fix_id):
        raise ValidationError("Fix ID required", field="fixId")


def batch_metadata(items: list[dict[str, Any]]) -> dict[str, int]:
    """Count per-item results; anything below 400 is a success."""
    success = sum(1 for item in items if item["statusCode"] < 400)
    return BatchMetadata(
        total=len(items), success=success, failed=len(items) - success
    ).to_json()


def _parse_status(value: Any) -> FixStatus:
    try:
        return FixStatus(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in FixStatus)
        raise ValidationError(
            f"Invalid fix status: {value}. Allowed values: {allowed}", field="status"
        ) from e


def _fix_fields_from_item(item: Any) -> dict[str, Any]:
    """
    Turn one POST item into FixModel column values.

    Args:
        item: Raw element of the request array

    Returns:
        dict: Keyword arguments for fix_crud.create

    Raises:
        ValidationError: When the item does not describe a valid fix
    """
    if not isinstance(item, dict):
        raise ValidationError("Fix data must be an object")

    fix_type = item.get("type")
    if not has_text(fix_type):
        raise ValidationError("Fix type is required", field="type")
    try:
        fields: dict[str, Any] = {"type": FixType(fix_type)}
    except ValueError as e:
        allowed = ", ".join(t.value for t in FixType)
        raise ValidationError(
            f"Invalid fix type: {fix_type}. Allowed values: {allowed}", field="type"
        ) from e

    if item.get("status") is not None:
        fields["status"] = _parse_status(item["status"])

    change_details = item.get("changeDetails", {})
    if not isinstance(change_details, dict):
        raise ValidationError("changeDetails must be an object", field="changeDetails")
    fields["change_details"] = change_details

    if item.get("origin") is not None:
        if not has_text(item["origin"]):
            raise ValidationError("origin must be a non-empty string", field="origin")
        fields["origin"] = item["origin"]

    if item.get("executedBy") is not None:
        if not has_text(item["executedBy"]):
            raise ValidationError("executedBy must be a non-empty string", field="executedBy")
        fields["executed_by"] = item["executedBy"]

    for key, column in (("executedAt", "executed_at"), ("publishedAt", "published_at")):
        if item.get(key) is not None:
            if not is_iso_date(item[key]):
                raise ValidationError(f"{key} must be an ISO 8601 date", field=key)
            fields[column] = parse_iso_datetime(item[key])

    return fields


class FixService:
    """
    Fix entity operations scoped to a site and opportunity.

    Every operation validates identifiers, checks the caller belongs to the
    site's organization, then checks the fix and opportunity belong together.
    """

    def __init__(
        self,
        db: AsyncSession,
        access_control: AccessControl,
        ims_client: ImsClient,
        webhook_client: PullRequestWebhookClient,
        aso_settings: AsoSettings,
    ) -> None:
        """
        Initialize fix service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization
            ims_client: IMS client for service tokens
            webhook_client: HTTP client for the autofix endpoint
            aso_settings: Autofix endpoint configuration
        """
        self.db = db
        self.access_control = access_control
        self.ims_client = ims_client
        self.webhook_client = webhook_client
        self.aso_settings = aso_settings

    async def _check_ownership(
        self,
        fix: FixModel | None,
        opportunity_id: str,
        site_id: str,
    ) -> OpportunityModel:
        """Ensure the fix (if any) and its opportunity belong to the site."""
        if fix is not None and str(fix.opportunity_id) != opportunity_id:
            raise NotFoundError("Opportunity not found", entity="opportunity", entity_id=opportunity_id)
        opportunity = await opportunity_crud.get_by_id(self.db, opportunity_id)
        if opportunity is None or str(opportunity.site_id) != site_id:
            raise NotFoundError("Opportunity not found", entity="opportunity", entity_id=opportunity_id)
        return opportunity

    async def _load_fix(self, site_id: str, opportunity_id: str, fix_id: str) -> FixModel:
        fix = await fix_crud.get_by_id(self.db, fix_id)
        if fix is None:
            raise NotFoundError("Fix not found", entity="fix", entity_id=fix_id)
        await self._check_ownership(fix, opportunity_id, site_id)
        return fix

    async def get_all_for_opportunity(
        self, site_id: str, opportunity_id: str
    ) -> list[dict[str, Any]]:
        """
        List every fix of an opportunity.

        Returns:
            list[dict]: Serialized fixes, oldest first
        """
        validate_fix_path(site_id, opportunity_id)
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)

        fixes = await fix_crud.all_by_opportunity_id(self.db, opportunity_id)
        await self._check_ownership(fixes[0] if fixes else None, opportunity_id, site_id)
        return [fix_to_json(fix) for fix in fixes]

    async def get_by_status(
        self, site_id: str, opportunity_id: str, status: str
    ) -> list[dict[str, Any]]:
        """
        List an opportunity's fixes in one status.

        Unknown status values yield an empty list.
        """
        validate_fix_path(site_id, opportunity_id)
        if not has_text(status):
            raise ValidationError("Status is required", field="status")
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)

        fixes = await fix_crud.all_by_opportunity_id_and_status(self.db, opportunity_id, status)
        await self._check_ownership(fixes[0] if fixes else None, opportunity_id, site_id)
        return [fix_to_json(fix) for fix in fixes]

    async def get_by_id(self, site_id: str, opportunity_id: str, fix_id: str) -> dict[str, Any]:
        validate_fix_path(site_id, opportunity_id, fix_id)
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)
        fix = await self._load_fix(site_id, opportunity_id, fix_id)
        return fix_to_json(fix)

    async def get_suggestions_for_fix(
        self, site_id: str, opportunity_id: str, fix_id: str
    ) -> list[dict[str, Any]]:
        """List the suggestions a fix remediates."""
        validate_fix_path(site_id, opportunity_id, fix_id)
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)
        await self._load_fix(site_id, opportunity_id, fix_id)

        suggestions = await suggestion_crud.all_by_fix_entity_id(self.db, fix_id)
        return [suggestion_to_json(s) for s in suggestions]

    async def create_fixes(self, site_id: str, opportunity_id: str, payload: Any) -> dict[str, Any]:
        """
        Create fixes from an array of fix descriptions.

        Items are processed independently; one bad item does not stop the rest.

        Args:
            site_id: Site UUID
            opportunity_id: Opportunity UUID
            payload: Request body, expected to be a list

        Returns:
            dict: {fixes: [{index, statusCode, fix|message}], metadata}
        """
        validate_fix_path(site_id, opportunity_id)
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)
        opportunity = await self._check_ownership(None, opportunity_id, site_id)

        if not isinstance(payload, list):
            if not payload:
                raise ValidationError("No updates provided")
            raise ValidationError("Request body must be an array")

        results: list[dict[str, Any]] = []
        for index, item in enumerate(payload):
            try:
                fields = _fix_fields_from_item(item)
                fix = await fix_crud.create(self.db, opportunity_id=opportunity.id, **fields)
                results.append({"index": index, "fix": fix_to_json(fix), "statusCode": 201})
            except ValidationError as e:
                results.append({"index": index, "message": e.message, "statusCode": 400})
            except Exception as e:
                logger.exception(f"Failed to create fix at index {index}")
                results.append({"index": index, "message": str(e), "statusCode": 500})

        metadata = batch_metadata(results)
        logger.info(
            "Created fixes",
            extra={"opportunity_id": opportunity_id, **metadata},
        )
        return {"fixes": results, "metadata": metadata}

    async def _patch_status_item(
        self, index: int, item: Any, site_id: str, opportunity_id: str
    ) -> dict[str, Any]:
        fix_id = item.get("id") if isinstance(item, dict) else None
        status = item.get("status") if isinstance(item, dict) else None

        if not has_text(fix_id):
            return {"index": index, "uuid": "", "message": "fix id is required", "statusCode": 400}
        if not has_text(status):
            return {"index": index, "uuid": fix_id, "message": "fix status is required", "statusCode": 400}

        fix = await fix_crud.get_by_id(self.db, fix_id)
        if fix is None:
            return {"index": index, "uuid": fix_id, "message": "Fix not found", "statusCode": 404}
        try:
            await self._check_ownership(fix, opportunity_id, site_id)
            new_status = _parse_status(status)
        except SpacecatApiError as e:
            return {"index": index, "uuid": fix_id, "message": e.message, "statusCode": e.status_code}

        if fix.status == new_status:
            return {"index": index, "uuid": fix_id, "message": "No updates provided", "statusCode": 400}

        fix.status = new_status
        fix = await fix_crud.save(self.db, fix)
        return {"index": index, "uuid": fix_id, "fix": fix_to_json(fix), "statusCode": 200}

    async def patch_fixes_status(
        self, site_id: str, opportunity_id: str, payload: Any
    ) -> dict[str, Any]:
        """
        Change the status of several fixes.

        Args:
            site_id: Site UUID
            opportunity_id: Opportunity UUID
            payload: List of {id, status}

        Returns:
            dict: {fixes: [{index, uuid, statusCode, fix|message}], metadata}
        """
        validate_fix_path(site_id, opportunity_id)
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)

        if not isinstance(payload, list):
            if not payload:
                raise ValidationError("No updates provided")
            raise ValidationError("Request body must be an array of [{ id: <fix id>, status: <fix status> },...]")

        results: list[dict[str, Any]] = []
        for index, item in enumerate(payload):
            try:
                results.append(
                    await self._patch_status_item(index, item, site_id, opportunity_id)
                )
            except Exception as e:
                logger.exception(f"Failed to update fix status at index {index}")
                fix_id = item.get("id", "") if isinstance(item, dict) else ""
                results.append({"index": index, "uuid": fix_id, "message": str(e), "statusCode": 500})

        return {"fixes": results, "metadata": batch_metadata(results)}

    async def patch_fix(
        self, site_id: str, opportunity_id: str, fix_id: str, payload: Any
    ) -> dict[str, Any]:
        """
        Update the mutable attributes of one fix.

        Args:
            site_id: Site UUID
            opportunity_id: Opportunity UUID
            fix_id: Fix UUID
            payload: Partial fix with executedBy, executedAt, publishedAt,
                changeDetails or suggestionIds

        Returns:
            dict: Serialized updated fix

        Raises:
            ValidationError: 'No updates provided' or 'Invalid suggestion IDs'
        """
        validate_fix_path(site_id, opportunity_id, fix_id)
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)
        fix = await self._load_fix(site_id, opportunity_id, fix_id)

        if not payload or not isinstance(payload, dict):
            raise ValidationError("No updates provided")

        has_updates = False

        suggestion_ids = payload.get("suggestionIds")
        if isinstance(suggestion_ids, list):
            suggestions = await suggestion_crud.get_many_by_ids(self.db, suggestion_ids)
            if len(suggestions) != len(set(suggestion_ids)) or any(
                s.opportunity_id != fix.opportunity_id for s in suggestions
            ):
                raise ValidationError("Invalid suggestion IDs", field="suggestionIds")
            await suggestion_crud.link_to_fix(self.db, [s.id for s in suggestions], fix.id)
            has_updates = True

        executed_by = payload.get("executedBy")
        if has_text(executed_by) and executed_by != fix.executed_by:
            fix.executed_by = executed_by
            has_updates = True

        for key, attr in (("executedAt", "executed_at"), ("publishedAt", "published_at")):
            value = payload.get(key)
            if not is_iso_date(value):
                continue
            parsed = as_utc(parse_iso_datetime(value))
            current = getattr(fix, attr)
            if current is None or as_utc(current) != parsed:
                setattr(fix, attr, parsed)
                has_updates = True

        change_details = payload.get("changeDetails")
        if is_non_empty_object(change_details) and change_details != fix.change_details:
            fix.change_details = change_details
            has_updates = True

        if not has_updates:
            raise ValidationError("No updates provided")

        fix = await fix_crud.save(self.db, fix)
        logger.info("Updated fix", extra={"fix_id": fix_id})
        return fix_to_json(fix)

    async def remove_fix(self, site_id: str, opportunity_id: str, fix_id: str) -> None:
        validate_fix_path(site_id, opportunity_id, fix_id)
        await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)
        fix = await self._load_fix(site_id, opportunity_id, fix_id)

        try:
            await fix_crud.remove(self.db, fix)
        except Exception as e:
            logger.exception(f"Failed to remove fix {fix_id}")
            raise SpacecatApiError(f"Error removing fix: {e}") from e
        logger.info("Removed fix", extra={"fix_id": fix_id})

    async def apply_accessibility_fix(
        self, site_id: str, opportunity_id: str, payload: Any
    ) -> dict[str, Any]:
        """
        Send one accessibility rule's guidance to the AIO autofix endpoint.

        Flow:
        1. Validate path and body (form, formSource, ruleId)
        2. Check access, then load the opportunity
        3. Resolve the organization IMS org id and the stored guidance
        4. Obtain a service token and POST the diff to the autofix endpoint

        Args:
            site_id: Site UUID
            opportunity_id: Opportunity UUID
            payload: {form, formSource, ruleId}

        Returns:
            dict: {message, prUrl, diffContent, appliedRule}

        Raises:
            ValidationError: Missing body fields, organization or guidance
            NotFoundError: Unknown site or opportunity
            UpstreamServiceError: Token or webhook failure
        """
        validate_fix_path(site_id, opportunity_id)
        if not payload or not isinstance(payload, dict):
            raise ValidationError("Request body is required")
        form = payload.get("form")
        form_source = payload.get("formSource")
        rule_id = payload.get("ruleId")
        if not has_text(form):
            raise ValidationError("form URL is required", field="form")
        if not has_text(form_source):
            raise ValidationError("formSource is required", field="formSource")
        if not has_text(rule_id):
            raise ValidationError("ruleId is required", field="ruleId")

        site = await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)
        opportunity = await self._check_ownership(None, opportunity_id, site_id)

        autofix_url = self.aso_settings.autofix_api_url
        if not has_text(autofix_url):
            logger.error("AIO autofix API URL is not configured")
            raise UpstreamServiceError("AIO autofix service is not configured", service="aio")

        organization = (
            await organization_crud.get_by_id(self.db, site.organization_id)
            if site.organization_id
            else None
        )
        if organization is None or not organization.ims_org_id:
            raise ValidationError("Site must belong to an organization with IMS Org ID")

        guidance = extract_accessibility_guidance(opportunity.data, form, form_source, rule_id)
        if guidance is None:
            raise ValidationError("No accessibility guidance found for the specified form and rule ID")

        aio_payload = {
            "diffContent": guidance["diffContent"],
            "siteId": site_id,
            "title": guidance["title"],
            "vcsType": "github",
        }
        token = await fetch_service_access_token(self.ims_client)

        try:
            response = await self.webhook_client.submit(
                autofix_url, aio_payload, organization.ims_org_id, token
            )
        except httpx.HTTPError as e:
            logger.error(f"AIO app request failed: {e}")
            raise UpstreamServiceError("Failed to apply accessibility fix", service="aio") from e

        if not response.is_success:
            logger.error(
                f"AIO app request failed: {response.status_code} {response.reason_phrase}",
                extra={"response_body": response.text},
            )
            raise UpstreamServiceError(
                "Failed to apply accessibility fix",
                service="aio",
                details={"reason": f"AIO app returned {response.status_code}: {response.reason_phrase}"},
            )

        result = response.json()
        logger.info(
            f"Applied accessibility fix for site {site_id}, opportunity {opportunity_id}"
        )
        return {
            "message": "Accessibility fix applied successfully",
            "prUrl": result.get("prUrl") or result.get("pullRequestUrl"),
            "diffContent": aio_payload["diffContent"],
            "appliedRule": rule_id,
        }


def extract_accessibility_guidance(
    data: Any, form: str, form_source: str, rule_id: str
) -> dict[str, Any] | None:
    """
    Find the guidance diff stored on an accessibility opportunity.

    Args:
        data: Opportunity data; guidance lives in data.accessibility[].a11yIssues[]
        form: Form URL to match
        form_source: Form source selector to match
        rule_id: Accessibility rule id to match

    Returns:
        dict | None: {diffContent, title}, or None when nothing matches
    """
    entries = data.get("accessibility") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        return None

    entry = next(
        (
            e
            for e in entries
            if isinstance(e, dict) and e.get("form") == form and e.get("formSource") == form_source
        ),
        None,
    )
    if entry is None or not isinstance(entry.get("a11yIssues"), list):
        return None

    issue = next(
        (i for i in entry["a11yIssues"] if isinstance(i, dict) and i.get("ruleId") == rule_id),
        None,
    )
    if issue is None or not has_text(issue.get("guidance")):
        return None
    return {"diffContent": issue["guidance"], "title": issue.get("issue")}
