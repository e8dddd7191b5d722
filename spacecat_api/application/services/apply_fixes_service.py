"""
Apply-fixes service.

Validates an apply-fixes request and dispatches it to the handler
registered for the requested fix type.

Dependencies: sqlalchemy, spacecat_api.application.fix_handlers
System role: Entry point of POST .../opportunities/{id}/apply-fixes
"""

import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.application.fix_handlers.base import FixHandler, FixHandlerType
from spacecat_api.application.services.fix_service import FIX_ACCESS_DENIED, validate_fix_path
from spacecat_api.boundary.db.CRUD.opportunity_crud import opportunity_crud
from spacecat_api.core.exceptions import NotFoundError, SpacecatApiError, ValidationError
from spacecat_api.core.validators import has_text, is_non_empty_array, is_valid_uuid

logger = logging.getLogger(__name__)


class ApplyFixesService:
    """Dispatches apply-fixes requests to per-type handlers."""

    def __init__(
        self,
        db: AsyncSession,
        access_control: AccessControl,
        handlers: Mapping[FixHandlerType, FixHandler],
    ) -> None:
        """
        Initialize apply-fixes service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization
            handlers: Registry built at startup
        """
        self.db = db
        self.access_control = access_control
        self.handlers = handlers

    def _resolve_handler(self, fix_type: str) -> FixHandler:
        try:
            handler = self.handlers.get(FixHandlerType(fix_type))
        except ValueError:
            handler = None
        if handler is None:
            supported = ", ".join(t.value for t in self.handlers)
            raise ValidationError(
                f"Unsupported fix type: {fix_type}. Supported types: {supported}",
                field="type",
            )
        return handler

    async def apply_fixes(
        self, site_id: str, opportunity_id: str, payload: Any
    ) -> dict[str, Any]:
        """
        Apply fixes of one type for a list of suggestions.

        Args:
            site_id: Site UUID
            opportunity_id: Opportunity UUID
            payload: {type, suggestionIds}

        Returns:
            dict: Handler result {fixes, metadata}

        Raises:
            ValidationError: Malformed request or unsupported type
            NotFoundError: Unknown site or opportunity
            AccessDeniedError: Caller outside the site's organization
        """
        validate_fix_path(site_id, opportunity_id)
        if not payload or not isinstance(payload, dict):
            raise ValidationError("Request body is required")

        fix_type = payload.get("type")
        suggestion_ids = payload.get("suggestionIds")
        if not has_text(fix_type):
            raise ValidationError("type field is required", field="type")
        if not is_non_empty_array(suggestion_ids):
            raise ValidationError(
                "suggestionIds array is required and must not be empty",
                field="suggestionIds",
            )
        handler = self._resolve_handler(fix_type)
        for suggestion_id in suggestion_ids:
            if not is_valid_uuid(suggestion_id):
                raise ValidationError(
                    f"Invalid suggestion ID format: {suggestion_id}", field="suggestionIds"
                )

        site = await self.access_control.require_site_access(site_id, FIX_ACCESS_DENIED)
        opportunity = await opportunity_crud.get_by_id(self.db, opportunity_id)
        if opportunity is None or str(opportunity.site_id) != site_id:
            raise NotFoundError("Opportunity not found", entity="opportunity", entity_id=opportunity_id)

        logger.info(
            f"Applying {fix_type} fixes",
            extra={"site_id": site_id, "opportunity_id": opportunity_id, "count": len(suggestion_ids)},
        )
        try:
            return await handler.apply(self.db, site, opportunity, suggestion_ids)
        except SpacecatApiError:
            raise
        except Exception as e:
            logger.exception(f"Error applying {fix_type} fixes")
            raise SpacecatApiError(f"Failed to apply {fix_type} fixes") from e
