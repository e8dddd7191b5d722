"""
Sentiment configuration service.

Topics describe what brand-sentiment analysis should look for (with
optional sub-prompts and the audits that consume them); guidelines are
free-text instructions applied to every analysis of a site.

Dependencies: sqlalchemy
System role: Sentiment topic and guideline management
"""

import logging
import uuid
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.boundary.db.CRUD.sentiment_crud import (
    sentiment_guideline_crud,
    sentiment_topic_crud,
)
from spacecat_api.boundary.db.models.sentiment_model import (
    SentimentGuidelineModel,
    SentimentTopicModel,
)
from spacecat_api.core.exceptions import NotFoundError, ValidationError
from spacecat_api.core.validators import has_text, is_integer, is_non_empty_object, is_valid_uuid
from spacecat_api.models.common import BatchMetadata
from spacecat_api.models.sentiment import SentimentGuidelineDto, SentimentTopicDto

logger = logging.getLogger(__name__)

MAX_ITEMS_PER_REQUEST = 100
DEFAULT_LIMIT = 100
MAX_LIMIT = 500

KNOWN_AUDIT_TYPES = (
    "wikipedia-analysis",
    "reddit-analysis",
    "youtube-analysis",
    "twitter-analysis",
    "accessibility",
    "broken-backlinks",
    "cwv",
    "lhs-mobile",
    "lhs-desktop",
)


def invalid_audit_types(audits: Any) -> list[Any]:
    """Audit types not in KNOWN_AUDIT_TYPES; non-lists yield nothing."""
    if not isinstance(audits, list):
        return []
    return [a for a in audits if a not in KNOWN_AUDIT_TYPES]


def invalid_audits_message(invalid: list[Any]) -> str:
    return (
        f"Invalid audit types: {', '.join(map(str, invalid))}. "
        f"Valid types: {', '.join(KNOWN_AUDIT_TYPES)}"
    )


def parse_limit(limit: Any) -> int:
    """
    Parse the page size, capped at MAX_LIMIT.

    Raises:
        ValidationError: 'Limit must be a positive integer'
    """
    if limit is None:
        return DEFAULT_LIMIT
    if not is_integer(limit) or int(limit) < 1:
        raise ValidationError("Limit must be a positive integer", field="limit")
    return min(int(limit), MAX_LIMIT)


def parse_cursor(cursor: Any) -> int:
    """Cursors are opaque offsets handed out by a previous page."""
    if cursor is None or cursor == "":
        return 0
    if not is_integer(cursor) or int(cursor) < 0:
        raise ValidationError("Invalid cursor", field="cursor")
    return int(cursor)


def paginate(items: Sequence[Any], limit: int, offset: int) -> tuple[list[Any], str | None]:
    """
    Slice one page out of an ordered result.

    Returns:
        tuple: (page items, cursor of the next page or None)
    """
    page = list(items[offset:offset + limit])
    next_offset = offset + limit
    cursor = str(next_offset) if next_offset < len(items) else None
    return page, cursor


def _topic_json(topic: SentimentTopicModel) -> dict[str, Any]:
    return SentimentTopicDto.model_validate(topic).to_json()


def _guideline_json(guideline: SentimentGuidelineModel) -> dict[str, Any]:
    return SentimentGuidelineDto.model_validate(guideline).to_json()


class SentimentService:
    """Topic and guideline operations scoped to a site."""

    def __init__(self, db: AsyncSession, access_control: AccessControl) -> None:
        """
        Initialize sentiment service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization
        """
        self.db = db
        self.access_control = access_control

    @property
    def _user(self) -> str:
        return self.access_control.auth_info.user_identifier

    async def _guard(self, site_id: str, action: str) -> None:
        """Check the caller may perform action on the site."""
        await self.access_control.require_site_access(
            site_id, f"Only users belonging to the organization can {action}"
        )

    async def _load_topic(self, site_id: str, topic_id: str) -> SentimentTopicModel:
        topic = await sentiment_topic_crud.find_for_site(self.db, site_id, topic_id)
        if topic is None:
            raise NotFoundError("Topic not found", entity="topic", entity_id=topic_id)
        return topic

    async def _load_guideline(self, site_id: str, guideline_id: str) -> SentimentGuidelineModel:
        guideline = await sentiment_guideline_crud.find_for_site(self.db, site_id, guideline_id)
        if guideline is None:
            raise NotFoundError("Guideline not found", entity="guideline", entity_id=guideline_id)
        return guideline

    @staticmethod
    def _require_topic_id(topic_id: str) -> None:
        if not has_text(topic_id):
            raise ValidationError("Topic ID required", field="topicId")

    @staticmethod
    def _require_guideline_id(guideline_id: str) -> None:
        if not has_text(guideline_id):
            raise ValidationError("Guideline ID required", field="guidelineId")

    # ── Topics ──

    async def list_topics(
        self,
        site_id: str,
        limit: Any = None,
        cursor: str | None = None,
        audit: str | None = None,
        enabled: Any = None,
    ) -> dict[str, Any]:
        """
        List a site's topics one page at a time.

        Args:
            site_id: Site UUID
            limit: Page size (default 100, capped at 500)
            cursor: Cursor from the previous page
            audit: Only topics linked to this audit type
            enabled: "true" to list enabled topics only

        Returns:
            dict: {items, pagination: {limit, cursor, hasMore}}
        """
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        effective_limit = parse_limit(limit)
        offset = parse_cursor(cursor)
        await self._guard(site_id, "view topics")

        if has_text(audit):
            topics = await sentiment_topic_crud.all_by_site_id_and_audit_type(self.db, site_id, audit)
        else:
            enabled_only = enabled is True or enabled == "true"
            topics = await sentiment_topic_crud.all_by_site_id(self.db, site_id, enabled_only)

        page, next_cursor = paginate(topics, effective_limit, offset)
        return {
            "items": [_topic_json(t) for t in page],
            "pagination": {
                "limit": effective_limit,
                "cursor": next_cursor,
                "hasMore": next_cursor is not None,
            },
        }

    async def get_topic(self, site_id: str, topic_id: str) -> dict[str, Any]:
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        self._require_topic_id(topic_id)
        await self._guard(site_id, "view topics")
        return _topic_json(await self._load_topic(site_id, topic_id))

    async def create_topics(self, site_id: str, payload: Any) -> dict[str, Any]:
        """
        Create topics in bulk.

        Items failing validation are reported in failures; the rest are created.

        Returns:
            dict: {metadata: {total, success, failed}, failures: [{name, reason}], items}
        """
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        if not isinstance(payload, list) or not payload:
            raise ValidationError("Topics array required")
        if len(payload) > MAX_ITEMS_PER_REQUEST:
            raise ValidationError(f"Maximum {MAX_ITEMS_PER_REQUEST} topics per request")
        await self._guard(site_id, "create topics")

        items: list[dict[str, Any]] = []
        failures: list[dict[str, Any]] = []
        for data in payload:
            data = data if isinstance(data, dict) else {}
            name = data.get("name")
            if not has_text(name):
                failures.append({"name": name or "undefined", "reason": "Name is required"})
                continue
            invalid = invalid_audit_types(data.get("audits"))
            if invalid:
                failures.append({"name": name, "reason": invalid_audits_message(invalid)})
                continue

            topic = await sentiment_topic_crud.create(
                self.db,
                site_id=uuid.UUID(site_id),
                name=name,
                description=data.get("description"),
                topic_name=data.get("topicName") or "",
                sub_prompts=data["subPrompts"] if isinstance(data.get("subPrompts"), list) else [],
                audits=data["audits"] if isinstance(data.get("audits"), list) else [],
                enabled=data.get("enabled") is not False,
                created_by=self._user,
                updated_by=self._user,
            )
            items.append(_topic_json(topic))

        logger.info(
            "Created sentiment topics",
            extra={"site_id": site_id, "created_count": len(items), "failed": len(failures)},
        )
        metadata = BatchMetadata(total=len(payload), success=len(items), failed=len(failures))
        return {"metadata": metadata.to_json(), "failures": failures, "items": items}

    async def update_topic(self, site_id: str, topic_id: str, payload: Any) -> dict[str, Any]:
        """
        Update a topic.

        Only non-empty name/topicName, present description, list
        subPrompts/audits and boolean enabled are applied.
        """
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        self._require_topic_id(topic_id)
        if not is_non_empty_object(payload):
            raise ValidationError("Update data required")
        await self._guard(site_id, "update topics")

        invalid = invalid_audit_types(payload.get("audits"))
        if invalid:
            raise ValidationError(invalid_audits_message(invalid), field="audits")

        topic = await self._load_topic(site_id, topic_id)
        if has_text(payload.get("name")):
            topic.name = payload["name"]
        if "description" in payload:
            topic.description = payload["description"]
        if has_text(payload.get("topicName")):
            topic.topic_name = payload["topicName"]
        if isinstance(payload.get("subPrompts"), list):
            topic.sub_prompts = payload["subPrompts"]
        if isinstance(payload.get("audits"), list):
            topic.audits = payload["audits"]
        if isinstance(payload.get("enabled"), bool):
            topic.enabled = payload["enabled"]
        topic.updated_by = self._user

        topic = await sentiment_topic_crud.save(self.db, topic)
        return _topic_json(topic)

    async def delete_topic(self, site_id: str, topic_id: str) -> dict[str, str]:
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        self._require_topic_id(topic_id)
        await self._guard(site_id, "delete topics")

        topic = await self._load_topic(site_id, topic_id)
        await sentiment_topic_crud.remove(self.db, topic)
        logger.info("Deleted sentiment topic", extra={"site_id": site_id, "topic_id": topic_id})
        return {"message": "Topic deleted successfully"}

    async def _modify_topic_list(
        self,
        site_id: str,
        topic_id: str,
        values: Any,
        required_message: str,
        attribute: str,
        add: bool,
    ) -> dict[str, Any]:
        """Add values to, or remove values from, a topic list attribute."""
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        self._require_topic_id(topic_id)
        if not isinstance(values, list) or not values:
            raise ValidationError(required_message)
        if attribute == "audits" and add:
            invalid = invalid_audit_types(values)
            if invalid:
                raise ValidationError(invalid_audits_message(invalid), field="audits")
        await self._guard(site_id, "modify topics")

        topic = await self._load_topic(site_id, topic_id)
        current = list(getattr(topic, attribute) or [])
        if add:
            for value in values:
                if has_text(value) and value not in current:
                    current.append(value)
        else:
            current = [v for v in current if v not in values]
        setattr(topic, attribute, current)
        topic.updated_by = self._user

        topic = await sentiment_topic_crud.save(self.db, topic)
        return _topic_json(topic)

    async def add_sub_prompts(self, site_id: str, topic_id: str, prompts: Any) -> dict[str, Any]:
        return await self._modify_topic_list(
            site_id, topic_id, prompts, "Prompts array required", "sub_prompts", add=True
        )

    async def remove_sub_prompts(self, site_id: str, topic_id: str, prompts: Any) -> dict[str, Any]:
        return await self._modify_topic_list(
            site_id, topic_id, prompts, "Prompts array required", "sub_prompts", add=False
        )

    async def link_audits(self, site_id: str, topic_id: str, audits: Any) -> dict[str, Any]:
        return await self._modify_topic_list(
            site_id, topic_id, audits, "Audits array required", "audits", add=True
        )

    async def unlink_audits(self, site_id: str, topic_id: str, audits: Any) -> dict[str, Any]:
        return await self._modify_topic_list(
            site_id, topic_id, audits, "Audits array required", "audits", add=False
        )

    # ── Guidelines ──

    async def list_guidelines(
        self,
        site_id: str,
        limit: Any = None,
        cursor: str | None = None,
        enabled: Any = None,
    ) -> dict[str, Any]:
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        effective_limit = parse_limit(limit)
        offset = parse_cursor(cursor)
        await self._guard(site_id, "view guidelines")

        enabled_only = enabled is True or enabled == "true"
        guidelines = await sentiment_guideline_crud.all_by_site_id(self.db, site_id, enabled_only)
        page, next_cursor = paginate(guidelines, effective_limit, offset)
        return {
            "items": [_guideline_json(g) for g in page],
            "pagination": {
                "limit": effective_limit,
                "cursor": next_cursor,
                "hasMore": next_cursor is not None,
            },
        }

    async def get_guideline(self, site_id: str, guideline_id: str) -> dict[str, Any]:
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        self._require_guideline_id(guideline_id)
        await self._guard(site_id, "view guidelines")
        return _guideline_json(await self._load_guideline(site_id, guideline_id))

    async def create_guidelines(self, site_id: str, payload: Any) -> dict[str, Any]:
        """
        Create guidelines in bulk.

        Returns:
            dict: {metadata: {total, success, failed}, failures: [{name, reason}], items}
        """
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        if not isinstance(payload, list) or not payload:
            raise ValidationError("Guidelines array required")
        if len(payload) > MAX_ITEMS_PER_REQUEST:
            raise ValidationError(f"Maximum {MAX_ITEMS_PER_REQUEST} guidelines per request")
        await self._guard(site_id, "create guidelines")

        items: list[dict[str, Any]] = []
        failures: list[dict[str, Any]] = []
        for data in payload:
            data = data if isinstance(data, dict) else {}
            name = data.get("name")
            if not has_text(name):
                failures.append({"name": name or "undefined", "reason": "Name is required"})
                continue
            if not has_text(data.get("instruction")):
                failures.append({"name": name, "reason": "Instruction is required"})
                continue

            guideline = await sentiment_guideline_crud.create(
                self.db,
                site_id=uuid.UUID(site_id),
                name=name,
                instruction=data["instruction"],
                enabled=data.get("enabled") is not False,
                created_by=self._user,
                updated_by=self._user,
            )
            items.append(_guideline_json(guideline))

        metadata = BatchMetadata(total=len(payload), success=len(items), failed=len(failures))
        return {"metadata": metadata.to_json(), "failures": failures, "items": items}

    async def update_guideline(
        self, site_id: str, guideline_id: str, payload: Any
    ) -> dict[str, Any]:
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        self._require_guideline_id(guideline_id)
        if not is_non_empty_object(payload):
            raise ValidationError("Update data required")
        await self._guard(site_id, "update guidelines")

        guideline = await self._load_guideline(site_id, guideline_id)
        if has_text(payload.get("name")):
            guideline.name = payload["name"]
        if has_text(payload.get("instruction")):
            guideline.instruction = payload["instruction"]
        if isinstance(payload.get("enabled"), bool):
            guideline.enabled = payload["enabled"]
        guideline.updated_by = self._user

        guideline = await sentiment_guideline_crud.save(self.db, guideline)
        return _guideline_json(guideline)

    async def delete_guideline(self, site_id: str, guideline_id: str) -> dict[str, str]:
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        self._require_guideline_id(guideline_id)
        await self._guard(site_id, "delete guidelines")

        guideline = await self._load_guideline(site_id, guideline_id)
        await sentiment_guideline_crud.remove(self.db, guideline)
        return {"message": "Guideline deleted successfully"}

    # ── Config ──

    async def get_config(self, site_id: str, audit: str | None = None) -> dict[str, Any]:
        """
        Topics and guidelines an analysis run should use.

        Args:
            site_id: Site UUID
            audit: Restrict topics to those linked to this audit type;
                without it only enabled topics are returned

        Returns:
            dict: {topics, guidelines}
        """
        if not is_valid_uuid(site_id):
            raise ValidationError("Site ID required", field="siteId")
        await self._guard(site_id, "view config")

        if has_text(audit):
            topics = await sentiment_topic_crud.all_by_site_id_and_audit_type(self.db, site_id, audit)
        else:
            topics = await sentiment_topic_crud.all_by_site_id(self.db, site_id, enabled_only=True)
        guidelines = await sentiment_guideline_crud.all_by_site_id(self.db, site_id, enabled_only=True)
        return {
            "topics": [_topic_json(t) for t in topics],
            "guidelines": [_guideline_json(g) for g in guidelines],
        }
