"""
Sentiment analysis configuration API endpoints.

Routes (all below /sites/{site_id}/sentiment):
- GET /topics - List topics (limit, cursor, audit, enabled)
- GET /topics/{topic_id} - Get single topic
- POST /topics - Create topics in bulk
- PATCH /topics/{topic_id} - Update topic
- DELETE /topics/{topic_id} - Delete topic
- POST /topics/{topic_id}/prompts - Add sub-prompts
- POST /topics/{topic_id}/prompts/remove - Remove sub-prompts
- POST /topics/{topic_id}/audits - Link audit types
- DELETE /topics/{topic_id}/audits - Unlink audit types
- GET /guidelines - List guidelines (limit, cursor, enabled)
- GET /guidelines/{guideline_id} - Get single guideline
- POST /guidelines - Create guidelines in bulk
- PATCH /guidelines/{guideline_id} - Update guideline
- DELETE /guidelines/{guideline_id} - Delete guideline
- GET /config - Topics and guidelines for an analysis run

Dependencies: spacecat_api.application.services
System role: Sentiment topics and guidelines HTTP API
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from spacecat_api.api.deps.dependencies import get_sentiment_service
from spacecat_api.application.services.sentiment_service import SentimentService

from .router_utils import handle_api_errors

router = APIRouter(prefix="/sites/{site_id}/sentiment", tags=["sentiment"])


def _body_list(payload: Any, key: str) -> Any:
    return payload.get(key) if isinstance(payload, dict) else None


# ── Topics ──


@router.get("/topics")
@handle_api_errors("Failed to list topics")
async def list_topics(
    site_id: str,
    limit: str | None = Query(default=None),
    cursor: str | None = Query(default=None),
    audit: str | None = Query(default=None),
    enabled: str | None = Query(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    """
    List a site's topics.

    Args:
        site_id: Site UUID
        limit: Page size (default 100, max 500)
        cursor: Cursor from the previous page
        audit: Only topics linked to this audit type
        enabled: "true" for enabled topics only
        sentiment_service: Injected SentimentService

    Returns:
        dict: {items, pagination: {limit, cursor, hasMore}}
    """
    return await sentiment_service.list_topics(site_id, limit, cursor, audit, enabled)


@router.get("/topics/{topic_id}")
@handle_api_errors("Failed to get topic")
async def get_topic(
    site_id: str,
    topic_id: str,
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.get_topic(site_id, topic_id)


@router.post("/topics", status_code=status.HTTP_201_CREATED)
@handle_api_errors("Failed to create topics")
async def create_topics(
    site_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    """
    Create topics in bulk.

    Returns:
        dict: {metadata: {total, success, failed}, failures, items}
    """
    return await sentiment_service.create_topics(site_id, payload)


@router.patch("/topics/{topic_id}")
@handle_api_errors("Failed to update topic")
async def update_topic(
    site_id: str,
    topic_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.update_topic(site_id, topic_id, payload)


@router.delete("/topics/{topic_id}")
@handle_api_errors("Failed to delete topic")
async def delete_topic(
    site_id: str,
    topic_id: str,
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.delete_topic(site_id, topic_id)


@router.post("/topics/{topic_id}/prompts")
@handle_api_errors("Failed to add sub-prompts")
async def add_sub_prompts(
    site_id: str,
    topic_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.add_sub_prompts(site_id, topic_id, _body_list(payload, "prompts"))


@router.post("/topics/{topic_id}/prompts/remove")
@handle_api_errors("Failed to remove sub-prompts")
async def remove_sub_prompts(
    site_id: str,
    topic_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.remove_sub_prompts(site_id, topic_id, _body_list(payload, "prompts"))


@router.post("/topics/{topic_id}/audits")
@handle_api_errors("Failed to link audits")
async def link_audits(
    site_id: str,
    topic_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.link_audits(site_id, topic_id, _body_list(payload, "audits"))


@router.delete("/topics/{topic_id}/audits")
@handle_api_errors("Failed to unlink audits")
async def unlink_audits(
    site_id: str,
    topic_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.unlink_audits(site_id, topic_id, _body_list(payload, "audits"))


# ── Guidelines ──


@router.get("/guidelines")
@handle_api_errors("Failed to list guidelines")
async def list_guidelines(
    site_id: str,
    limit: str | None = Query(default=None),
    cursor: str | None = Query(default=None),
    enabled: str | None = Query(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.list_guidelines(site_id, limit, cursor, enabled)


@router.get("/guidelines/{guideline_id}")
@handle_api_errors("Failed to get guideline")
async def get_guideline(
    site_id: str,
    guideline_id: str,
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.get_guideline(site_id, guideline_id)


@router.post("/guidelines", status_code=status.HTTP_201_CREATED)
@handle_api_errors("Failed to create guidelines")
async def create_guidelines(
    site_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.create_guidelines(site_id, payload)


@router.patch("/guidelines/{guideline_id}")
@handle_api_errors("Failed to update guideline")
async def update_guideline(
    site_id: str,
    guideline_id: str,
    payload: Any = Body(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.update_guideline(site_id, guideline_id, payload)


@router.delete("/guidelines/{guideline_id}")
@handle_api_errors("Failed to delete guideline")
async def delete_guideline(
    site_id: str,
    guideline_id: str,
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    return await sentiment_service.delete_guideline(site_id, guideline_id)


# ── Config ──


@router.get("/config")
@handle_api_errors("Failed to get sentiment config")
async def get_config(
    site_id: str,
    audit: str | None = Query(default=None),
    sentiment_service: SentimentService = Depends(get_sentiment_service),
) -> dict[str, Any]:
    """Topics and guidelines an analysis run should use."""
    return await sentiment_service.get_config(site_id, audit)
