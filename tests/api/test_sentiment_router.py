from unittest.mock import AsyncMock

import pytest

from spacecat_api.api.deps.dependencies import get_sentiment_service
from spacecat_api.core.exceptions import NotFoundError

SITE_ID = "123e4567-e89b-12d3-a456-426614174000"
BASE = f"/api/v1/sites/{SITE_ID}/sentiment"


@pytest.fixture
def mock_sentiment_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_sentiment_service] = lambda: service
    return service


def test_list_topics_passes_query(client, mock_sentiment_service):
    mock_sentiment_service.list_topics.return_value = {
        "items": [],
        "pagination": {"limit": 10, "cursor": None, "hasMore": False},
    }

    response = client.get(f"{BASE}/topics", params={"limit": "10", "audit": "wikipedia", "enabled": "true"})

    assert response.status_code == 200
    mock_sentiment_service.list_topics.assert_awaited_once_with(SITE_ID, "10", None, "wikipedia", "true")


def test_create_topics(client, mock_sentiment_service):
    mock_sentiment_service.create_topics.return_value = {
        "items": [{"topicId": "t-1"}],
        "failures": [],
        "metadata": {"total": 1, "success": 1, "failed": 0},
    }

    response = client.post(f"{BASE}/topics", json=[{"name": "Pricing"}])

    assert response.status_code == 201
    assert response.json()["metadata"]["success"] == 1


def test_prompt_and_audit_bodies_are_unwrapped(client, mock_sentiment_service):
    mock_sentiment_service.add_sub_prompts.return_value = {"topicId": "t-1"}
    mock_sentiment_service.remove_sub_prompts.return_value = {"topicId": "t-1"}
    mock_sentiment_service.link_audits.return_value = {"topicId": "t-1"}
    mock_sentiment_service.unlink_audits.return_value = {"topicId": "t-1"}

    client.post(f"{BASE}/topics/t-1/prompts", json={"prompts": ["a"]})
    client.post(f"{BASE}/topics/t-1/prompts/remove", json={"prompts": ["a"]})
    client.post(f"{BASE}/topics/t-1/audits", json={"audits": ["wikipedia"]})
    client.request("DELETE", f"{BASE}/topics/t-1/audits", json={"audits": ["wikipedia"]})

    mock_sentiment_service.add_sub_prompts.assert_awaited_once_with(SITE_ID, "t-1", ["a"])
    mock_sentiment_service.remove_sub_prompts.assert_awaited_once_with(SITE_ID, "t-1", ["a"])
    mock_sentiment_service.link_audits.assert_awaited_once_with(SITE_ID, "t-1", ["wikipedia"])
    mock_sentiment_service.unlink_audits.assert_awaited_once_with(SITE_ID, "t-1", ["wikipedia"])


def test_non_object_body_gives_none(client, mock_sentiment_service):
    mock_sentiment_service.add_sub_prompts.return_value = {"topicId": "t-1"}

    client.post(f"{BASE}/topics/t-1/prompts", json=["a"])

    mock_sentiment_service.add_sub_prompts.assert_awaited_once_with(SITE_ID, "t-1", None)


def test_guideline_not_found(client, mock_sentiment_service):
    mock_sentiment_service.get_guideline.side_effect = NotFoundError("Guideline not found")

    response = client.get(f"{BASE}/guidelines/g-1")

    assert response.status_code == 404


def test_config(client, mock_sentiment_service):
    mock_sentiment_service.get_config.return_value = {"topics": [], "guidelines": []}

    response = client.get(f"{BASE}/config", params={"audit": "wikipedia"})

    assert response.status_code == 200
    mock_sentiment_service.get_config.assert_awaited_once_with(SITE_ID, "wikipedia")
