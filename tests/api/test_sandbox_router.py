"""
Tests for the sandbox audit endpoint.

Dependencies: pytest, fastapi
System role: Sandbox audit HTTP API verification
"""

from unittest.mock import AsyncMock

import pytest

from spacecat_api.api.deps.dependencies import get_sandbox_audit_service
from spacecat_api.core.exceptions import RateLimitExceededError, ValidationError


@pytest.fixture
def mock_sandbox_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_sandbox_audit_service] = lambda: service
    return service


def test_trigger_reads_query_aliases(client, mock_sandbox_service):
    mock_sandbox_service.trigger_audits.return_value = {"message": "Triggered 1 audit"}

    response = client.post(
        "/api/v1/sandbox/audit",
        params={"baseURL": "https://sandbox.example.com", "auditType": "meta-tags"},
    )

    assert response.status_code == 200
    mock_sandbox_service.trigger_audits.assert_awaited_once_with("https://sandbox.example.com", "meta-tags")


def test_missing_base_url(client, mock_sandbox_service):
    mock_sandbox_service.trigger_audits.side_effect = ValidationError("baseURL query parameter is required")

    response = client.post("/api/v1/sandbox/audit")

    assert response.status_code == 400
    mock_sandbox_service.trigger_audits.assert_awaited_once_with(None, None)


def test_rate_limited(client, mock_sandbox_service):
    mock_sandbox_service.trigger_audits.side_effect = RateLimitExceededError(
        "Audit meta-tags was run recently", minutes_remaining=40
    )

    response = client.post("/api/v1/sandbox/audit", params={"baseURL": "https://sandbox.example.com"})

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "2400"
    assert response.json()["detail"] == {
        "message": "Audit meta-tags was run recently",
        "minutesRemaining": 40,
    }
