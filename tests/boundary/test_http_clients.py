"""
Tests for the IMS, Slack and pull-request webhook HTTP clients.

Requests are answered by httpx.MockTransport handlers.

Dependencies: pytest, pytest-asyncio, httpx
System role: Outbound HTTP adapter verification
"""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from spacecat_api.boundary.ims.ims_client import ImsClient, ImsError
from spacecat_api.boundary.slack.slack_client import SlackClient
from spacecat_api.boundary.webhooks.pull_request_client import PullRequestWebhookClient
from spacecat_api.configs.ims import ImsSettings
from spacecat_api.utils.slack.base import SlackMessageError

IMS_SETTINGS = ImsSettings(host="ims.example.com", client_id="cid", client_code="code", client_secret="secret")


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestImsClient:
    async def test_service_token_is_cached(self):
        # Arrange
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 86_400_000, "token_type": "bearer"})

        client = ImsClient(settings=IMS_SETTINGS, http_client=mock_client(handler))

        # Act
        first = await client.get_service_access_token()
        second = await client.get_service_access_token()

        # Assert
        assert first["access_token"] == "tok"
        assert second is first
        assert len(calls) == 1
        assert str(calls[0].url) == "https://ims.example.com/ims/token/v4"
        form = parse_qs(calls[0].content.decode())
        assert form["grant_type"] == ["authorization_code"]
        assert form["code"] == ["code"]

    async def test_service_token_failure(self):
        # Arrange
        client = ImsClient(
            settings=IMS_SETTINGS,
            http_client=mock_client(lambda request: httpx.Response(401)),
        )

        # Act / Assert
        with pytest.raises(ImsError, match="failed with status: 401") as exc_info:
            await client.get_service_access_token()
        assert exc_info.value.status_code == 401

    async def test_not_configured(self):
        # Arrange
        client = ImsClient(settings=ImsSettings(host="", client_id="", client_secret=""))

        # Act / Assert
        with pytest.raises(ImsError, match="not configured"):
            await client.get_service_access_token()

    async def test_validate_access_token(self):
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/ims/validate_token/v1"
            form = parse_qs(request.content.decode())
            assert form["token"] == ["ta-token"]
            assert form["type"] == ["access_token"]
            return httpx.Response(200, json={"valid": True, "token": {"client_id": "c"}})

        client = ImsClient(settings=IMS_SETTINGS, http_client=mock_client(handler))

        # Act
        result = await client.validate_access_token("ta-token")

        # Assert
        assert result["token"] == {"client_id": "c"}

    async def test_invalid_access_token(self):
        # Arrange
        client = ImsClient(
            settings=IMS_SETTINGS,
            http_client=mock_client(lambda request: httpx.Response(200, json={"valid": False})),
        )

        # Act / Assert
        with pytest.raises(ImsError, match="invalid"):
            await client.validate_access_token("ta-token")

    async def test_admin_profile_uses_service_token(self):
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/ims/token/v4":
                return httpx.Response(200, json={"access_token": "svc", "expires_in": 60_000_000})
            assert request.url.path == "/ims/admin_profile/v1"
            assert request.headers["Authorization"] == "Bearer svc"
            assert request.url.params["guid"] == "user-1"
            return httpx.Response(200, json={"first_name": "Ada", "email": "ada@example.com"})

        client = ImsClient(settings=IMS_SETTINGS, http_client=mock_client(handler))

        # Act
        profile = await client.get_ims_admin_profile("user-1")

        # Assert
        assert profile["first_name"] == "Ada"


class TestSlackClient:
    async def test_post_message(self):
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "Bearer xoxb-token"
            assert request.url.params["channel"] == "C123"
            blocks = json.loads(request.url.params["blocks"])
            assert blocks[0]["text"]["text"] == "hello"
            return httpx.Response(200, json={"ok": True, "channel": "C123", "ts": "1700000000.000100"})

        client = SlackClient(token="xoxb-token", http_client=mock_client(handler))

        # Act
        result = await client.post_message("C123", "hello")

        # Assert
        assert result == {"channel": "C123", "ts": "1700000000.000100"}

    async def test_not_acknowledged(self):
        # Arrange
        client = SlackClient(
            token="xoxb-token",
            http_client=mock_client(lambda request: httpx.Response(200, json={"ok": False, "error": "channel_not_found"})),
        )

        # Act / Assert
        with pytest.raises(SlackMessageError, match="Error: channel_not_found"):
            await client.post_message("C404", "hello")

    async def test_http_failure(self):
        # Arrange
        client = SlackClient(token="xoxb-token", http_client=mock_client(lambda request: httpx.Response(500)))

        # Act / Assert
        with pytest.raises(SlackMessageError, match="Status: 500"):
            await client.post_message("C123", "hello")

    async def test_missing_token(self):
        # Arrange
        client = SlackClient(token="", http_client=mock_client(lambda request: httpx.Response(200)))

        # Act / Assert
        with pytest.raises(SlackMessageError, match="Missing slack bot token"):
            await client.post_message("C123", "hello")


class TestPullRequestWebhookClient:
    async def test_submit_sends_headers_and_body(self):
        # Arrange
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(202, json={"pullRequest": "https://github.com/o/r/pull/3"})

        client = PullRequestWebhookClient(http_client=mock_client(handler))

        # Act
        response = await client.submit(
            "https://aso.example.com/pr", {"title": "Fix"}, "ORG@AdobeOrg", "svc-token"
        )

        # Assert
        assert response.status_code == 202
        request = captured["request"]
        assert request.method == "POST"
        assert request.headers["x-gw-ims-org-id"] == "ORG@AdobeOrg"
        assert request.headers["Authorization"] == "Bearer svc-token"
        assert json.loads(request.content) == {"title": "Fix"}

    async def test_error_status_is_returned(self):
        # Arrange
        client = PullRequestWebhookClient(http_client=mock_client(lambda request: httpx.Response(503)))

        # Act
        response = await client.submit("https://aso.example.com/pr", {}, "ORG", "tok")

        # Assert
        assert response.status_code == 503
