"""
Tests for the Slack bot base utilities.

Dependencies: pytest, pytest-asyncio, httpx
System role: Slack helper verification
"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from spacecat_api.utils.slack.base import (
    FALLBACK_SLACK_CHANNEL,
    SLACK_API,
    SlackMessageError,
    extract_url_from_slack_input,
    get_message_from_event,
    get_query_params,
    get_slack_channel_id,
    get_thread_timestamp,
    post_error_message,
    post_site_not_found_message,
    post_slack_message,
    send_message_blocks,
    wrap_say_for_thread,
)


class TestExtractUrl:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("check <https://www.example.com/page|example.com/page>", "https://example.com/page"),
            ("example.com", "https://example.com"),
            ("example.com/", "https://example.com"),
            ("www.example.com/blog/", "https://example.com/blog/"),
            ("http://sub.example.co.uk/path", "https://sub.example.co.uk/path"),
        ],
    )
    def test_normalizes_urls(self, text, expected):
        assert extract_url_from_slack_input(text) == expected

    def test_domain_only(self):
        assert extract_url_from_slack_input("<https://www.example.com/a|x>", domain_only=True) == "example.com"

    def test_without_scheme(self):
        assert extract_url_from_slack_input("example.com/a", include_scheme=False) == "example.com/a"

    def test_text_keyword(self):
        assert extract_url_from_slack_input(text="www.example.com/docs") == "https://example.com/docs"

    def test_no_url(self):
        assert extract_url_from_slack_input("hello there") is None
        assert extract_url_from_slack_input(None) is None


class TestSayHelpers:
    async def test_error_and_not_found_messages(self):
        # Arrange
        say = AsyncMock()

        # Act
        await post_error_message(say, ValueError("bad input"))
        await post_site_not_found_message(say, "https://example.com")

        # Assert
        assert say.await_args_list[0].args[0] == ":nuclear-warning: Oops! Something went wrong: bad input"
        assert say.await_args_list[1].args[0] == ":x: No site found with base URL 'https://example.com'."

    async def test_send_message_blocks(self):
        # Arrange
        say = AsyncMock()
        accessory = {"type": "button", "text": {"type": "plain_text", "text": "Open"}}

        # Act
        await send_message_blocks(
            say,
            [{"text": "first"}, {"text": "second", "accessory": accessory}],
            [{"type": "divider"}],
        )

        # Assert
        blocks = say.await_args.args[0]["blocks"]
        assert blocks[0] == {"type": "section", "text": {"type": "mrkdwn", "text": "first"}}
        assert blocks[1]["accessory"] == accessory
        assert blocks[2] == {"type": "divider"}

    async def test_wrap_say_for_thread(self):
        # Arrange
        say = AsyncMock()
        threaded = wrap_say_for_thread(say, "1700.01")

        # Act
        await threaded("plain")
        await threaded({"blocks": []})

        # Assert
        assert threaded.thread_ts == "1700.01"
        assert say.await_args_list[0].args[0] == {"text": "plain", "thread_ts": "1700.01"}
        assert say.await_args_list[1].args[0] == {"blocks": [], "thread_ts": "1700.01"}


class TestEventHelpers:
    def test_thread_timestamp(self):
        assert get_thread_timestamp({"thread_ts": "1", "ts": "2"}) == "1"
        assert get_thread_timestamp({"ts": "2"}) == "2"

    def test_message_without_mention(self):
        assert get_message_from_event({"text": "<@U123> run audit example.com"}) == "run audit example.com"
        assert get_message_from_event({}) is None


class TestChannels:
    def test_query_params(self):
        # Act
        params = get_query_params("C1", "*hi*")

        # Assert
        assert params["channel"] == "C1"
        assert json.loads(params["blocks"]) == [{"type": "section", "text": {"type": "mrkdwn", "text": "*hi*"}}]

    def test_channel_lookup(self):
        assert get_slack_channel_id("alerts", "ops=C1,alerts=C2") == "C2"
        assert get_slack_channel_id("alerts", "alerts=") == FALLBACK_SLACK_CHANNEL
        assert get_slack_channel_id("alerts") == FALLBACK_SLACK_CHANNEL


class TestPostSlackMessage:
    async def test_posts_with_shared_client(self):
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url).startswith(SLACK_API)
            return httpx.Response(200, json={"ok": True, "channel": "C1", "ts": "1.2"})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        # Act
        result = await post_slack_message("C1", "hello", "xoxb", http_client=client)

        # Assert
        assert result == {"channel": "C1", "ts": "1.2"}

    async def test_blank_token(self):
        with pytest.raises(SlackMessageError, match="Missing slack bot token"):
            await post_slack_message("C1", "hello", "  ")
