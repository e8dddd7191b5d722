"""
Slack notification client.

Dependencies: httpx
System role: Best-effort chat notifications
"""

import logging
from typing import Optional

import httpx

from spacecat_api.utils.slack.base import post_slack_message

logger = logging.getLogger(__name__)


class SlackClient:
    """Async client posting messages to channels with the bot token."""

    def __init__(self, token: str, http_client: httpx.AsyncClient | None = None):
        self.token = token
        self._client: Optional[httpx.AsyncClient] = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=10.0)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def post_message(self, channel: str, text: str) -> dict:
        """
        Post a message to a channel.

        Raises:
            SlackMessageError: If the token is missing or Slack rejects the message
        """
        client = await self._get_client()
        result = await post_slack_message(channel, text, self.token, http_client=client)
        logger.info("Posted slack message", extra={"channel": channel, "ts": result["ts"]})
        return result
