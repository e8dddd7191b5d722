"""
Pull-request webhook client.

Posts generated fixes to the external app that opens pull requests
against the customer's repository.

Dependencies: httpx
System role: Outbound webhook adapter for fix application
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class PullRequestWebhookClient:
    """Async client for pull-request handling webhooks."""

    def __init__(self, timeout: float = 30.0, http_client: httpx.AsyncClient | None = None):
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def submit(
        self,
        url: str,
        payload: dict[str, Any],
        ims_org_id: str,
        access_token: str,
    ) -> httpx.Response:
        """
        POST a fix payload.

        The response is returned unchecked so callers can record a
        non-2xx reply as a per-item failure.

        Args:
            url: Webhook URL
            payload: JSON body
            ims_org_id: Organization id sent as x-gw-ims-org-id
            access_token: IMS service token

        Returns:
            httpx.Response: Raw webhook response

        Raises:
            httpx.RequestError: If the webhook cannot be reached
        """
        client = await self._get_client()
        logger.info("Submitting fix to pull-request webhook", extra={"url": url})
        return await client.post(
            url,
            json=payload,
            headers={
                "x-gw-ims-org-id": ims_org_id,
                "Content-Type": "application/json",
                "Authorization": f"Bearer {access_token}",
            },
        )
