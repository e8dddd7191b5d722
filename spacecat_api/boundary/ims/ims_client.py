"""
IMS (identity management service) client.

Obtains service access tokens for outbound webhook calls, validates
technical-account tokens presented by API consumers, and reads admin
profiles for user-detail lookups.

Dependencies: httpx
System role: Identity/token service adapter
"""

import logging
import time
from typing import Any, Optional

import httpx

from spacecat_api.configs.ims import ImsSettings

logger = logging.getLogger(__name__)

IMS_TOKEN_ENDPOINT = "/ims/token/v4"
IMS_VALIDATE_TOKEN_ENDPOINT = "/ims/validate_token/v1"
IMS_ADMIN_PROFILE_ENDPOINT = "/ims/admin_profile/v1"

# Refresh slightly before IMS expiry
TOKEN_EXPIRY_MARGIN_SECONDS = 60


class ImsError(Exception):
    """Raised when IMS is unreachable, misconfigured or rejects a request."""

    def __init__(self, message: str, status_code: int = 0):
        self.status_code = status_code
        super().__init__(message)


class ImsClient:
    """Async HTTP client for IMS."""

    def __init__(
        self,
        settings: ImsSettings,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings
        self._client: Optional[httpx.AsyncClient] = http_client
        self._service_token: dict[str, Any] | None = None
        self._service_token_expires_at = 0.0

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.settings.timeout)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    def _url(self, endpoint: str) -> str:
        return f"https://{self.settings.host}{endpoint}"

    def _ensure_configured(self) -> None:
        if not self.settings.is_configured:
            raise ImsError("IMS client is not configured")

    async def get_service_access_token(self) -> dict[str, Any]:
        """
        Get a service access token, reusing the cached one until it expires.

        Returns:
            dict: {"access_token", "expires_in", "token_type"}

        Raises:
            ImsError: If IMS is not configured or the token request fails
        """
        self._ensure_configured()
        if self._service_token and time.monotonic() < self._service_token_expires_at:
            return self._service_token

        client = await self._get_client()
        try:
            resp = await client.post(
                self._url(IMS_TOKEN_ENDPOINT),
                data={
                    "client_id": self.settings.client_id,
                    "client_secret": self.settings.client_secret,
                    "code": self.settings.client_code,
                    "grant_type": "authorization_code",
                },
            )
        except httpx.RequestError as e:
            raise ImsError(f"IMS getServiceAccessToken request failed: {e}") from e

        if resp.status_code != 200:
            raise ImsError(
                f"IMS getServiceAccessToken request failed with status: {resp.status_code}",
                resp.status_code,
            )

        body = resp.json()
        token = {
            "access_token": body.get("access_token"),
            "expires_in": body.get("expires_in"),
            "token_type": body.get("token_type"),
        }
        if not token["access_token"]:
            raise ImsError("IMS token response does not contain an access token")

        # IMS reports expires_in in milliseconds
        expires_in_seconds = (token["expires_in"] or 0) / 1000
        self._service_token = token
        self._service_token_expires_at = (
            time.monotonic() + max(expires_in_seconds - TOKEN_EXPIRY_MARGIN_SECONDS, 0)
        )
        logger.info("Obtained IMS service access token")
        return token

    async def validate_access_token(self, access_token: str) -> dict[str, Any]:
        """
        Validate an access token issued to someone else.

        Args:
            access_token: Bearer token to validate

        Returns:
            dict: IMS validation result, {"valid": True, "token": {...claims}}

        Raises:
            ImsError: If the request fails or IMS reports the token invalid
        """
        self._ensure_configured()
        client = await self._get_client()
        try:
            resp = await client.post(
                self._url(IMS_VALIDATE_TOKEN_ENDPOINT),
                data={
                    "client_id": self.settings.client_id,
                    "type": "access_token",
                    "token": access_token,
                },
            )
        except httpx.RequestError as e:
            raise ImsError(f"IMS validateAccessToken request failed: {e}") from e

        if resp.status_code != 200:
            raise ImsError(
                f"IMS validateAccessToken request failed with status: {resp.status_code}",
                resp.status_code,
            )

        body = resp.json()
        if not body.get("valid"):
            raise ImsError("IMS reported the access token as invalid")
        return body

    async def get_ims_admin_profile(self, user_id: str) -> dict[str, Any]:
        """
        Read a user's profile with the service's admin credentials.

        Args:
            user_id: IMS user id (external user id)

        Returns:
            dict: Profile fields (first_name, last_name, email, ...)

        Raises:
            ImsError: If the token or profile request fails
        """
        token = await self.get_service_access_token()
        client = await self._get_client()
        try:
            resp = await client.get(
                self._url(IMS_ADMIN_PROFILE_ENDPOINT),
                params={"client_id": self.settings.client_id, "guid": user_id},
                headers={"Authorization": f"Bearer {token['access_token']}"},
            )
        except httpx.RequestError as e:
            raise ImsError(f"IMS getImsAdminProfile request failed: {e}") from e

        if resp.status_code != 200:
            raise ImsError(
                f"IMS getImsAdminProfile request failed with status: {resp.status_code}",
                resp.status_code,
            )
        return resp.json()
