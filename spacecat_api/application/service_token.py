"""
Service token acquisition for outbound webhook calls.

Dependencies: spacecat_api.boundary.ims
System role: Shared IMS token step of the fix application flows
"""

import logging

from spacecat_api.boundary.ims.ims_client import ImsClient, ImsError
from spacecat_api.core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


async def fetch_service_access_token(ims_client: ImsClient) -> str:
    """
    Get the bearer token sent to pull-request webhooks.

    Args:
        ims_client: IMS client holding the service credentials

    Returns:
        str: Access token

    Raises:
        UpstreamServiceError: 'Authentication failed' when IMS credentials
            are missing or the token request fails
    """
    if not ims_client.settings.is_configured:
        logger.error("IMS client credentials not found in environment")
        raise UpstreamServiceError("Authentication failed", service="ims")

    try:
        token = await ims_client.get_service_access_token()
    except ImsError as e:
        logger.error(f"Error obtaining IMS service token: {e}")
        raise UpstreamServiceError("Authentication failed", service="ims") from e
    return token["access_token"]
