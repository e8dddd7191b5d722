"""
Fix handler registry.

Dependencies: spacecat_api.boundary
System role: Maps FixHandlerType to a handler built once at startup
"""

from spacecat_api.application.fix_handlers.accessibility_handler import AccessibilityFixHandler
from spacecat_api.application.fix_handlers.base import FixHandler, FixHandlerType
from spacecat_api.boundary.aws.s3_client import S3StorageClient
from spacecat_api.boundary.ims.ims_client import ImsClient
from spacecat_api.boundary.webhooks.pull_request_client import PullRequestWebhookClient
from spacecat_api.configs.settings import Settings


def build_fix_handler_registry(
    settings: Settings,
    s3_client: S3StorageClient,
    ims_client: ImsClient,
    webhook_client: PullRequestWebhookClient,
) -> dict[FixHandlerType, FixHandler]:
    """
    Build one handler instance per supported fix type.

    Args:
        settings: Application settings
        s3_client: Storage client for generated fix assets
        ims_client: IMS client for webhook tokens
        webhook_client: Pull-request webhook client

    Returns:
        dict: FixHandlerType -> handler
    """
    return {
        FixHandlerType.ACCESSIBILITY: AccessibilityFixHandler(
            s3_client=s3_client,
            ims_client=ims_client,
            webhook_client=webhook_client,
            assets_bucket=settings.storage.mystique_assets_bucket,
            pull_request_handler_url=settings.aso.pull_request_handler_url,
        ),
    }
