"""
Dependency injection container.

Factory functions for FastAPI dependencies. Boundary clients are
process-wide and cached; services are built per request around the
request's database session and caller identity.

Dependencies: spacecat_api.configs, spacecat_api.application, spacecat_api.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl, AuthInfo
from spacecat_api.application.fix_handlers import FixHandler, FixHandlerType, build_fix_handler_registry
from spacecat_api.application.services.apply_fixes_service import ApplyFixesService
from spacecat_api.application.services.consumer_service import ConsumerService
from spacecat_api.application.services.fix_service import FixService
from spacecat_api.application.services.report_service import ReportService
from spacecat_api.application.services.role_service import RoleService
from spacecat_api.application.services.sandbox_audit_service import SandboxAuditService
from spacecat_api.application.services.scrape_service import ScrapeService
from spacecat_api.application.services.sentiment_service import SentimentService
from spacecat_api.application.services.user_details_service import UserDetailsService
from spacecat_api.boundary.aws.s3_client import S3StorageClient
from spacecat_api.boundary.aws.sqs_client import SQSClient
from spacecat_api.boundary.db import get_async_db
from spacecat_api.boundary.ims.ims_client import ImsClient
from spacecat_api.boundary.slack.slack_client import SlackClient
from spacecat_api.boundary.webhooks.pull_request_client import PullRequestWebhookClient
from spacecat_api.configs import get_settings


class ServiceCache:
    """Container for cached client instances."""

    def __init__(self):
        self._s3_client = None
        self._sqs_client = None
        self._ims_client = None
        self._slack_client = None
        self._webhook_client = None
        self._fix_handlers = None

    @property
    def s3_client(self) -> S3StorageClient:
        """Get cached S3 client."""
        if self._s3_client is None:
            settings = get_settings()
            self._s3_client = S3StorageClient(region=settings.storage.region)
        return self._s3_client

    @property
    def sqs_client(self) -> SQSClient:
        """Get cached SQS client."""
        if self._sqs_client is None:
            settings = get_settings()
            self._sqs_client = SQSClient(region=settings.queues.region)
        return self._sqs_client

    @property
    def ims_client(self) -> ImsClient:
        """Get cached IMS client (holds the service token cache)."""
        if self._ims_client is None:
            self._ims_client = ImsClient(settings=get_settings().ims)
        return self._ims_client

    @property
    def slack_client(self) -> SlackClient:
        """Get cached Slack client."""
        if self._slack_client is None:
            self._slack_client = SlackClient(token=get_settings().slack.bot_token)
        return self._slack_client

    @property
    def webhook_client(self) -> PullRequestWebhookClient:
        """Get cached pull-request webhook client."""
        if self._webhook_client is None:
            self._webhook_client = PullRequestWebhookClient(timeout=get_settings().aso.timeout)
        return self._webhook_client

    @property
    def fix_handlers(self) -> dict[FixHandlerType, FixHandler]:
        """Get the fix handler registry."""
        if self._fix_handlers is None:
            self._fix_handlers = build_fix_handler_registry(
                settings=get_settings(),
                s3_client=self.s3_client,
                ims_client=self.ims_client,
                webhook_client=self.webhook_client,
            )
        return self._fix_handlers

    async def close(self) -> None:
        """Close HTTP clients and clear all cached instances."""
        for client in (self._ims_client, self._slack_client, self._webhook_client):
            if client is not None:
                await client.close()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._s3_client = None
        self._sqs_client = None
        self._ims_client = None
        self._slack_client = None
        self._webhook_client = None
        self._fix_handlers = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def _parse_flag(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


def get_auth_info(
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_is_admin: str | None = Header(default=None),
    x_user_is_s2s_admin: str | None = Header(default=None),
    x_user_tenants: str | None = Header(default=None),
) -> AuthInfo:
    """
    Build the caller identity forwarded by the API gateway.

    Args:
        x_user_email: Caller email
        x_user_name: Caller display name
        x_user_is_admin: "true" for admins
        x_user_is_s2s_admin: "true" for S2S admins
        x_user_tenants: Comma separated IMS org ids

    Returns:
        AuthInfo: Authenticated caller
    """
    tenants = [t.strip() for t in (x_user_tenants or "").split(",") if t.strip()]
    return AuthInfo(
        email=x_user_email,
        name=x_user_name,
        is_admin=_parse_flag(x_user_is_admin),
        is_s2s_admin=_parse_flag(x_user_is_s2s_admin),
        tenants=tenants,
    )


def get_access_control(
    db: AsyncSession = Depends(get_async_db),
    auth_info: AuthInfo = Depends(get_auth_info),
) -> AccessControl:
    """Access predicates bound to the caller and the request session."""
    return AccessControl(auth_info=auth_info, db=db)


def get_fix_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> FixService:
    """
    Get fix service instance.

    Args:
        db: Async database session (injected via Depends)
        access_control: Caller authorization (injected via Depends)

    Returns:
        FixService: Fix service instance
    """
    cache = get_service_cache()
    return FixService(
        db=db,
        access_control=access_control,
        ims_client=cache.ims_client,
        webhook_client=cache.webhook_client,
        aso_settings=get_settings().aso,
    )


def get_apply_fixes_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> ApplyFixesService:
    """Get apply-fixes service with the startup handler registry."""
    return ApplyFixesService(
        db=db,
        access_control=access_control,
        handlers=get_service_cache().fix_handlers,
    )


def get_role_service(
    db: AsyncSession = Depends(get_async_db),
    auth_info: AuthInfo = Depends(get_auth_info),
) -> RoleService:
    return RoleService(db=db, auth_info=auth_info)


def get_report_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> ReportService:
    """
    Get report service instance.

    Returns:
        ReportService: Report service with S3 and SQS clients
    """
    cache = get_service_cache()
    settings = get_settings()
    return ReportService(
        db=db,
        access_control=access_control,
        s3_client=cache.s3_client,
        sqs_client=cache.sqs_client,
        storage_settings=settings.storage,
        queue_settings=settings.queues,
    )


def get_sandbox_audit_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> SandboxAuditService:
    settings = get_settings()
    return SandboxAuditService(
        db=db,
        access_control=access_control,
        sqs_client=get_service_cache().sqs_client,
        queue_settings=settings.queues,
        sandbox_settings=settings.sandbox,
    )


def get_consumer_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> ConsumerService:
    """
    Get consumer service instance.

    Returns:
        ConsumerService: Consumer service posting to the S2S Slack channel
    """
    cache = get_service_cache()
    return ConsumerService(
        db=db,
        access_control=access_control,
        ims_client=cache.ims_client,
        slack_client=cache.slack_client,
        slack_channel_id=get_settings().slack.s2s_channel_id,
    )


def get_sentiment_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> SentimentService:
    return SentimentService(db=db, access_control=access_control)


def get_user_details_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> UserDetailsService:
    return UserDetailsService(
        db=db,
        access_control=access_control,
        ims_client=get_service_cache().ims_client,
    )


def get_scrape_service(
    db: AsyncSession = Depends(get_async_db),
    access_control: AccessControl = Depends(get_access_control),
) -> ScrapeService:
    return ScrapeService(
        db=db,
        access_control=access_control,
        s3_client=get_service_cache().s3_client,
        storage_settings=get_settings().storage,
    )
