"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database, seeded organization/site/opportunity rows,
caller identities and boundary client mocks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from spacecat_api.application.access_control import AccessControl, AuthInfo
from spacecat_api.boundary.aws.s3_client import S3StorageClient
from spacecat_api.boundary.aws.sqs_client import SQSClient
from spacecat_api.boundary.ims.ims_client import ImsClient
from spacecat_api.boundary.webhooks.pull_request_client import PullRequestWebhookClient
from spacecat_api.configs.ims import ImsSettings

IMS_ORG_ID = "1234567890ABCDEF@AdobeOrg"


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool

    import spacecat_api.boundary.db.models  # noqa: F401  registers every table
    from spacecat_api.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def organization(test_async_db):
    """Organization whose IMS org id the default caller belongs to."""
    from spacecat_api.boundary.db.CRUD import organization_crud

    return await organization_crud.create(test_async_db, name="Test Org", ims_org_id=IMS_ORG_ID)


@pytest.fixture
async def site(test_async_db, organization):
    """Site owned by the test organization, with a GitHub repository."""
    from spacecat_api.boundary.db.CRUD import site_crud

    return await site_crud.create(
        test_async_db,
        base_url="https://example.com",
        organization_id=organization.id,
        github_url="https://github.com/example/site",
    )


@pytest.fixture
async def opportunity(test_async_db, site):
    """Opportunity belonging to the test site."""
    from spacecat_api.boundary.db.CRUD import opportunity_crud

    return await opportunity_crud.create(
        test_async_db,
        site_id=site.id,
        type="a11y-assistive",
        title="Accessibility issues",
        data={},
    )


@pytest.fixture
def member_auth() -> AuthInfo:
    """Caller belonging to the test organization."""
    return AuthInfo(email="member@example.com", name="Member", tenants=[IMS_ORG_ID])


@pytest.fixture
def outsider_auth() -> AuthInfo:
    """Caller belonging to another organization."""
    return AuthInfo(email="outsider@example.com", tenants=["OTHER@AdobeOrg"])


@pytest.fixture
def admin_auth() -> AuthInfo:
    """Admin and S2S admin caller."""
    return AuthInfo(email="admin@example.com", is_admin=True, is_s2s_admin=True)


@pytest.fixture
def member_access(test_async_db, member_auth) -> AccessControl:
    return AccessControl(auth_info=member_auth, db=test_async_db)


@pytest.fixture
def outsider_access(test_async_db, outsider_auth) -> AccessControl:
    return AccessControl(auth_info=outsider_auth, db=test_async_db)


@pytest.fixture
def admin_access(test_async_db, admin_auth) -> AccessControl:
    return AccessControl(auth_info=admin_auth, db=test_async_db)


@pytest.fixture
def mock_ims_client():
    """
    Create mock ImsClient with configured credentials.

    Returns:
        AsyncMock: ImsClient whose service token is "service-token"
    """
    client = AsyncMock(spec=ImsClient)
    client.settings = ImsSettings(host="ims.example.com", client_id="cid", client_secret="secret")
    client.get_service_access_token = AsyncMock(
        return_value={"access_token": "service-token", "expires_in": 86400000, "token_type": "bearer"}
    )
    return client


@pytest.fixture
def mock_webhook_client():
    """
    Create mock PullRequestWebhookClient answering 200 with a PR URL.

    Returns:
        AsyncMock: Webhook client mock
    """
    client = AsyncMock(spec=PullRequestWebhookClient)
    client.submit = AsyncMock(
        return_value=httpx.Response(
            200,
            json={"pullRequest": "https://github.com/example/site/pull/1", "prUrl": "https://github.com/example/site/pull/1"},
            request=httpx.Request("POST", "https://webhook.example.com"),
        )
    )
    return client


@pytest.fixture
def mock_s3_client():
    """Create mock S3StorageClient (sync methods, called via to_thread)."""
    return MagicMock(spec=S3StorageClient)


@pytest.fixture
def mock_sqs_client():
    """Create mock SQSClient returning a message id."""
    client = MagicMock(spec=SQSClient)
    client.send_message.return_value = "message-id"
    return client


@pytest.fixture
def random_id() -> str:
    """Generate a random UUID string."""
    return str(uuid.uuid4())
