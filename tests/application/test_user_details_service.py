"""
Tests for UserDetailsService.

Dependencies: pytest, pytest-asyncio, aiosqlite
System role: User details resolution verification
"""

import uuid

import pytest

from spacecat_api.application.access_control import AccessControl
from spacecat_api.application.services.user_details_service import UserDetailsService
from spacecat_api.boundary.db.CRUD import trial_user_crud
from spacecat_api.boundary.ims.ims_client import ImsError
from spacecat_api.core.exceptions import AccessDeniedError, NotFoundError, ValidationError


@pytest.fixture
async def trial_user(test_async_db, organization):
    return await trial_user_crud.create(
        test_async_db,
        organization_id=organization.id,
        external_user_id="trial-1",
        first_name="Tina",
        last_name="Trial",
        email_id="tina@example.com",
    )


@pytest.fixture
def user_details_service(test_async_db, member_access, mock_ims_client) -> UserDetailsService:
    return UserDetailsService(db=test_async_db, access_control=member_access, ims_client=mock_ims_client)


@pytest.fixture
def admin_user_details_service(test_async_db, admin_access, mock_ims_client) -> UserDetailsService:
    mock_ims_client.get_ims_admin_profile.return_value = {
        "first_name": "Ada",
        "last_name": "Admin",
        "email": "ada@example.com",
    }
    return UserDetailsService(db=test_async_db, access_control=admin_access, ims_client=mock_ims_client)


class TestGetUserDetails:
    async def test_trial_user(self, user_details_service, organization, trial_user):
        # Act
        result = await user_details_service.get_user_details(str(organization.id), "trial-1")

        # Assert
        assert result == {
            "firstName": "Tina",
            "lastName": "Trial",
            "email": "tina@example.com",
            "organizationId": str(organization.id),
        }

    async def test_non_admin_gets_system_defaults(self, user_details_service, organization, mock_ims_client):
        # Act
        result = await user_details_service.get_user_details(str(organization.id), "stranger")

        # Assert
        assert result["firstName"] == "system"
        assert result["email"] == "system"
        mock_ims_client.get_ims_admin_profile.assert_not_called()

    async def test_admin_uses_ims(self, admin_user_details_service, organization, mock_ims_client):
        # Act
        result = await admin_user_details_service.get_user_details(str(organization.id), "ims-user")

        # Assert
        assert result["email"] == "ada@example.com"
        mock_ims_client.get_ims_admin_profile.assert_awaited_once_with("ims-user")

    async def test_ims_failure_falls_back(self, admin_user_details_service, organization, mock_ims_client):
        # Arrange
        mock_ims_client.get_ims_admin_profile.side_effect = ImsError("boom", 500)

        # Act
        result = await admin_user_details_service.get_user_details(str(organization.id), "ims-user")

        # Assert
        assert result["firstName"] == "system"

    async def test_unknown_organization(self, user_details_service):
        with pytest.raises(NotFoundError, match="Organization not found"):
            await user_details_service.get_user_details(str(uuid.uuid4()), "trial-1")

    async def test_outsider_denied(self, test_async_db, outsider_auth, mock_ims_client, organization):
        # Arrange
        service = UserDetailsService(
            db=test_async_db,
            access_control=AccessControl(auth_info=outsider_auth, db=test_async_db),
            ims_client=mock_ims_client,
        )

        # Act / Assert
        with pytest.raises(AccessDeniedError, match="Access denied to this organization"):
            await service.get_user_details(str(organization.id), "trial-1")

    async def test_invalid_organization_id(self, user_details_service):
        with pytest.raises(ValidationError, match="Organization ID required"):
            await user_details_service.get_user_details("org", "trial-1")


class TestBulkUserDetails:
    async def test_mixed_users(self, admin_user_details_service, organization, trial_user, mock_ims_client):
        # Act
        result = await admin_user_details_service.get_user_details_in_bulk(
            str(organization.id), {"userIds": ["trial-1", "ims-user"]}
        )

        # Assert
        assert set(result) == {"trial-1", "ims-user"}
        assert result["trial-1"]["firstName"] == "Tina"
        assert result["ims-user"]["firstName"] == "Ada"
        assert mock_ims_client.get_ims_admin_profile.await_count == 1

    async def test_requires_user_ids(self, user_details_service, organization):
        with pytest.raises(ValidationError, match="userIds array is required"):
            await user_details_service.get_user_details_in_bulk(str(organization.id), {"userIds": []})
