"""
Tests for RoleService.

Dependencies: pytest, pytest-asyncio, aiosqlite
System role: Role operations verification
"""

import uuid

import pytest

from spacecat_api.application.services.role_service import RoleService
from spacecat_api.core.exceptions import NotFoundError, ValidationError

ACL = [{"actions": ["read"], "path": "/organization/*"}]


@pytest.fixture
def role_service(test_async_db, member_auth) -> RoleService:
    return RoleService(db=test_async_db, auth_info=member_auth)


@pytest.fixture
async def role(role_service):
    return await role_service.create_role({"name": "reader", "imsOrgId": "ORG@AdobeOrg", "acl": ACL})


class TestCreateRole:
    async def test_create(self, role):
        assert role["name"] == "reader"
        assert role["imsOrgId"] == "ORG@AdobeOrg"
        assert role["acl"] == ACL
        assert role["updatedBy"] == "member@example.com"

    @pytest.mark.parametrize(
        "payload,message",
        [
            ({}, "No data provided"),
            ({"imsOrgId": "ORG@AdobeOrg"}, "name is required"),
            ({"name": "reader"}, "imsOrgId is required"),
            ({"name": "reader", "imsOrgId": "ORG@AdobeOrg", "acl": "all"}, "acl must be an array"),
        ],
    )
    async def test_invalid_payload(self, role_service, payload, message):
        with pytest.raises(ValidationError, match=message):
            await role_service.create_role(payload)


class TestGetRole:
    async def test_get(self, role_service, role):
        result = await role_service.get_by_id(role["id"])

        assert result["id"] == role["id"]

    async def test_invalid_id(self, role_service):
        with pytest.raises(ValidationError, match="Role ID required"):
            await role_service.get_by_id("role-1")

    async def test_unknown_role(self, role_service):
        with pytest.raises(NotFoundError, match="Role not found"):
            await role_service.get_by_id(str(uuid.uuid4()))


class TestPatchRole:
    async def test_patch(self, role_service, role):
        # Act
        result = await role_service.patch_role(role["id"], {"name": "writer", "acl": [{"actions": ["write"]}]})

        # Assert
        assert result["name"] == "writer"
        assert result["acl"] == [{"actions": ["write"]}]
        assert result["imsOrgId"] == "ORG@AdobeOrg"

    async def test_clear_acl(self, role_service, role):
        # Act
        result = await role_service.patch_role(role["id"], {"acl": []})

        # Assert
        assert result["acl"] == []
        assert result["name"] == "reader"

    async def test_patch_rejects_non_list_acl(self, role_service, role):
        with pytest.raises(ValidationError, match="acl must be an array"):
            await role_service.patch_role(role["id"], {"acl": "all"})

    async def test_no_effective_change(self, role_service, role):
        with pytest.raises(ValidationError, match="No updates provided"):
            await role_service.patch_role(role["id"], {"name": "reader", "acl": ACL})

    async def test_empty_body(self, role_service, role):
        with pytest.raises(ValidationError, match="No updates provided"):
            await role_service.patch_role(role["id"], {})
