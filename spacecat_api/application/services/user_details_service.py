"""
User details service.

Resolves display details (name, email) for users referenced by external
IMS user id. Trial users of the organization are answered from the
database; anyone else is looked up in IMS, but only for admin callers.

Dependencies: sqlalchemy, httpx (via ImsClient)
System role: User details lookups behind the user-details router
"""

import logging
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.boundary.db.CRUD.site_crud import organization_crud
from spacecat_api.boundary.db.CRUD.trial_user_crud import trial_user_crud
from spacecat_api.boundary.db.models.trial_user_model import TrialUserModel
from spacecat_api.boundary.ims.ims_client import ImsClient, ImsError
from spacecat_api.core.exceptions import AccessDeniedError, NotFoundError, ValidationError
from spacecat_api.core.validators import has_text, is_non_empty_array, is_valid_uuid
from spacecat_api.models.user_details import UserDetails

logger = logging.getLogger(__name__)


class UserDetailsService:
    """User detail resolution for an organization."""

    def __init__(
        self,
        db: AsyncSession,
        access_control: AccessControl,
        ims_client: ImsClient,
    ) -> None:
        """
        Initialize user details service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization
            ims_client: IMS client for admin profile lookups
        """
        self.db = db
        self.access_control = access_control
        self.ims_client = ims_client

    async def _trial_users(self, organization_id: str) -> Sequence[TrialUserModel]:
        organization = await organization_crud.get_by_id(self.db, organization_id)
        if organization is None:
            raise NotFoundError("Organization not found", entity="organization", entity_id=organization_id)
        if not await self.access_control.has_access(organization):
            raise AccessDeniedError("Access denied to this organization")
        return await trial_user_crud.all_by_organization_id(self.db, organization_id)

    async def _fetch_from_ims_if_admin(self, external_user_id: str, organization_id: str) -> UserDetails:
        """
        Look the user up in IMS for admins; everyone else gets system defaults.

        IMS failures also fall back to system defaults.
        """
        if not self.access_control.has_admin_access():
            logger.debug(f"User is not admin, returning system defaults for {external_user_id}")
            return UserDetails.system_default(organization_id)

        try:
            profile = await self.ims_client.get_ims_admin_profile(external_user_id)
        except ImsError as e:
            logger.warning(f"Failed to fetch user details from IMS for {external_user_id}: {e}")
            return UserDetails.system_default(organization_id)

        return UserDetails(
            first_name=profile.get("first_name") or "system",
            last_name=profile.get("last_name") or "",
            email=profile.get("email") or "system",
            organization_id=organization_id,
        )

    @staticmethod
    def _from_trial_user(trial_user: TrialUserModel) -> UserDetails:
        return UserDetails(
            first_name=trial_user.first_name,
            last_name=trial_user.last_name,
            email=trial_user.email_id,
            organization_id=str(trial_user.organization_id),
        )

    async def _resolve(
        self,
        external_user_id: str,
        organization_id: str,
        trial_users: Sequence[TrialUserModel],
    ) -> tuple[UserDetails, bool]:
        """Resolve one user; the flag tells whether IMS was consulted."""
        trial_user = next((u for u in trial_users if u.external_user_id == external_user_id), None)
        if trial_user is not None:
            return self._from_trial_user(trial_user), False
        return await self._fetch_from_ims_if_admin(external_user_id, organization_id), True

    async def get_user_details(self, organization_id: str, external_user_id: str) -> dict[str, Any]:
        """
        Details of one user.

        Args:
            organization_id: Organization UUID
            external_user_id: IMS user id

        Returns:
            dict: {firstName, lastName, email, organizationId}
        """
        if not is_valid_uuid(organization_id):
            raise ValidationError("Organization ID required", field="organizationId")
        if not has_text(external_user_id):
            raise ValidationError("External user ID is required", field="externalUserId")

        trial_users = await self._trial_users(organization_id)
        details, _ = await self._resolve(external_user_id, organization_id, trial_users)
        return details.to_json()

    async def get_user_details_in_bulk(self, organization_id: str, payload: Any) -> dict[str, Any]:
        """
        Details of several users, keyed by external user id.

        Args:
            organization_id: Organization UUID
            payload: {userIds: [...]}

        Returns:
            dict: externalUserId -> {firstName, lastName, email, organizationId}
        """
        if not is_valid_uuid(organization_id):
            raise ValidationError("Organization ID required", field="organizationId")
        user_ids = payload.get("userIds") if isinstance(payload, dict) else None
        if not is_non_empty_array(user_ids):
            raise ValidationError("userIds array is required and must not be empty", field="userIds")

        trial_users = await self._trial_users(organization_id)
        details_map: dict[str, Any] = {}
        ims_calls = 0
        for external_user_id in user_ids:
            details, used_ims = await self._resolve(external_user_id, organization_id, trial_users)
            ims_calls += used_ims
            details_map[str(external_user_id)] = details.to_json()

        if ims_calls:
            logger.info(
                f"Fetched user details from IMS {ims_calls} times for organization {organization_id}"
            )
        return details_map
