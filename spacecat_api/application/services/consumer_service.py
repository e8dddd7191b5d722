"""
Consumer service.

Service-to-service API consumers are registered from a Technical Account
access token: IMS validates the token and yields the client id, technical
account id and IMS org, which become the consumer's immutable identity.
Every mutation is announced on the S2S Slack channel.

Dependencies: sqlalchemy, httpx (via ImsClient, SlackClient)
System role: Consumer registry behind the consumers router
"""

import logging
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from spacecat_api.application.access_control import AccessControl
from spacecat_api.boundary.db.CRUD.consumer_crud import consumer_crud
from spacecat_api.boundary.db.models.consumer_model import ConsumerModel, ConsumerStatus
from spacecat_api.boundary.ims.ims_client import ImsClient, ImsError
from spacecat_api.boundary.slack.slack_client import SlackClient
from spacecat_api.core.exceptions import AccessDeniedError, NotFoundError, ValidationError
from spacecat_api.core.timestamps import now_utc
from spacecat_api.core.validators import has_text, is_non_empty_object
from spacecat_api.models.consumer import ConsumerDto
from spacecat_api.utils.slack.base import SlackMessageError

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = ("clientId", "technicalAccountId", "imsOrgId")
UPDATABLE_STATUSES = tuple(s.value for s in ConsumerStatus if s != ConsumerStatus.REVOKED)


def _to_json(consumer: ConsumerModel) -> dict[str, Any]:
    return ConsumerDto.model_validate(consumer).to_json()


class ConsumerService:
    """S2S consumer registration and lifecycle."""

    def __init__(
        self,
        db: AsyncSession,
        access_control: AccessControl,
        ims_client: ImsClient,
        slack_client: SlackClient,
        slack_channel_id: str,
    ) -> None:
        """
        Initialize consumer service.

        Args:
            db: AsyncSession for database operations
            access_control: Caller authorization (S2S admin required)
            ims_client: Validates Technical Account tokens
            slack_client: Posts lifecycle notifications
            slack_channel_id: Channel receiving notifications
        """
        self.db = db
        self.access_control = access_control
        self.ims_client = ims_client
        self.slack_client = slack_client
        self.slack_channel_id = slack_channel_id

    def _require_s2s_admin(self, message: str) -> None:
        if not self.access_control.has_s2s_admin_access():
            raise AccessDeniedError(message)

    def _updated_by(self) -> str:
        return self.access_control.auth_info.email or "system"

    async def _notify(self, message: str) -> None:
        """Post to the S2S channel; failures are logged, never raised."""
        try:
            await self.slack_client.post_message(self.slack_channel_id, message)
        except (SlackMessageError, httpx.HTTPError) as e:
            logger.error(f"Failed to send Slack notification: {e}")

    async def _load(self, consumer_id: str) -> ConsumerModel:
        consumer = await consumer_crud.get_by_id(self.db, consumer_id)
        if consumer is None:
            raise NotFoundError(
                f"Consumer with consumerId {consumer_id} not found",
                entity="consumer",
                entity_id=consumer_id,
            )
        return consumer

    async def list_consumers(self) -> list[dict[str, Any]]:
        self._require_s2s_admin("Only S2S admins can list consumers")
        consumers = await consumer_crud.get_all(self.db)
        return [_to_json(c) for c in consumers]

    async def get_by_consumer_id(self, consumer_id: str) -> dict[str, Any]:
        self._require_s2s_admin("Only S2S admins can view consumers")
        if not has_text(consumer_id):
            raise ValidationError("consumerId is required", field="consumerId")
        return _to_json(await self._load(consumer_id))

    async def get_by_client_id(self, client_id: str) -> dict[str, Any]:
        self._require_s2s_admin("Only S2S admins can view consumers")
        if not has_text(client_id):
            raise ValidationError("clientId is required", field="clientId")
        consumer = await consumer_crud.find_by_client_id(self.db, client_id)
        if consumer is None:
            raise NotFoundError(
                f"Consumer with clientId {client_id} not found",
                entity="consumer",
                entity_id=client_id,
            )
        return _to_json(consumer)

    async def _resolve_identity(self, access_token: str) -> tuple[str, str, str]:
        """
        Validate a Technical Account token and extract its identity.

        Returns:
            tuple: (client_id, technical_account_id, ims_org_id)
        """
        logger.info("Validating TA access token with IMS")
        try:
            payload = await self.ims_client.validate_access_token(access_token)
        except ImsError as e:
            logger.error(f"IMS token validation failed: {e}")
            raise ValidationError("Invalid or expired Technical Account access token") from e

        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise ValidationError("IMS validation response does not contain token data")

        client_id = token.get("client_id")
        technical_account_id = token.get("user_id")
        ims_org_id = token.get("org")
        if not (has_text(client_id) and has_text(technical_account_id) and has_text(ims_org_id)):
            raise ValidationError(
                "Access token does not contain required Technical Account identity fields"
            )
        logger.info(f"Token resolved: clientId={client_id}, imsOrgId={ims_org_id}")
        return client_id, technical_account_id, ims_org_id

    async def register(self, payload: Any) -> dict[str, Any]:
        """
        Register a consumer from a Technical Account access token.

        Args:
            payload: {accessToken, consumerName, capabilities}

        Returns:
            dict: Serialized ACTIVE consumer

        Raises:
            AccessDeniedError: Caller is not an S2S admin
            ValidationError: Bad body, rejected token or duplicate clientId
        """
        self._require_s2s_admin("Only S2S admins can register consumers")
        if not is_non_empty_object(payload):
            raise ValidationError("Request body is required")

        access_token = payload.get("accessToken")
        consumer_name = payload.get("consumerName")
        capabilities = payload.get("capabilities")
        logger.info(f"Register consumer request: consumerName={consumer_name}")
        if not has_text(access_token):
            raise ValidationError("accessToken is required", field="accessToken")
        if not has_text(consumer_name):
            raise ValidationError("consumerName is required", field="consumerName")
        if not isinstance(capabilities, list) or not capabilities:
            raise ValidationError("capabilities must be a non-empty array", field="capabilities")

        client_id, technical_account_id, ims_org_id = await self._resolve_identity(access_token)

        if await consumer_crud.find_by_client_id(self.db, client_id) is not None:
            logger.info(f"Consumer with clientId={client_id} already exists, rejecting")
            raise ValidationError(f"Consumer with clientId {client_id} is already registered")

        consumer = await consumer_crud.create(
            self.db,
            client_id=client_id,
            technical_account_id=technical_account_id,
            ims_org_id=ims_org_id,
            consumer_name=consumer_name,
            capabilities=capabilities,
            status=ConsumerStatus.ACTIVE,
            updated_by=self._updated_by(),
        )

        message = (
            f"A new consumer registered: clientId={client_id}, consumerName={consumer_name},"
            f" imsOrgId={ims_org_id}, capabilities=[{', '.join(map(str, capabilities))}],"
            f" by={self._updated_by()}"
        )
        logger.info(message)
        await self._notify(message)
        return _to_json(consumer)

    async def update(self, consumer_id: str, payload: Any) -> dict[str, Any]:
        """
        Update consumerName, capabilities or status.

        Raises:
            ValidationError: Immutable fields, revokedAt, bad status or
                revoked consumer
            NotFoundError: Unknown consumer
        """
        self._require_s2s_admin("Only S2S admins can update consumers")
        if not has_text(consumer_id):
            raise ValidationError("consumerId is required", field="consumerId")
        if not is_non_empty_object(payload):
            raise ValidationError("Request body is required")

        violations = [f for f in IMMUTABLE_FIELDS if f in payload]
        if violations:
            raise ValidationError(
                f"The following fields are immutable and cannot be updated: {', '.join(violations)}"
            )
        if "revokedAt" in payload:
            raise ValidationError("revokedAt cannot be set via update. Use the revoke endpoint instead")
        status = payload.get("status")
        if has_text(status) and status not in UPDATABLE_STATUSES:
            raise ValidationError(
                f"Invalid status for update. Must be one of: {', '.join(UPDATABLE_STATUSES)}",
                field="status",
            )

        consumer = await self._load(consumer_id)
        if consumer.status == ConsumerStatus.REVOKED:
            raise ValidationError("Cannot update a revoked consumer")

        changes = []
        if has_text(payload.get("consumerName")):
            changes.append(f'consumerName: "{consumer.consumer_name}" -> "{payload["consumerName"]}"')
            consumer.consumer_name = payload["consumerName"]
        if isinstance(payload.get("capabilities"), list):
            changes.append(
                f"capabilities: [{', '.join(map(str, consumer.capabilities))}] -> "
                f"[{', '.join(map(str, payload['capabilities']))}]"
            )
            consumer.capabilities = payload["capabilities"]
        if has_text(status):
            changes.append(f'status: "{consumer.status.value}" -> "{status}"')
            consumer.status = ConsumerStatus(status)

        consumer.updated_by = self._updated_by()
        consumer = await consumer_crud.save(self.db, consumer)

        message = (
            f"Consumer updated: consumerId={consumer_id},"
            f" changes=[{'; '.join(changes)}], by={self._updated_by()}"
        )
        logger.info(message)
        await self._notify(message)
        return _to_json(consumer)

    async def revoke(self, consumer_id: str) -> dict[str, Any]:
        """
        Revoke a consumer. REVOKED is terminal.

        Raises:
            ValidationError: Already revoked
            NotFoundError: Unknown consumer
        """
        self._require_s2s_admin("Only S2S admins can revoke consumers")
        if not has_text(consumer_id):
            raise ValidationError("consumerId is required", field="consumerId")

        consumer = await self._load(consumer_id)
        if consumer.status == ConsumerStatus.REVOKED:
            raise ValidationError("Consumer is already revoked")

        consumer.status = ConsumerStatus.REVOKED
        consumer.revoked_at = now_utc()
        consumer.updated_by = self._updated_by()
        consumer = await consumer_crud.save(self.db, consumer)

        message = f"Consumer revoked: consumerId={consumer_id}, by={self._updated_by()}"
        logger.info(message)
        await self._notify(message)
        return _to_json(consumer)
