"""
Consumer DTOs.

Dependencies: pydantic
System role: Consumer API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field

from spacecat_api.boundary.db.models.consumer_model import ConsumerStatus
from spacecat_api.models.common import CamelModel


class ConsumerDto(CamelModel):
    """Consumer as returned by the API."""

    consumer_id: uuid.UUID = Field(validation_alias="id", serialization_alias="consumerId")
    client_id: str
    technical_account_id: str
    ims_org_id: str
    consumer_name: str
    capabilities: list[str] = Field(default_factory=list)
    status: ConsumerStatus
    revoked_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    updated_by: str
