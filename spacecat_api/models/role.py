"""
Role DTOs.

Dependencies: pydantic
System role: Role API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from spacecat_api.models.common import CamelModel


class RoleDto(CamelModel):
    """Role as returned by the API."""

    id: uuid.UUID
    name: str
    ims_org_id: str
    acl: list[Any] = Field(default_factory=list)
    updated_by: str
    created_at: datetime
    updated_at: datetime
