"""
Fix and suggestion DTOs.

Dependencies: pydantic
System role: Fix API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from spacecat_api.boundary.db.models.fix_model import FixStatus, FixType
from spacecat_api.models.common import CamelModel


class FixDto(CamelModel):
    """Fix entity as returned by the API."""

    id: uuid.UUID
    opportunity_id: uuid.UUID
    type: FixType
    status: FixStatus
    origin: str
    change_details: dict[str, Any] = Field(default_factory=dict)
    executed_by: str | None = None
    executed_at: datetime | None = None
    published_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class SuggestionDto(CamelModel):
    """Suggestion as returned by the API."""

    id: uuid.UUID
    opportunity_id: uuid.UUID
    type: str
    status: str
    rank: int
    data: dict[str, Any] = Field(default_factory=dict)
    fix_entity_id: uuid.UUID | None = None
    created_at: datetime
    updated_at: datetime


def fix_to_json(fix: Any) -> dict[str, Any]:
    return FixDto.model_validate(fix).to_json()


def suggestion_to_json(suggestion: Any) -> dict[str, Any]:
    return SuggestionDto.model_validate(suggestion).to_json()
