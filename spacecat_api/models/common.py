"""
Common DTO building blocks.

Dependencies: pydantic
System role: Shared serialization conventions for API contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base DTO: reads ORM attributes, writes camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class BatchMetadata(CamelModel):
    """Counts for a multi-item request; success + failed == total."""

    total: int
    success: int
    failed: int
