"""
User details DTOs.

Dependencies: pydantic
System role: User details API contracts
"""

from spacecat_api.models.common import CamelModel


class UserDetails(CamelModel):
    """Display details of a user within an organization."""

    first_name: str | None = None
    last_name: str | None = None
    email: str
    organization_id: str

    @classmethod
    def system_default(cls, organization_id: str) -> "UserDetails":
        return cls(first_name="system", last_name="", email="system", organization_id=organization_id)
