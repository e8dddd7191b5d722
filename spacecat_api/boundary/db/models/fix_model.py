"""
Fix entity ORM model.

Records one applied or queued remediation for an opportunity.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Fix lifecycle persistence
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin


class FixType(str, enum.Enum):
    """
    Kind of change a fix performs.

    CONTENT_UPDATE: Page copy change
    REDIRECT_UPDATE: Redirect rule change
    METADATA_UPDATE: Meta tags or structured data change
    CODE_CHANGE: Repository change delivered as a pull request
    """

    CONTENT_UPDATE = "CONTENT_UPDATE"
    REDIRECT_UPDATE = "REDIRECT_UPDATE"
    METADATA_UPDATE = "METADATA_UPDATE"
    CODE_CHANGE = "CODE_CHANGE"


class FixStatus(str, enum.Enum):
    """
    Fix lifecycle states.

    PENDING: Created, not yet deployed (e.g. pull request open)
    DEPLOYED: Deployed to a non-production environment
    PUBLISHED: Live on the site
    FAILED: Deployment failed
    ROLLED_BACK: Reverted after deployment
    """

    PENDING = "PENDING"
    DEPLOYED = "DEPLOYED"
    PUBLISHED = "PUBLISHED"
    FAILED = "FAILED"
    ROLLED_BACK = "ROLLED_BACK"


class FixModel(Base, UUIDMixin, TimestampMixin):
    """
    Fix entity ORM model.

    Suggestions point at the fix that remediates them through
    SuggestionModel.fix_entity_id.

    Attributes:
        id: UUID primary key (auto-generated)
        opportunity_id: Opportunity the fix belongs to
        type: FixType
        status: FixStatus, PENDING on creation
        origin: System that produced the fix
        change_details: Free-form description (pullRequestUrl, updatedFiles, ...)
        executed_by: Who executed the fix
        executed_at: When it was executed
        published_at: When it went live
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "fix_entities"

    opportunity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )

    type: Mapped[FixType] = mapped_column(
        Enum(FixType, native_enum=False),
        nullable=False,
    )

    status: Mapped[FixStatus] = mapped_column(
        Enum(FixStatus, native_enum=False),
        nullable=False,
        default=FixStatus.PENDING,
    )

    origin: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default="spacecat",
        doc="Producer of the fix",
    )

    change_details: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Free-form change description",
    )

    executed_by: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)

    executed_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )

    published_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )
