"""
Declarative base, column types and mixins shared by every SpaceCat entity.

Entities are keyed by UUID (siteId, opportunityId, fixId, ...) and carry
createdAt/updatedAt in UTC. Timestamps go through UTCDateTime so that
drivers returning naive values (SQLite in tests) still hand back aware
UTC datetimes; constraint names follow a fixed convention so migrations
generated against Postgres stay stable.

Dependencies: sqlalchemy, spacecat_api.core.timestamps
System role: Foundation for all entity models
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from spacecat_api.core.timestamps import as_utc, now_utc

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class UTCDateTime(TypeDecorator):
    """Timezone-aware DateTime that always stores and returns UTC."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        return as_utc(value) if value is not None else None

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        return as_utc(value) if value is not None else None


class Base(DeclarativeBase):
    """Registry for every entity table."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class UUIDMixin:
    """UUID v4 primary key, generated client side so ids exist before flush."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """
    createdAt/updatedAt columns exposed on every entity DTO.

    updated_at is bumped on every flush that changes the row, which is what
    reports, roles and consumers surface as their last modification time.
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=now_utc,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=now_utc,
        onupdate=now_utc,
        nullable=False,
    )
