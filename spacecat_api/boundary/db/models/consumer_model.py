"""
Consumer ORM model.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Service-to-service API client persistence
"""

import enum
from datetime import datetime

from sqlalchemy import JSON, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin


class ConsumerStatus(str, enum.Enum):
    """
    Consumer lifecycle states.

    ACTIVE: May call the API
    SUSPENDED: Temporarily blocked, may be reactivated
    REVOKED: Permanently blocked (terminal)
    """

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    REVOKED = "REVOKED"


class ConsumerModel(Base, UUIDMixin, TimestampMixin):
    """
    Registered technical-account consumer.

    client_id, technical_account_id and ims_org_id come from the validated
    access token at registration and never change afterwards.

    Attributes:
        id: UUID primary key, exposed as consumerId
        client_id: IMS client id, unique
        technical_account_id: IMS technical account (user) id
        ims_org_id: IMS organization of the technical account
        consumer_name: Display name
        capabilities: Granted capability strings
        status: ConsumerStatus
        revoked_at: Set once when revoked
        updated_by: Identifier of the last editor
    """

    __tablename__ = "consumers"

    client_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    technical_account_id: Mapped[str] = mapped_column(String(255), nullable=False)

    ims_org_id: Mapped[str] = mapped_column(String(255), nullable=False)

    consumer_name: Mapped[str] = mapped_column(String(255), nullable=False)

    capabilities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    status: Mapped[ConsumerStatus] = mapped_column(
        Enum(ConsumerStatus, native_enum=False),
        nullable=False,
        default=ConsumerStatus.ACTIVE,
    )

    revoked_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )

    updated_by: Mapped[str] = mapped_column(String(255), nullable=False, default="system")
