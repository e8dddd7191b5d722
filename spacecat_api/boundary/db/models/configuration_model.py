"""
Configuration ORM model.

Versioned global configuration of audit handlers.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Audit enablement lookup
"""

from typing import Any

from sqlalchemy import JSON, Integer
from sqlalchemy.orm import Mapped, mapped_column

from spacecat_api.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ConfigurationModel(Base, UUIDMixin, TimestampMixin):
    """
    Configuration ORM model.

    handlers maps an audit type to its enablement rules::

        {
            "meta-tags": {
                "enabledByDefault": false,
                "enabled": {"sites": ["<siteId>"], "orgs": ["<orgId>"]},
                "disabled": {"sites": [], "orgs": []}
            }
        }

    Attributes:
        version: Monotonic version; the highest one is current
        handlers: Per audit type enablement rules
    """

    __tablename__ = "configurations"

    version: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)

    handlers: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    def is_handler_enabled_for_site(self, handler_type: str, site: Any) -> bool:
        """
        Whether an audit type is enabled for a site.

        An explicit enabled list wins over a disabled list, which wins over
        the handler default.

        Args:
            handler_type: Audit type
            site: Object exposing id and organization_id

        Returns:
            bool: True if the handler runs for the site
        """
        handler = (self.handlers or {}).get(handler_type)
        if not handler:
            return False

        site_id = str(site.id)
        org_id = str(site.organization_id) if site.organization_id else None

        def _listed(rule: dict) -> bool:
            return site_id in (rule.get("sites") or []) or (
                org_id is not None and org_id in (rule.get("orgs") or [])
            )

        if handler.get("enabled") is not None:
            return _listed(handler["enabled"])
        if handler.get("disabled") is not None:
            return not _listed(handler["disabled"])
        return bool(handler.get("enabledByDefault"))
