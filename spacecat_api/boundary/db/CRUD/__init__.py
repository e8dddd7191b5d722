"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from spacecat_api.boundary.db.CRUD import site_crud, fix_crud

    site = await site_crud.get_by_id(db, site_id)
"""

from spacecat_api.boundary.db.CRUD.base_crud import BaseCRUD, coerce_uuid
from spacecat_api.boundary.db.CRUD.audit_crud import (
    AuditCRUD,
    ConfigurationCRUD,
    audit_crud,
    configuration_crud,
)
from spacecat_api.boundary.db.CRUD.consumer_crud import ConsumerCRUD, consumer_crud
from spacecat_api.boundary.db.CRUD.opportunity_crud import (
    FixCRUD,
    OpportunityCRUD,
    SuggestionCRUD,
    fix_crud,
    opportunity_crud,
    suggestion_crud,
)
from spacecat_api.boundary.db.CRUD.report_crud import ReportCRUD, report_crud
from spacecat_api.boundary.db.CRUD.role_crud import RoleCRUD, role_crud
from spacecat_api.boundary.db.CRUD.sentiment_crud import (
    SentimentGuidelineCRUD,
    SentimentTopicCRUD,
    sentiment_guideline_crud,
    sentiment_topic_crud,
)
from spacecat_api.boundary.db.CRUD.site_crud import (
    OrganizationCRUD,
    SiteCRUD,
    organization_crud,
    site_crud,
)
from spacecat_api.boundary.db.CRUD.trial_user_crud import TrialUserCRUD, trial_user_crud

__all__ = [
    "BaseCRUD",
    "coerce_uuid",
    "AuditCRUD",
    "ConfigurationCRUD",
    "ConsumerCRUD",
    "FixCRUD",
    "OpportunityCRUD",
    "OrganizationCRUD",
    "ReportCRUD",
    "RoleCRUD",
    "SentimentGuidelineCRUD",
    "SentimentTopicCRUD",
    "SiteCRUD",
    "SuggestionCRUD",
    "TrialUserCRUD",
    "audit_crud",
    "configuration_crud",
    "consumer_crud",
    "fix_crud",
    "opportunity_crud",
    "organization_crud",
    "report_crud",
    "role_crud",
    "sentiment_guideline_crud",
    "sentiment_topic_crud",
    "site_crud",
    "suggestion_crud",
    "trial_user_crud",
]
