"""
Database models package.

Exports the ORM models and enums for every entity the API reads or writes.

Dependencies: sqlalchemy, spacecat_api.boundary.db.base
System role: Database model definitions for domain entities
"""

from spacecat_api.boundary.db.models.audit_model import AuditModel
from spacecat_api.boundary.db.models.configuration_model import ConfigurationModel
from spacecat_api.boundary.db.models.consumer_model import ConsumerModel, ConsumerStatus
from spacecat_api.boundary.db.models.fix_model import FixModel, FixStatus, FixType
from spacecat_api.boundary.db.models.opportunity_model import OpportunityModel
from spacecat_api.boundary.db.models.organization_model import OrganizationModel
from spacecat_api.boundary.db.models.report_model import ReportModel, ReportStatus
from spacecat_api.boundary.db.models.role_model import RoleModel
from spacecat_api.boundary.db.models.sentiment_model import (
    SentimentGuidelineModel,
    SentimentTopicModel,
)
from spacecat_api.boundary.db.models.site_model import SiteModel
from spacecat_api.boundary.db.models.suggestion_model import SuggestionModel
from spacecat_api.boundary.db.models.trial_user_model import TrialUserModel

__all__ = [
    "AuditModel",
    "ConfigurationModel",
    "ConsumerModel",
    "ConsumerStatus",
    "FixModel",
    "FixStatus",
    "FixType",
    "OpportunityModel",
    "OrganizationModel",
    "ReportModel",
    "ReportStatus",
    "RoleModel",
    "SentimentGuidelineModel",
    "SentimentTopicModel",
    "SiteModel",
    "SuggestionModel",
    "TrialUserModel",
]
