"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_access_control,
    get_apply_fixes_service,
    get_auth_info,
    get_consumer_service,
    get_fix_service,
    get_report_service,
    get_role_service,
    get_sandbox_audit_service,
    get_scrape_service,
    get_sentiment_service,
    get_service_cache,
    get_user_details_service,
)

__all__ = [
    "get_access_control",
    "get_apply_fixes_service",
    "get_auth_info",
    "get_consumer_service",
    "get_fix_service",
    "get_report_service",
    "get_role_service",
    "get_sandbox_audit_service",
    "get_scrape_service",
    "get_sentiment_service",
    "get_service_cache",
    "get_user_details_service",
]
