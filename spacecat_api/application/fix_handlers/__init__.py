"""
Fix handlers for the apply-fixes endpoint.

Dependencies: spacecat_api.boundary
System role: Registry of per-type fix handlers
"""

from spacecat_api.application.fix_handlers.accessibility_handler import AccessibilityFixHandler
from spacecat_api.application.fix_handlers.base import FixHandler, FixHandlerType
from spacecat_api.application.fix_handlers.registry import build_fix_handler_registry

__all__ = [
    "AccessibilityFixHandler",
    "FixHandler",
    "FixHandlerType",
    "build_fix_handler_registry",
]
