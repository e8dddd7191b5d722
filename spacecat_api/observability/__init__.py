"""
Observability package.

Exports logging configuration and the request context middleware.
"""

from spacecat_api.observability.logger import configure_logging
from spacecat_api.observability.middleware import RequestContextMiddleware

__all__ = [
    "configure_logging",
    "RequestContextMiddleware",
]
