"""
Request context middleware.

Assigns the correlation id and writes one access log line per request,
tagged with the caller forwarded by the gateway and with the site,
opportunity or organization the route addressed.

Dependencies: starlette
System role: Per-request observability
"""

import logging
import time
import uuid
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
CALLER_HEADER = "x-user-email"

# Path params worth a log field of their own
ENTITY_PATH_PARAMS = ("site_id", "opportunity_id", "organization_id")


def request_context(request: Request) -> dict[str, Any]:
    """Log extras for a request once routing has resolved its path params."""
    path_params = request.scope.get("path_params") or {}
    context: dict[str, Any] = {
        "correlation_id": getattr(request.state, "correlation_id", None),
        "user": request.headers.get(CALLER_HEADER),
    }
    for name in ENTITY_PATH_PARAMS:
        if name in path_params:
            context[name] = path_params[name]
    return context


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlation id propagation and access logging."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"{request.method} {request.url.path} failed",
                extra={
                    **request_context(request),
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                **request_context(request),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        response.headers[CORRELATION_HEADER] = request.state.correlation_id
        return response
