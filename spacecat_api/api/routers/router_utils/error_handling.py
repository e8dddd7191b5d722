"""
Router error handling.

Provides a decorator that turns domain exceptions into HTTPExceptions
with consistent logging across every endpoint.

Dependencies: fastapi, spacecat_api.core.exceptions
System role: Exception to HTTP response mapping for routers
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from spacecat_api.core.exceptions import RateLimitExceededError, SpacecatApiError

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

ERROR_HEADER = "x-error"


def _headers(message: str, error_header: bool, extra: dict[str, str] | None = None) -> dict[str, str] | None:
    headers = dict(extra or {})
    if error_header:
        headers[ERROR_HEADER] = message
    return headers or None


def handle_api_errors(fallback_message: str, error_header: bool = False) -> Callable[[F], F]:
    """
    Decorator factory mapping service exceptions to HTTP errors.

    This centralizes:
    - Status codes, taken from the domain exception
    - Logging, WARNING for client errors and a traceback for the rest
    - The fallback message for unexpected failures, so internals never leak

    Args:
        fallback_message: 500 message for exceptions outside the hierarchy
        error_header: Also return the message in the x-error header

    Returns:
        Callable: Decorator for async route handlers
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)

            except HTTPException:
                raise

            except RateLimitExceededError as e:
                logger.warning(
                    "Rate limit exceeded",
                    extra={"error": e.message, "minutes_remaining": e.minutes_remaining},
                )
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail={"message": e.message, "minutesRemaining": e.minutes_remaining},
                    headers=_headers(
                        e.message,
                        error_header,
                        {"Retry-After": str(e.minutes_remaining * 60)},
                    ),
                )

            except SpacecatApiError as e:
                if e.status_code < 500:
                    logger.warning(
                        "Request rejected",
                        extra={"status_code": e.status_code, "error": e.message, "details": e.details},
                    )
                else:
                    logger.error(
                        "Request failed",
                        extra={"status_code": e.status_code, "error": str(e)},
                    )
                raise HTTPException(
                    status_code=e.status_code,
                    detail=e.message,
                    headers=_headers(e.message, error_header),
                )

            except Exception as e:
                logger.exception(fallback_message, extra={"error": str(e)})
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=fallback_message,
                    headers=_headers(fallback_message, error_header),
                )

        return wrapper  # type: ignore

    return decorator
