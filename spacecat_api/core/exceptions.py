"""
Exception hierarchy for the SpaceCat API.

Every domain error carries the HTTP status it maps to, so routers can
translate failures without inspecting message text.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SpacecatApiError(Exception):
    """Base exception for all SpaceCat API errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message, safe to return to clients
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(SpacecatApiError):
    """Raised when request input or a business rule check fails."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AccessDeniedError(SpacecatApiError):
    """Raised when the caller may not act on the requested resource."""

    status_code = 403


class NotFoundError(SpacecatApiError):
    """Raised when a referenced entity does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str,
        entity: str | None = None,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            message: Error message
            entity: Entity kind that was looked up (site, fix, ...)
            entity_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        if entity:
            details["entity"] = entity
        if entity_id:
            details["entity_id"] = entity_id
        super().__init__(message, details)


class RateLimitExceededError(SpacecatApiError):
    """Raised when an operation is triggered again inside its cooldown window."""

    status_code = 429

    def __init__(
        self,
        message: str,
        minutes_remaining: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize rate limit error.

        Args:
            message: Error message
            minutes_remaining: Minutes until the operation may run again
            details: Additional context
        """
        self.minutes_remaining = minutes_remaining
        details = details or {}
        details["minutes_remaining"] = minutes_remaining
        super().__init__(message, details)


class UpstreamServiceError(SpacecatApiError):
    """Raised when S3, SQS, IMS or a webhook call fails."""

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream service error.

        Args:
            message: Error message
            service: Name of the failing collaborator (s3, sqs, ims, webhook)
            details: Additional context
        """
        details = details or {}
        if service:
            details["service"] = service
        super().__init__(message, details)


class ConfigurationError(SpacecatApiError):
    """Raised when a required setting (queue URL, endpoint) is missing."""

    pass
