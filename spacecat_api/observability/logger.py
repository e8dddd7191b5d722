"""
Logging configuration for the SpaceCat API.

Services log with ``extra={"site_id": ..., "opportunity_id": ...}``; the
ContextFormatter renders those request-scoped fields after the message so
one grep on a site or correlation id follows a request across layers.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

# Extra fields rendered as key=value, in this order
CONTEXT_FIELDS = (
    "correlation_id",
    "user",
    "site_id",
    "opportunity_id",
    "organization_id",
    "status_code",
    "duration_ms",
)

NOISY_LOGGERS = ("urllib3", "botocore", "boto3", "httpx", "httpcore")


class ContextFormatter(logging.Formatter):
    """Formatter appending request context extras to each line."""

    def __init__(self, environment: str) -> None:
        super().__init__(
            f"%(asctime)s %(levelname)s [{environment}] %(name)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = " ".join(
            f"{field}={getattr(record, field)}"
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        )
        return f"{line} | {context}" if context else line


def configure_logging(level: str = "INFO", environment: str = "dev") -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Root log level name (settings.log_level)
        environment: Deployment stage tagged on every line (settings.environment)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(environment))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
