"""
Logging configuration for the ingest initiator.

This module configures structlog for JSON logging across the application.
Output goes to stderr so the download list on stdout stays machine readable.
"""

import logging
import re
import sys
from typing import Any

import structlog

# Keys whose values are never logged
SECRET_KEYS = ("password", "secret", "token", "database_url", "connection_string")

# (pattern, replacement) applied to string values
SECRET_PATTERNS = (
    (re.compile(r"://[^:/@\s]+:[^@\s]+@"), "://***@"),  # URLs with credentials
    (re.compile(r"(password|token)=[^&\s]+"), r"\1=***"),
)


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        for pattern, replacement in SECRET_PATTERNS:
            value = pattern.sub(replacement, value)
        return value
    if isinstance(value, dict):
        return {k: _redact_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact_value(item) for item in value]
    return value


def redact_secrets(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact database credentials and similar secrets from log events."""
    for key in list(event_dict):
        if any(secret in key.lower() for secret in SECRET_KEYS):
            event_dict[key] = "***REDACTED***"
        else:
            event_dict[key] = _redact_value(event_dict[key])
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging to stderr and render structlog events as JSON."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            redact_secrets,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, env: str = "dev") -> structlog.BoundLogger:
    """Get a logger carrying the service name and environment.

    The logger is resolved lazily, so module-level loggers pick up the
    configuration applied later by configure_logging().
    """
    return structlog.get_logger(name, service="ingest-initiator", env=env)
