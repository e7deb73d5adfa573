"""
Logging configuration for applications embedding the service factory.

The registry and factory attach provider context (service name, protocol
version, resolved scopes) to their records via ``extra``. The JSON
formatter here lifts that context into top-level fields so registration
and resolution events can be filtered per provider.
"""

import json
import logging
import os
from datetime import UTC, datetime

# Record attributes set by oauth_factory loggers through ``extra``
CONTEXT_FIELDS = ("service_name", "protocol_version", "scopes")


class OAuthContextFormatter(logging.Formatter):
    """Formats records as one JSON object per line with provider context."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {
            field: getattr(record, field)
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        }
        if context:
            entry["oauth"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_global_logging(level: str | None = None, package_only: bool = False) -> None:
    """
    Install the JSON formatter.

    Args:
        level: Log level name; defaults to the OAUTH_LOG_LEVEL environment
            variable, then INFO.
        package_only: Configure only the ``oauth_factory`` logger instead of
            the root logger, leaving the host application's handlers alone.
    """
    level = (level or os.getenv("OAUTH_LOG_LEVEL", "INFO")).upper()

    handler = logging.StreamHandler()
    handler.setFormatter(OAuthContextFormatter())

    target = logging.getLogger("oauth_factory" if package_only else None)
    for existing in list(target.handlers):
        target.removeHandler(existing)
    target.addHandler(handler)
    target.setLevel(level)

    if package_only:
        target.propagate = False
