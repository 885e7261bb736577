"""Logging configuration for the CLI.

Library code only creates module loggers; handlers are installed here, by the
entry point, so applications embedding the client keep control of logging.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

_PACKAGE_LOGGERS = ("adapters", "core", "cli")


class AuthorizationRedactionFilter(logging.Filter):
    """Hide credentials if an Authorization header ends up in a log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "Authorization" in message or "authorization" in message:
            record.msg = "[redacted: message contained credentials]"
            record.args = ()
        return True


def get_logging_config(level: str = "WARNING") -> dict[str, Any]:
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "redact_auth": {
                "()": AuthorizationRedactionFilter,
            }
        },
        "formatters": {
            "rich": {
                "format": "%(name)s - %(message)s",
                "datefmt": "[%X]",
            }
        },
        "handlers": {
            "rich": {
                "class": "rich.logging.RichHandler",
                "formatter": "rich",
                "filters": ["redact_auth"],
                "rich_tracebacks": True,
                "show_path": False,
            }
        },
        "loggers": {
            name: {"handlers": ["rich"], "level": level, "propagate": False}
            for name in _PACKAGE_LOGGERS
        },
        "root": {
            "level": "WARNING",
            "handlers": ["rich"],
        },
    }


def configure_logging(level: str = "WARNING") -> None:
    logging.config.dictConfig(get_logging_config(level))
