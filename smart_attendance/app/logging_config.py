# smart_attendance/app/logging_config.py
import logging
from typing import Any, Dict, Optional

from .config import get_settings

APP_LOGGER = "smart_attendance"


class RequestIdFilter(logging.Filter):
    """Gives records logged outside a request a placeholder request id."""

    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def _console(formatter: str, stream: str = "ext://sys.stdout", level: Optional[str] = None):
    handler: Dict[str, Any] = {
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "stream": stream,
        "filters": ["request_id"],
    }
    if level:
        handler["level"] = level
    return handler


def build_logging_config(
    level: Optional[str] = None, fmt: Optional[str] = None
) -> Dict[str, Any]:
    """dictConfig used by uvicorn.

    Application records use ``LOG_FORMAT`` at ``LOG_LEVEL``; errors are repeated
    on stderr with their source location.
    """
    settings = get_settings()
    level = (level or settings.LOG_LEVEL).upper()
    fmt = fmt or settings.LOG_FORMAT

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": RequestIdFilter}},
        "formatters": {
            "app": {"format": fmt, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "located": {"format": fmt + " (%(module)s:%(lineno)d)"},
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(client_addr)s - "%(request_line)s" %(status_code)s',
            },
        },
        "handlers": {
            "console": _console("app"),
            "errors": _console("located", "ext://sys.stderr", "ERROR"),
            "access": _console("access"),
        },
        "loggers": {
            APP_LOGGER: {"handlers": ["console", "errors"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        },
        "root": {"handlers": ["console", "errors"], "level": "INFO"},
    }
