"""JSON logging for the to-do API."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import current_context

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "request_id", "user_id"}


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record, tagged with the service and the request it served."""

    def __init__(self, *, service: str, environment: str) -> None:
        super().__init__()
        self._service = service
        self._environment = environment

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self._service,
            "environment": self._environment,
            "request_id": getattr(record, "request_id", "-"),
        }
        user_id = getattr(record, "user_id", None)
        if user_id is not None:
            payload["user_id"] = user_id
        payload.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the current request id and session user."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = current_context()
        record.request_id = context.request_id
        if getattr(record, "user_id", None) is None:
            record.user_id = context.user_id
        return True


def configure_logging(settings: Settings) -> None:
    """Send application, uvicorn and pymongo logs to stdout as JSON."""

    level = settings.log_level if settings.log_level in logging.getLevelNamesMapping() else "INFO"
    logging.captureWarnings(True)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonLogFormatter,
                    "service": settings.project_name,
                    "environment": settings.environment,
                }
            },
            "filters": {"request_context": {"()": RequestContextFilter}},
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                    "filters": ["request_context"],
                }
            },
            "root": {"handlers": ["stdout"], "level": level},
            "loggers": {
                "uvicorn": {"handlers": ["stdout"], "level": level, "propagate": False},
                # RequestContextMiddleware already logs each request with its user.
                "uvicorn.access": {"level": "WARNING"},
                "pymongo": {"level": "WARNING"},
            },
        }
    )


__all__ = ["JsonLogFormatter", "RequestContextFilter", "configure_logging"]
