"""Logging setup for the weathr command-line tools."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from .redaction import sanitize_text

DEFAULT_LOGGER_NAME = "weathr"


class JsonConsoleFormatter(logging.Formatter):
    """JSON formatter tagging every record with the CLI session id."""

    def __init__(self, session_id: str | None = None) -> None:
        super().__init__()
        self.session_id = session_id

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }
        if self.session_id:
            event["session_id"] = self.session_id
        if record.exc_info:
            event["exception"] = sanitize_text(self.formatException(record.exc_info))
        return json.dumps(event, default=str)


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: int | str = logging.INFO,
    *,
    session_id: str | None = None,
) -> logging.Logger:
    """Configure the weathr logger; repeat calls update level and session id."""
    logger = logging.getLogger(name)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False

    formatters = [
        handler.formatter
        for handler in logger.handlers
        if isinstance(handler.formatter, JsonConsoleFormatter)
    ]
    if formatters:
        if session_id is not None:
            for formatter in formatters:
                formatter.session_id = session_id
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonConsoleFormatter(session_id=session_id))
    logger.addHandler(handler)
    return logger
