"""Display formatting for snapshot timestamps."""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo

DEFAULT_DATE_FORMAT = "%d %b %Y %H:%M"


def format_date(
    value: datetime,
    *,
    fmt: str = DEFAULT_DATE_FORMAT,
    tz: tzinfo | None = None,
) -> str:
    """Render a timestamp for display.

    Naive datetimes are treated as UTC. The value is converted to ``tz``
    (UTC when omitted) before formatting, so the output depends only on the
    arguments.
    """
    if not isinstance(value, datetime):
        raise TypeError(f"format_date expects a datetime, got {type(value).__name__}")
    aware = value.replace(tzinfo=UTC) if value.tzinfo is None else value
    return aware.astimezone(tz or UTC).strftime(fmt)
