from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a UTC-naive datetime, the form stored in the database."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(dt: datetime) -> datetime:
    """Treat a DB-stored UTC-naive datetime as UTC-aware for API responses."""

    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc)

    return dt.replace(tzinfo=timezone.utc)
