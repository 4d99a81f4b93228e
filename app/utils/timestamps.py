"""
Timestamp helpers.

All timestamps leaving the service use the same ISO-8601 UTC format the
frontend already parses: millisecond precision with a trailing "Z".
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: Optional[datetime] = None) -> str:
    """
    Format a datetime as ISO-8601 UTC, e.g. 2025-11-08T10:30:00.000Z.

    Naive datetimes are assumed to already be UTC.
    """
    moment = moment or utc_now()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
