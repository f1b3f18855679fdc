"""
Timestamp helpers for catalog dates.
"""

import math
from datetime import datetime, timezone

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

CATALOG_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %I:%M%p GMT",
    "%Y-%m-%d %I:%M%p",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


def parse_catalog_timestamp(value: str) -> datetime | None:
    """Parse a catalog timestamp as UTC, returning None when it is not recognised."""
    value = (value or "").strip()
    if not value:
        return None

    for fmt in CATALOG_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def to_epoch(value: str) -> int | None:
    parsed = parse_catalog_timestamp(value)
    return int(parsed.timestamp()) if parsed else None


def _round_half_up(value: float) -> int:
    return max(1, int(math.floor(value + 0.5)))


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def human_time_diff(since: datetime, now: datetime | None = None) -> str:
    """Describe the distance between two moments, e.g. ``3 days`` or ``1 hour``."""
    now = now or datetime.now(timezone.utc)
    diff = abs((now - since).total_seconds())

    if diff < MINUTE:
        return _plural(max(1, int(diff)), "second", "seconds")
    if diff < HOUR:
        return _plural(_round_half_up(diff / MINUTE), "min", "mins")
    if diff < DAY:
        return _plural(_round_half_up(diff / HOUR), "hour", "hours")
    if diff < WEEK:
        return _plural(_round_half_up(diff / DAY), "day", "days")
    if diff < MONTH:
        return _plural(_round_half_up(diff / WEEK), "week", "weeks")
    if diff < YEAR:
        return _plural(_round_half_up(diff / MONTH), "month", "months")
    return _plural(_round_half_up(diff / YEAR), "year", "years")


def humanize_updated(last_updated: str, now: datetime | None = None) -> str:
    """Render a catalog timestamp as ``"<duration> ago"``; empty when unparseable."""
    parsed = parse_catalog_timestamp(last_updated)
    if parsed is None:
        return ""
    return f"{human_time_diff(parsed, now)} ago"
