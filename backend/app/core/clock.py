"""Calendar helpers for tenant-local dates."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.config import settings


def today_in(timezone_name: str | None = None) -> date:
    """Return the current calendar date in ``timezone_name``.

    Falls back to ``settings.APP_TIMEZONE`` when no zone is given, and to UTC
    when the configured zone is unknown to the tz database.
    """
    name = timezone_name or settings.APP_TIMEZONE
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return datetime.now(UTC).date()
    return datetime.now(zone).date()
