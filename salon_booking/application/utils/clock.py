from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

Clock = Callable[[], datetime]


def business_clock(timezone: str) -> Clock:
    """Clock returning aware datetimes in the salon's timezone (UTC if the name is unknown)."""
    try:
        tz = ZoneInfo(timezone)
    except ZoneInfoNotFoundError:
        tz = ZoneInfo("UTC")

    def now() -> datetime:
        return datetime.now(tz)

    return now
