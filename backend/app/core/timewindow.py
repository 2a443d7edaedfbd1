"""Resolve a calendar day in a client timezone to a UTC query window.

A "day" is whatever the wall clock in the client's timezone calls that
date. Its boundaries are located independently, so days that contain a DST
transition come out shorter or longer than 24 hours.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_cls
from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.errors import InvalidTimezone

DAY_START = time(0, 0, 0, 0)
DAY_END = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class DateWindow:
    start_utc: datetime
    end_utc: datetime

    def contains(self, instant: datetime) -> bool:
        """In-memory form of the day filter the workout query applies in SQL."""
        return self.start_utc <= instant < self.end_utc


def load_timezone(tz_name: str | None) -> ZoneInfo:
    if not tz_name:
        raise InvalidTimezone(tz_name)
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise InvalidTimezone(tz_name) from None


def resolve_date_window(day: date_cls, tz_name: str) -> DateWindow:
    """Return the UTC instants of local 00:00:00.000 and 23:59:59.999 on ``day``.

    ``day`` may be a ``datetime``; its time-of-day and tzinfo are ignored.
    """
    tz = load_timezone(tz_name)
    calendar_day = date_cls(day.year, day.month, day.day)

    local_start = datetime.combine(calendar_day, DAY_START, tzinfo=tz)
    local_end = datetime.combine(calendar_day, DAY_END, tzinfo=tz)
    return DateWindow(
        start_utc=local_start.astimezone(timezone.utc),
        end_utc=local_end.astimezone(timezone.utc),
    )


def local_today(tz_name: str | None) -> date_cls:
    if tz_name is None:
        return datetime.now(timezone.utc).date()
    return datetime.now(load_timezone(tz_name)).date()
