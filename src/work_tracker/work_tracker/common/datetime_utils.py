from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Optional, Union

import pytz

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: Union[datetime, date]) -> str:
    """Format as a YYYY-MM-DD date-key."""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(DATE_FORMAT)


def minutes_of_day(hhmm: str) -> int:
    """'09:30' -> 570."""
    hours, minutes = hhmm.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def host_timezone() -> tzinfo:
    return datetime.now().astimezone().tzinfo


def get_timezone(name: Optional[str]) -> tzinfo:
    """Resolve a timezone name; empty means the host's zone.

    Raises pytz.UnknownTimeZoneError for unknown names.
    """
    if not name:
        return host_timezone()
    return pytz.timezone(name)


def localize(naive: datetime, tz: tzinfo) -> datetime:
    # pytz zones need localize() to pick the right DST offset
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def parse_timestamp(value: str, tz: tzinfo) -> datetime:
    """Parse an ISO-8601 string; naive values are read in ``tz``."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = localize(parsed, tz)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


class Clock:
    """Wall clock bound to one timezone.

    Note: ``now_fn`` replaces the system clock when given.
    """

    def __init__(self, tz: Optional[tzinfo] = None, now_fn: Optional[Callable[[], datetime]] = None):
        self.tz = tz or host_timezone()
        self._now_fn = now_fn

    def with_timezone(self, tz: tzinfo) -> "Clock":
        return Clock(tz, self._now_fn)

    def now(self) -> datetime:
        if self._now_fn is not None:
            return self.to_local(self._now_fn())
        return datetime.now(pytz.UTC).astimezone(self.tz)

    def to_local(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return localize(value, self.tz)
        return value.astimezone(self.tz)

    def date_key(self, value: datetime) -> str:
        return format_date(self.to_local(value))

    def format_time(self, value: datetime) -> str:
        return self.to_local(value).strftime(TIME_FORMAT)

    def combine(self, date_key: str, hhmm: str) -> datetime:
        """Build an aware instant from a date-key and an HH:MM wall time."""
        naive = datetime.strptime(f"{date_key} {hhmm}", f"{DATE_FORMAT} {TIME_FORMAT}")
        return localize(naive, self.tz)

    def is_weekend(self, value: Union[datetime, date]) -> bool:
        if isinstance(value, datetime):
            value = self.to_local(value).date()
        return value.weekday() >= 5

    def window_start(self, days: int, *, now: Optional[datetime] = None) -> datetime:
        return (now or self.now()) - timedelta(days=days)
