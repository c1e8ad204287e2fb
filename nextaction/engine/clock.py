"""
Business clock — "today" in the fixed business timezone and whole-day math.

Everything the rules engine knows about time goes through here. Naive
datetimes (SQLite hands them back that way) are treated as UTC.
"""
from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from nextaction.config import BUSINESS_TIMEZONE

SECONDS_PER_DAY = 86400


def as_aware(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime; leave aware ones untouched."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from `earlier` to `later`, truncated toward zero."""
    delta = as_aware(later) - as_aware(earlier)
    return int(delta.total_seconds() / SECONDS_PER_DAY)


class BusinessClock:
    """Wall clock pinned to one business timezone.

    Pass `now` to freeze the clock (tests, replaying a past day from the API).
    """

    def __init__(self, tz_name: str = BUSINESS_TIMEZONE, now: Optional[datetime] = None):
        self.tz = ZoneInfo(tz_name)
        self._now = as_aware(now) if now is not None else None

    def now(self) -> datetime:
        if self._now is not None:
            return self._now
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return self.local_date(self.now())

    def local_date(self, dt: datetime) -> date:
        return as_aware(dt).astimezone(self.tz).date()

    def local_midnight(self, day: Optional[date] = None) -> datetime:
        return datetime.combine(day or self.today(), time(0, 0), tzinfo=self.tz)

    def local_noon(self, day: Optional[date] = None) -> datetime:
        """Noon keeps a logged record on the same calendar day after tz conversion."""
        return datetime.combine(day or self.today(), time(12, 0), tzinfo=self.tz)
