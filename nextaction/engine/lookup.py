"""
Activity/Booking lookup — everything the rules need to know about a lead's past.

Pure functions over in-memory rows. Activities are ordered by when they
happened (activity_at, else created_at); bookings by booking date, newest first.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from nextaction.config import CONTACT_ACTIVITY_TYPES
from nextaction.engine.clock import as_aware


def activity_time(activity) -> datetime:
    return as_aware(activity.occurred_at)


def booking_time(booking) -> datetime:
    return as_aware(booking.booked_on)


def group_by_lead(rows: Iterable) -> Dict[int, List]:
    """Bucket activity/booking rows by lead_id."""
    grouped = defaultdict(list)
    for row in rows:
        grouped[row.lead_id].append(row)
    return grouped


def is_contact(activity) -> bool:
    return activity.activity_type in CONTACT_ACTIVITY_TYPES


@dataclass
class LeadHistory:
    """Derived view of one lead's activities and bookings."""
    lead_id: int
    activities: List = field(default_factory=list)    # oldest first
    bookings: List = field(default_factory=list)      # newest first
    engaged_today: bool = False

    @classmethod
    def build(cls, lead_id: int, activities: Iterable, bookings: Iterable,
              today: date, tz) -> 'LeadHistory':
        acts = sorted((a for a in activities if a.lead_id == lead_id), key=activity_time)
        books = sorted((b for b in bookings if b.lead_id == lead_id), key=booking_time, reverse=True)
        engaged_today = any(
            a.activity_type == 'engagement' and activity_time(a).astimezone(tz).date() == today
            for a in acts
        )
        return cls(lead_id=lead_id, activities=acts, bookings=books, engaged_today=engaged_today)

    # ── Activity lookups ─────────────────────────────────────────────────

    @property
    def last_activity(self):
        return self.activities[-1] if self.activities else None

    @property
    def last_activity_date(self) -> Optional[datetime]:
        last = self.last_activity
        return activity_time(last) if last else None

    def _first(self, predicate) -> Optional[datetime]:
        for a in self.activities:
            if predicate(a):
                return activity_time(a)
        return None

    def _last(self, predicate) -> Optional[datetime]:
        for a in reversed(self.activities):
            if predicate(a):
                return activity_time(a)
        return None

    @property
    def first_dm_date(self) -> Optional[datetime]:
        return self._first(lambda a: a.activity_type == 'dm')

    @property
    def first_contact_date(self) -> Optional[datetime]:
        return self._first(is_contact)

    @property
    def last_conversation_date(self) -> Optional[datetime]:
        return self._last(lambda a: a.outcome == 'conversation')

    @property
    def last_engagement_date(self) -> Optional[datetime]:
        return self._last(lambda a: a.activity_type == 'engagement')

    @property
    def has_contacted(self) -> bool:
        return any(is_contact(a) for a in self.activities)

    def activities_after(self, moment: datetime) -> List:
        """Activities strictly after `moment`."""
        return [a for a in self.activities if activity_time(a) > moment]

    # ── Booking lookups ──────────────────────────────────────────────────

    @property
    def has_booked(self) -> bool:
        return bool(self.bookings)

    @property
    def last_booking_date(self) -> Optional[datetime]:
        return booking_time(self.bookings[0]) if self.bookings else None

    @property
    def first_booking_date(self) -> Optional[datetime]:
        return booking_time(self.bookings[-1]) if self.bookings else None

    def bookings_created_after(self, moment: datetime) -> List:
        return [b for b in self.bookings if as_aware(b.created_at or b.booked_at) > moment]
