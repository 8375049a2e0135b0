"""
Interval arithmetic for calendar events.

Day ranges are half-open: a day runs from midnight to the following midnight,
so per-day figures add up exactly to the figure for the whole range.
"""

from collections.abc import Iterator
from datetime import date, datetime, time, timedelta
from typing import Any

from core.config import OVERNIGHT_DAILY_CAP_MINUTES

ONE_DAY = timedelta(days=1)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return (midnight, next midnight) for a calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + ONE_DAY


def range_start(value: date | datetime) -> datetime:
    """A date means the start of that day; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def range_end(value: date | datetime) -> datetime:
    """A date means the end of that day (next midnight, exclusive)."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min) + ONE_DAY


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open overlap test; back-to-back intervals do not overlap."""
    return a_start < b_end and b_start < a_end


def minutes_in_range(event: Any, start: date | datetime, end: date | datetime) -> float:
    """
    Minutes of `event` that fall inside [start, end].

    Works for anything with `start`/`end` datetimes. Never negative; events
    outside the range contribute 0.
    """
    lo = range_start(start)
    hi = range_end(end)

    if event.end < lo or event.start > hi:
        return 0.0

    effective_start = max(event.start, lo)
    effective_end = min(event.end, hi)
    return max(0.0, (effective_end - effective_start).total_seconds() / 60)


def hours_in_range(event: Any, start: date | datetime, end: date | datetime) -> float:
    return minutes_in_range(event, start, end) / 60


def minutes_for_day(event: Any, day: date, cap_overnight: bool = True) -> float:
    """
    Minutes of `event` on one calendar day.

    Overnight events count at most 12 hours per day so a long stay doesn't
    swamp the daily figure. Week and month totals use `minutes_in_range`
    directly and are not capped.
    """
    minutes = minutes_in_range(event, day, day)
    if cap_overnight and getattr(event, "is_overnight_event", False):
        minutes = min(minutes, OVERNIGHT_DAILY_CAP_MINUTES)
    return minutes


def event_overlaps_day(event: Any, day: date) -> bool:
    start, end = day_bounds(day)
    if event.start == event.end:
        return start <= event.start < end
    return overlaps(event.start, event.end, start, end)


def each_day(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += ONE_DAY


def days_spanned(event: Any) -> list[date]:
    """Calendar days the event touches; an end at midnight excludes that day."""
    first = event.start.date()
    last = event.end.date()
    if last > first and event.end == datetime.combine(last, time.min):
        last -= ONE_DAY
    return list(each_day(first, last))
