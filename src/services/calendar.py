"""
Calendar payload parsing.

Turns provider event JSON (Google Calendar shape) into classified events.
Fetching is done by the caller; nothing here talks to a provider.
"""

import logging
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from core.classification import classify_events
from core.config import LOCAL_TIMEZONE, UNTITLED_EVENT_TITLE
from models.events import CalendarPayload, ClassifiedEvent, EventTime, RawEvent

logger = logging.getLogger(__name__)


def to_local_naive(value: datetime, tz_name: str = LOCAL_TIMEZONE) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def parse_timestamp(value: str, tz_name: str = LOCAL_TIMEZONE) -> datetime:
    """Parse an ISO 8601 timestamp (with optional 'Z') into naive local time."""
    return to_local_naive(datetime.fromisoformat(value.replace("Z", "+00:00")), tz_name)


def _parse_event_time(block: EventTime, tz_name: str) -> tuple[datetime, bool]:
    """Return (local datetime, is_all_day) for a start/end block."""
    if block.get("dateTime"):
        return parse_timestamp(block["dateTime"], tz_name), False
    if block.get("date"):
        return datetime.combine(date.fromisoformat(block["date"]), time.min), True
    raise ValueError("Event time has neither 'dateTime' nor 'date'")


def parse_raw_event(
    payload: CalendarPayload, calendar_id: str, tz_name: str = LOCAL_TIMEZONE
) -> RawEvent:
    """
    Parse a provider event into a RawEvent.

    All-day events run from midnight of start.date to midnight of the
    (exclusive) end.date.

    Raises:
        ValueError: if start or end is missing or unparseable
    """
    start, all_day = _parse_event_time(payload.get("start") or {}, tz_name)
    end, _ = _parse_event_time(payload.get("end") or {}, tz_name)

    if end < start:
        raise ValueError(f"Event {payload.get('id', '?')} ends before it starts")

    return RawEvent(
        id=str(payload.get("id", "")),
        calendar_id=calendar_id,
        title=(payload.get("summary") or "").strip() or UNTITLED_EVENT_TITLE,
        start=start,
        end=end,
        location=payload.get("location") or None,
        all_day=all_day,
        status=payload.get("status") or "confirmed",
    )


def parse_calendar_events(
    payloads: list[CalendarPayload],
    calendar_id: str,
    skip_cancelled: bool = True,
    tz_name: str = LOCAL_TIMEZONE,
) -> list[ClassifiedEvent]:
    """
    Parse and classify a batch of provider events.

    Unparseable events are skipped with a warning so one bad entry doesn't
    drop the whole calendar.
    """
    raw_events = []
    for payload in payloads:
        if skip_cancelled and payload.get("status") == "cancelled":
            continue
        try:
            raw = parse_raw_event(payload, calendar_id, tz_name)
        except ValueError as e:
            logger.warning("Skipping event %s: %s", payload.get("id", "?"), e)
            continue
        raw_events.append(raw)
    return classify_events(raw_events)
