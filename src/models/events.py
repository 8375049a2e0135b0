"""
Data models for calendar events.

Provider payloads are described with TypedDict; everything the engine works
on is a frozen dataclass so derived fields can't drift from the raw title.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TypedDict


class EventTime(TypedDict, total=False):
    """Start/end block of a provider event (timed or all-day)."""
    dateTime: str
    date: str
    timeZone: str


class CalendarPayload(TypedDict, total=False):
    """Raw event as supplied by the calendar provider."""
    id: str
    summary: str
    description: str
    location: str
    status: str
    start: EventTime
    end: EventTime


class ServiceType(str, Enum):
    """Pet-sitting service kinds inferred from event titles."""

    DROP_IN = "drop-in"
    WALK = "walk"
    OVERNIGHT = "overnight"
    HOUSESIT = "housesit"
    MEET_GREET = "meet-greet"
    NAIL_TRIM = "nail-trim"
    OTHER = "other"


@dataclass(frozen=True)
class ServiceInfo:
    """Service metadata extracted from a work event title."""

    type: ServiceType
    duration_minutes: int
    pet_name: str | None = None


@dataclass(frozen=True)
class RawEvent:
    """Calendar event as fetched; immutable."""

    id: str
    calendar_id: str
    title: str
    start: datetime
    end: datetime
    location: str | None = None
    all_day: bool = False
    status: str = "confirmed"

    @property
    def duration_minutes(self) -> float:
        return max(0.0, (self.end - self.start).total_seconds() / 60)


@dataclass(frozen=True)
class ClassifiedEvent(RawEvent):
    """RawEvent plus fields derived from its title and span."""

    is_work_event: bool = False
    is_overnight_event: bool = False
    client_name: str | None = None
    service_info: ServiceInfo | None = field(default=None)
