"""
Data models for templates and multi-event booking generation.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from models.events import ServiceType


class BookingType(str, Enum):
    DAILY_VISITS = "daily-visits"
    OVERNIGHT_STAY = "overnight-stay"


@dataclass(frozen=True)
class Template:
    """Appointment template from the template registry."""

    id: str
    name: str
    type: ServiceType
    duration_minutes: int
    travel_buffer_minutes: int = 15


@dataclass(frozen=True)
class VisitSlot:
    template_id: str
    time: str  # HH:MM
    duration_minutes: int = 0  # 0 = template default


@dataclass(frozen=True)
class OvernightConfig:
    template_id: str
    arrival_time: str  # HH:MM
    departure_time: str  # HH:MM


@dataclass(frozen=True)
class DropinConfig:
    template_id: str
    time: str  # HH:MM
    duration_minutes: int = 0


@dataclass
class MultiEventConfig:
    """Booking request expanded into individual calendar events."""

    client_name: str
    start_date: date
    end_date: date
    booking_type: BookingType = BookingType.DAILY_VISITS
    location: str = ""
    visits: list[VisitSlot] = field(default_factory=list)
    weekend_visits: list[VisitSlot] | None = None
    overnight_config: OvernightConfig | None = None
    dropin_config: DropinConfig | None = None


@dataclass(frozen=True)
class GeneratedEvent:
    """Candidate event; not on any calendar until the caller accepts it."""

    title: str
    start: datetime
    end: datetime
    template_id: str | None = None


DEFAULT_TEMPLATES = (
    Template("dropin-15", "15-Minute Drop-In", ServiceType.DROP_IN, 15),
    Template("visit-30", "30-Minute Visit", ServiceType.DROP_IN, 30),
    Template("walk-45", "45-Minute Walk", ServiceType.WALK, 45),
    Template("visit-60", "60-Minute Visit", ServiceType.DROP_IN, 60),
    Template("overnight", "Overnight Stay", ServiceType.OVERNIGHT, 720),
    Template("housesit", "Housesit", ServiceType.HOUSESIT, 1440),
    Template("meet-greet", "Meet & Greet", ServiceType.MEET_GREET, 30),
    Template("nail-trim", "Nail Trim", ServiceType.NAIL_TRIM, 15),
)
