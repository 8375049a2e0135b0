"""Pydantic request models for API endpoints."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from core.config import MAX_EVENTS_PER_REQUEST, MAX_VISIT_SLOTS
from models.events import CalendarPayload, ServiceType
from models.scheduling import (
    DEFAULT_TEMPLATES,
    BookingType,
    DropinConfig,
    MultiEventConfig,
    OvernightConfig,
    Template,
    VisitSlot,
)
from models.workload import (
    DEFAULT_RULES,
    DEFAULT_THRESHOLDS,
    ThresholdConfig,
    WorkloadRules,
    WorkloadThresholds,
)


class EventTimeIn(BaseModel):
    """Timed events carry dateTime, all-day events carry date."""

    dateTime: str | None = None
    date: str | None = None
    timeZone: str | None = None


class CalendarEventIn(BaseModel):
    """Calendar event in Google Calendar JSON shape."""

    id: str = ""
    summary: str | None = None
    description: str | None = None
    location: str | None = None
    status: str | None = None
    start: EventTimeIn
    end: EventTimeIn

    def to_payload(self) -> CalendarPayload:
        return self.model_dump(exclude_none=True)


# =============================================================================
# SETTINGS
# =============================================================================


class ThresholdConfigIn(BaseModel):
    comfortable: float
    busy: float
    high: float

    def to_domain(self) -> ThresholdConfig:
        return ThresholdConfig(self.comfortable, self.busy, self.high)


def _threshold_default(period: str):
    config = DEFAULT_THRESHOLDS.for_period(period)
    return lambda: ThresholdConfigIn(comfortable=config.comfortable, busy=config.busy, high=config.high)


class ThresholdsIn(BaseModel):
    daily: ThresholdConfigIn = Field(default_factory=_threshold_default("daily"))
    weekly: ThresholdConfigIn = Field(default_factory=_threshold_default("weekly"))
    monthly: ThresholdConfigIn = Field(default_factory=_threshold_default("monthly"))

    def to_domain(self) -> WorkloadThresholds:
        return WorkloadThresholds(
            daily=self.daily.to_domain(),
            weekly=self.weekly.to_domain(),
            monthly=self.monthly.to_domain(),
        )


class RulesIn(BaseModel):
    max_visits_per_day: int = DEFAULT_RULES.max_visits_per_day
    max_hours_per_day: float = DEFAULT_RULES.max_hours_per_day
    max_hours_per_week: float = DEFAULT_RULES.max_hours_per_week
    max_consecutive_busy_days: int = DEFAULT_RULES.max_consecutive_busy_days
    min_break_minutes: int = DEFAULT_RULES.min_break_minutes
    warn_on_weekend_work: bool = DEFAULT_RULES.warn_on_weekend_work

    def to_domain(self) -> WorkloadRules:
        return WorkloadRules(**self.model_dump())


# =============================================================================
# WORKLOAD REQUESTS
# =============================================================================


class EventsRequest(BaseModel):
    calendar_id: str = "primary"
    events: list[CalendarEventIn] = Field(default_factory=list, max_length=MAX_EVENTS_PER_REQUEST)

    def payloads(self) -> list[CalendarPayload]:
        return [event.to_payload() for event in self.events]


class DateRangeRequest(EventsRequest):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date")
        return self


class MetricsRequest(DateRangeRequest):
    thresholds: ThresholdsIn = Field(default_factory=ThresholdsIn)
    include_travel_time: bool | None = None
    travel_minutes_per_leg: int | None = Field(default=None, ge=0)
    period: Literal["daily", "weekly", "monthly"] = "monthly"


class EvaluateRequest(DateRangeRequest):
    rules: RulesIn = Field(default_factory=RulesIn)
    thresholds: ThresholdsIn = Field(default_factory=ThresholdsIn)
    today: date | None = None  # week for the weekly limit; defaults to current date


class CheckRequest(EventsRequest):
    candidate: CalendarEventIn
    rules: RulesIn = Field(default_factory=RulesIn)


class ReportRequest(EvaluateRequest):
    include_travel_time: bool | None = None


# =============================================================================
# SCHEDULING
# =============================================================================


class TemplateIn(BaseModel):
    id: str
    name: str
    type: ServiceType
    duration_minutes: int = Field(ge=0)
    travel_buffer_minutes: int = 15

    def to_domain(self) -> Template:
        return Template(
            id=self.id,
            name=self.name,
            type=self.type,
            duration_minutes=self.duration_minutes,
            travel_buffer_minutes=self.travel_buffer_minutes,
        )


class VisitSlotIn(BaseModel):
    template_id: str
    time: str
    duration_minutes: int = 0

    def to_domain(self) -> VisitSlot:
        return VisitSlot(self.template_id, self.time, self.duration_minutes)


class OvernightConfigIn(BaseModel):
    template_id: str
    arrival_time: str
    departure_time: str


class DropinConfigIn(BaseModel):
    template_id: str
    time: str
    duration_minutes: int = 0


class ScheduleRequest(BaseModel):
    """
    Booking to expand into events.

    Field validation is left to the generator so every problem is reported
    together in one 422.
    """

    client_name: str
    start_date: date
    end_date: date
    booking_type: BookingType = BookingType.DAILY_VISITS
    location: str = ""
    visits: list[VisitSlotIn] = Field(default_factory=list, max_length=MAX_VISIT_SLOTS)
    weekend_visits: list[VisitSlotIn] | None = None
    overnight_config: OvernightConfigIn | None = None
    dropin_config: DropinConfigIn | None = None
    templates: list[TemplateIn] | None = None
    calendar_id: str = "primary"
    existing_events: list[CalendarEventIn] = Field(default_factory=list, max_length=MAX_EVENTS_PER_REQUEST)

    def to_domain(self) -> MultiEventConfig:
        overnight = None
        if self.overnight_config:
            overnight = OvernightConfig(**self.overnight_config.model_dump())
        dropin = None
        if self.dropin_config:
            dropin = DropinConfig(**self.dropin_config.model_dump())

        return MultiEventConfig(
            client_name=self.client_name,
            start_date=self.start_date,
            end_date=self.end_date,
            booking_type=self.booking_type,
            location=self.location,
            visits=[slot.to_domain() for slot in self.visits],
            weekend_visits=[slot.to_domain() for slot in self.weekend_visits] if self.weekend_visits else None,
            overnight_config=overnight,
            dropin_config=dropin,
        )

    def template_registry(self) -> list[Template]:
        if self.templates is None:
            return list(DEFAULT_TEMPLATES)
        return [template.to_domain() for template in self.templates]

    def existing_payloads(self) -> list[CalendarPayload]:
        return [event.to_payload() for event in self.existing_events]
