"""Pydantic response models for API endpoints."""

from datetime import date, datetime

from pydantic import BaseModel

from models.events import ClassifiedEvent
from models.scheduling import GeneratedEvent
from models.workload import BurnoutRisk, DailyMetric, OptionalDate, RuleViolation


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy"
    version: str
    database_available: bool
    timestamp: str  # ISO 8601 UTC


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TOO_MANY_EVENTS = "TOO_MANY_EVENTS"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceInfoOut(BaseModel):
    type: str
    duration_minutes: int
    pet_name: str | None = None


class ClassifiedEventOut(BaseModel):
    id: str
    calendar_id: str
    title: str
    start: datetime  # local time, no offset
    end: datetime
    location: str | None = None
    all_day: bool
    is_work_event: bool
    is_overnight_event: bool
    client_name: str | None = None
    service_info: ServiceInfoOut | None = None

    @classmethod
    def from_domain(cls, event: ClassifiedEvent) -> "ClassifiedEventOut":
        service = None
        if event.service_info:
            service = ServiceInfoOut(
                type=event.service_info.type.value,
                duration_minutes=event.service_info.duration_minutes,
                pet_name=event.service_info.pet_name,
            )
        return cls(
            id=event.id,
            calendar_id=event.calendar_id,
            title=event.title,
            start=event.start,
            end=event.end,
            location=event.location,
            all_day=event.all_day,
            is_work_event=event.is_work_event,
            is_overnight_event=event.is_overnight_event,
            client_name=event.client_name,
            service_info=service,
        )


class ClassifyResponse(BaseModel):
    events: list[ClassifiedEventOut]
    work_event_count: int


class DailyMetricOut(BaseModel):
    date: date
    work_hours: float
    travel_hours: float
    total_hours: float
    event_count: int
    level: str

    @classmethod
    def from_domain(cls, metric: DailyMetric) -> "DailyMetricOut":
        return cls(
            date=metric.date,
            work_hours=round(metric.work_minutes / 60, 2),
            travel_hours=round(metric.travel_minutes / 60, 2),
            total_hours=round(metric.total_hours, 2),
            event_count=metric.event_count,
            level=metric.level.value,
        )


class MetricsResponse(BaseModel):
    """Period totals plus one entry per day."""

    start_date: date
    end_date: date
    total_visits: int
    total_hours: float
    unique_clients: int
    level: str
    daily: list[DailyMetricOut]


class RuleViolationOut(BaseModel):
    type: str
    severity: str
    title: str
    description: str
    metric: float
    threshold: float
    date: OptionalDate = None
    recommendation: str | None = None

    @classmethod
    def from_domain(cls, violation: RuleViolation) -> "RuleViolationOut":
        return cls(
            type=violation.type.value,
            severity=violation.severity.value,
            title=violation.title,
            description=violation.description,
            metric=round(violation.metric, 2),
            threshold=violation.threshold,
            date=violation.date,
            recommendation=violation.recommendation,
        )


class BurnoutRiskResponse(BaseModel):
    level: str
    score: int
    factors: list[str]
    violations: list[RuleViolationOut]

    @classmethod
    def from_domain(cls, risk: BurnoutRisk) -> "BurnoutRiskResponse":
        return cls(
            level=risk.level.value,
            score=risk.score,
            factors=list(risk.factors),
            violations=[RuleViolationOut.from_domain(v) for v in risk.violations],
        )


class CheckResponse(BaseModel):
    """Result of testing a candidate booking against the rules."""

    would_violate: bool
    violations: list[RuleViolationOut]


class GeneratedEventOut(BaseModel):
    title: str
    start: datetime
    end: datetime
    template_id: str | None = None

    @classmethod
    def from_domain(cls, event: GeneratedEvent) -> "GeneratedEventOut":
        return cls(title=event.title, start=event.start, end=event.end, template_id=event.template_id)


class ScheduleResponse(BaseModel):
    events: list[GeneratedEventOut]
    conflicts: list[GeneratedEventOut]
