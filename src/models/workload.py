"""
Data models for workload metrics, analytics roll-ups, rule violations and
burnout risk.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Literal

from core.config import (
    DEFAULT_MAX_CONSECUTIVE_BUSY_DAYS,
    DEFAULT_MAX_HOURS_PER_DAY,
    DEFAULT_MAX_HOURS_PER_WEEK,
    DEFAULT_MAX_VISITS_PER_DAY,
    DEFAULT_MIN_BREAK_MINUTES,
    DEFAULT_THRESHOLD_HOURS,
    DEFAULT_WARN_ON_WEEKEND_WORK,
)
from models.events import ServiceType

Period = Literal["daily", "weekly", "monthly"]

# Fields named `date` shadow the type inside a class body
OptionalDate = date | None


class WorkloadLevel(str, Enum):
    """Workload tier, ordered comfortable < busy < high < burnout."""

    COMFORTABLE = "comfortable"
    BUSY = "busy"
    HIGH = "high"
    BURNOUT = "burnout"

    @property
    def rank(self) -> int:
        return list(WorkloadLevel).index(self)

    @property
    def is_busy(self) -> bool:
        """True for busy, high and burnout days."""
        return self.rank >= WorkloadLevel.BUSY.rank


class RuleViolationType(str, Enum):
    MAX_VISITS_DAY = "max-visits-day"
    MAX_HOURS_DAY = "max-hours-day"
    MAX_HOURS_WEEK = "max-hours-week"
    CONSECUTIVE_BUSY_DAYS = "consecutive-busy-days"
    NO_BREAKS = "no-breaks"
    WEEKEND_OVERWORK = "weekend-overwork"


class RuleSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class BurnoutLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ThresholdConfig:
    """Hour limits for one period; above `high` is burnout."""

    comfortable: float
    busy: float
    high: float


@dataclass(frozen=True)
class WorkloadThresholds:
    daily: ThresholdConfig
    weekly: ThresholdConfig
    monthly: ThresholdConfig

    def for_period(self, period: Period) -> ThresholdConfig:
        return getattr(self, period)


@dataclass(frozen=True)
class WorkloadRules:
    """User-configurable limits checked by the rules engine."""

    max_visits_per_day: int = DEFAULT_MAX_VISITS_PER_DAY
    max_hours_per_day: float = DEFAULT_MAX_HOURS_PER_DAY
    max_hours_per_week: float = DEFAULT_MAX_HOURS_PER_WEEK
    max_consecutive_busy_days: int = DEFAULT_MAX_CONSECUTIVE_BUSY_DAYS
    min_break_minutes: int = DEFAULT_MIN_BREAK_MINUTES
    warn_on_weekend_work: bool = DEFAULT_WARN_ON_WEEKEND_WORK


DEFAULT_THRESHOLDS = WorkloadThresholds(
    **{period: ThresholdConfig(*hours) for period, hours in DEFAULT_THRESHOLD_HOURS.items()}
)
DEFAULT_RULES = WorkloadRules()


@dataclass(frozen=True)
class DailyMetric:
    """Workload for one calendar day."""

    date: date
    work_minutes: float
    travel_minutes: float
    total_minutes: float
    event_count: int
    level: WorkloadLevel

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60


@dataclass(frozen=True)
class PeriodMetrics:
    total_visits: int
    total_hours: float
    unique_clients: int


@dataclass(frozen=True)
class WorkloadSummary:
    period: Period
    start_date: date
    end_date: date
    total_work_hours: float
    total_travel_hours: float
    average_daily_hours: float
    busiest_day: date
    busiest_day_hours: float
    level: WorkloadLevel
    event_count: int


@dataclass(frozen=True)
class ServiceBreakdown:
    """Work events of one service type; minutes are per-event capped."""

    service_type: ServiceType
    label: str
    count: int
    minutes: float
    percentage: float  # share of work events, 0-100


@dataclass(frozen=True)
class ClientStats:
    name: str
    visit_count: int
    total_minutes: float


@dataclass(frozen=True)
class DayOfWeekStats:
    """Averages per occurrence of a weekday in the range."""

    day: str  # "Mon"
    weekday: int  # Monday=0
    average_minutes: float
    average_events: float


@dataclass(frozen=True)
class WeeklyStats:
    week_start: date
    week_end: date
    total_minutes: float
    event_count: int
    level: WorkloadLevel

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60


@dataclass(frozen=True)
class ThresholdStatus:
    level: WorkloadLevel
    percentage: float  # of the `high` threshold, capped at 100
    remaining_hours: float


@dataclass(frozen=True)
class RuleViolation:
    type: RuleViolationType
    severity: RuleSeverity
    title: str
    description: str
    metric: float
    threshold: float
    date: OptionalDate = None
    recommendation: str | None = None


@dataclass(frozen=True)
class BurnoutRisk:
    """Advisory burnout assessment; not a medical or HR metric."""

    level: BurnoutLevel
    score: int
    factors: list[str] = field(default_factory=list)
    violations: list[RuleViolation] = field(default_factory=list)
