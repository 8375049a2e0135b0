"""
Workload metrics: visit counts, hours, unique clients and workload levels.
"""

import calendar
from datetime import date, datetime, timedelta

from core.config import DEFAULT_TRAVEL_MINUTES_PER_LEG, INCLUDE_TRAVEL_TIME, WEEK_STARTS_ON
from core.intervals import (
    each_day,
    event_overlaps_day,
    hours_in_range,
    minutes_for_day,
    minutes_in_range,
    range_end,
    range_start,
)
from models.events import ClassifiedEvent
from models.workload import (
    DEFAULT_THRESHOLDS,
    DailyMetric,
    Period,
    PeriodMetrics,
    ThresholdStatus,
    WorkloadLevel,
    WorkloadSummary,
    WorkloadThresholds,
)


def get_workload_level(
    hours: float, period: Period = "daily", thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS
) -> WorkloadLevel:
    """Bucket hours into a level; each bound belongs to the lower bucket."""
    config = thresholds.for_period(period)

    if hours <= config.comfortable:
        return WorkloadLevel.COMFORTABLE
    if hours <= config.busy:
        return WorkloadLevel.BUSY
    if hours <= config.high:
        return WorkloadLevel.HIGH
    return WorkloadLevel.BURNOUT


def filter_work_events(events: list[ClassifiedEvent]) -> list[ClassifiedEvent]:
    return [e for e in events if e.is_work_event]


def events_for_day(events: list[ClassifiedEvent], day: date) -> list[ClassifiedEvent]:
    return [e for e in events if event_overlaps_day(e, day)]


def starts_in(event: ClassifiedEvent, start: date | datetime, end: date | datetime) -> bool:
    if isinstance(end, datetime):
        return range_start(start) <= event.start <= end
    return range_start(start) <= event.start < range_end(end)


# =============================================================================
# PERIOD AGGREGATION
# =============================================================================


def aggregate(
    events: list[ClassifiedEvent], period_start: date | datetime, period_end: date | datetime
) -> PeriodMetrics:
    """
    Roll up work events over a period.

    Visits and clients only count events that start in the period; hours
    count the overlapping part of every work event, clamped to the period.
    """
    work_events = filter_work_events(events)

    starting = [e for e in work_events if starts_in(e, period_start, period_end)]
    total_minutes = sum(minutes_in_range(e, period_start, period_end) for e in work_events)
    clients = {e.client_name for e in starting if e.client_name}

    return PeriodMetrics(
        total_visits=len(starting),
        total_hours=total_minutes / 60,
        unique_clients=len(clients),
    )


def work_hours_in_range(
    events: list[ClassifiedEvent], start: date | datetime, end: date | datetime
) -> float:
    """Uncapped, range-clamped work hours (week/month totals)."""
    return sum(hours_in_range(e, start, end) for e in filter_work_events(events))


def work_minutes_for_day(events: list[ClassifiedEvent], day: date) -> float:
    """Per-day work minutes with the overnight cap applied."""
    return sum(minutes_for_day(e, day) for e in filter_work_events(events))


# =============================================================================
# DAILY METRICS
# =============================================================================


def estimate_travel_minutes(
    work_events: list[ClassifiedEvent], minutes_per_leg: int = DEFAULT_TRAVEL_MINUTES_PER_LEG
) -> float:
    """
    Rough travel estimate: two legs per visit, one when the previous visit
    was at the same location.
    """
    legs = 0
    previous = None
    for event in sorted(work_events, key=lambda e: e.start):
        if previous and event.location and previous.location == event.location:
            legs += 1
        else:
            legs += 2
        previous = event
    return float(legs * minutes_per_leg)


def calculate_daily_metric(
    day: date,
    events: list[ClassifiedEvent],
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
    include_travel_time: bool = INCLUDE_TRAVEL_TIME,
    travel_minutes_per_leg: int = DEFAULT_TRAVEL_MINUTES_PER_LEG,
) -> DailyMetric:
    work_events = filter_work_events(events_for_day(events, day))

    work_minutes = sum(minutes_for_day(e, day) for e in work_events)
    travel_minutes = (
        estimate_travel_minutes(work_events, travel_minutes_per_leg) if include_travel_time else 0.0
    )
    total_minutes = work_minutes + travel_minutes

    return DailyMetric(
        date=day,
        work_minutes=work_minutes,
        travel_minutes=travel_minutes,
        total_minutes=total_minutes,
        event_count=len(work_events),
        level=get_workload_level(total_minutes / 60, "daily", thresholds),
    )


def calculate_daily_metrics(
    start_date: date,
    end_date: date,
    events: list[ClassifiedEvent],
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
    include_travel_time: bool = INCLUDE_TRAVEL_TIME,
    travel_minutes_per_leg: int = DEFAULT_TRAVEL_MINUTES_PER_LEG,
) -> list[DailyMetric]:
    """One DailyMetric per calendar day in [start_date, end_date]."""
    return [
        calculate_daily_metric(day, events, thresholds, include_travel_time, travel_minutes_per_leg)
        for day in each_day(start_date, end_date)
    ]


# =============================================================================
# SUMMARIES
# =============================================================================


def get_period_range(
    period: Period, reference_date: date | None = None, week_starts_on: int = WEEK_STARTS_ON
) -> tuple[date, date]:
    """
    Calendar range containing the reference date.

    `week_starts_on` uses Python weekday numbers (Monday=0, Sunday=6).
    """
    ref = reference_date or date.today()

    if period == "daily":
        return ref, ref
    if period == "weekly":
        offset = (ref.weekday() - week_starts_on) % 7
        start = ref - timedelta(days=offset)
        return start, start + timedelta(days=6)

    _, last_day = calendar.monthrange(ref.year, ref.month)
    return ref.replace(day=1), ref.replace(day=last_day)


def get_workload_summary(
    period: Period,
    events: list[ClassifiedEvent],
    reference_date: date | None = None,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
    include_travel_time: bool = INCLUDE_TRAVEL_TIME,
    travel_minutes_per_leg: int = DEFAULT_TRAVEL_MINUTES_PER_LEG,
    week_starts_on: int = WEEK_STARTS_ON,
) -> WorkloadSummary:
    start_date, end_date = get_period_range(period, reference_date, week_starts_on)
    metrics = calculate_daily_metrics(
        start_date, end_date, events, thresholds, include_travel_time, travel_minutes_per_leg
    )

    work_minutes = sum(m.work_minutes for m in metrics)
    travel_minutes = sum(m.travel_minutes for m in metrics)
    total_hours = (work_minutes + travel_minutes) / 60

    busiest = max(metrics, key=lambda m: m.total_minutes)

    return WorkloadSummary(
        period=period,
        start_date=start_date,
        end_date=end_date,
        total_work_hours=work_minutes / 60,
        total_travel_hours=travel_minutes / 60,
        average_daily_hours=total_hours / len(metrics),
        busiest_day=busiest.date,
        busiest_day_hours=busiest.total_hours,
        level=get_workload_level(total_hours, period, thresholds),
        event_count=sum(m.event_count for m in metrics),
    )


def get_threshold_status(
    hours: float, period: Period = "daily", thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS
) -> ThresholdStatus:
    """Progress toward the `high` threshold for gauges."""
    config = thresholds.for_period(period)
    percentage = min(hours / config.high * 100, 100.0) if config.high > 0 else 100.0

    return ThresholdStatus(
        level=get_workload_level(hours, period, thresholds),
        percentage=percentage,
        remaining_hours=max(config.high - hours, 0.0),
    )


def format_hours(hours: float) -> str:
    """Format hours as '45 min', '3h' or '2h 30m'."""
    if hours < 1:
        return f"{round(hours * 60)} min"
    whole = int(hours)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if minutes == 0:
        return f"{whole}h"
    return f"{whole}h {minutes}m"
