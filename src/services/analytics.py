"""
Analytics roll-ups over classified events: service mix, top clients,
weekday averages and weekly totals.

Every figure here counts work events by their start and caps each event at
ANALYTICS_MAX_EVENT_MINUTES, so a week-long housesit doesn't drown out the
visits around it. The daily workload figures in services.workload are the
clamped, per-day numbers; these are for spotting patterns.
"""

from datetime import date, timedelta

from core.classification import service_type_label
from core.config import ANALYTICS_MAX_EVENT_MINUTES, TOP_CLIENTS_LIMIT, WEEK_STARTS_ON
from core.intervals import each_day
from models.events import ClassifiedEvent, ServiceType
from models.workload import (
    DEFAULT_THRESHOLDS,
    ClientStats,
    DayOfWeekStats,
    ServiceBreakdown,
    WeeklyStats,
    WorkloadThresholds,
)
from services.workload import filter_work_events, get_period_range, get_workload_level, starts_in

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def capped_minutes(event: ClassifiedEvent) -> float:
    return min(event.duration_minutes, ANALYTICS_MAX_EVENT_MINUTES)


def _work_events_starting(
    events: list[ClassifiedEvent], start_date: date, end_date: date
) -> list[ClassifiedEvent]:
    return [e for e in filter_work_events(events) if starts_in(e, start_date, end_date)]


def calculate_service_breakdown(events: list[ClassifiedEvent]) -> list[ServiceBreakdown]:
    """
    Count and minutes per service type, most frequent first.

    Work events without service info are grouped under "Other". Percentages
    are shares of the work-event count and add up to 100.
    """
    work_events = filter_work_events(events)
    counts: dict[ServiceType, int] = {}
    minutes: dict[ServiceType, float] = {}

    for event in work_events:
        service_type = event.service_info.type if event.service_info else ServiceType.OTHER
        counts[service_type] = counts.get(service_type, 0) + 1
        minutes[service_type] = minutes.get(service_type, 0.0) + capped_minutes(event)

    total = len(work_events) or 1
    breakdown = [
        ServiceBreakdown(
            service_type=service_type,
            label=service_type_label(service_type),
            count=count,
            minutes=minutes[service_type],
            percentage=count / total * 100,
        )
        for service_type, count in counts.items()
    ]
    return sorted(breakdown, key=lambda b: b.count, reverse=True)


def calculate_top_clients(
    events: list[ClassifiedEvent], limit: int = TOP_CLIENTS_LIMIT
) -> list[ClientStats]:
    """Clients by visit count; ties keep first-seen order."""
    visits: dict[str, int] = {}
    minutes: dict[str, float] = {}

    for event in filter_work_events(events):
        if not event.client_name:
            continue
        visits[event.client_name] = visits.get(event.client_name, 0) + 1
        minutes[event.client_name] = minutes.get(event.client_name, 0.0) + capped_minutes(event)

    stats = [ClientStats(name, visits[name], minutes[name]) for name in visits]
    return sorted(stats, key=lambda s: s.visit_count, reverse=True)[:limit]


def calculate_day_of_week_stats(
    events: list[ClassifiedEvent],
    start_date: date,
    end_date: date,
    week_starts_on: int = WEEK_STARTS_ON,
) -> list[DayOfWeekStats]:
    """
    Average minutes and visits per weekday over [start_date, end_date].

    Each weekday's totals are divided by how many times that weekday occurs
    in the range; weekdays that don't occur average 0. Rows run from
    `week_starts_on` through the following six days.
    """
    day_counts = [0] * 7
    for day in each_day(start_date, end_date):
        day_counts[day.weekday()] += 1

    total_minutes = [0.0] * 7
    total_events = [0] * 7
    for event in _work_events_starting(events, start_date, end_date):
        weekday = event.start.weekday()
        total_minutes[weekday] += capped_minutes(event)
        total_events[weekday] += 1

    stats = []
    for offset in range(7):
        weekday = (week_starts_on + offset) % 7
        occurrences = day_counts[weekday]
        stats.append(
            DayOfWeekStats(
                day=DAY_NAMES[weekday],
                weekday=weekday,
                average_minutes=total_minutes[weekday] / occurrences if occurrences else 0.0,
                average_events=total_events[weekday] / occurrences if occurrences else 0.0,
            )
        )
    return stats


def calculate_weekly_stats(
    events: list[ClassifiedEvent],
    start_date: date,
    end_date: date,
    thresholds: WorkloadThresholds = DEFAULT_THRESHOLDS,
    week_starts_on: int = WEEK_STARTS_ON,
) -> list[WeeklyStats]:
    """
    One entry per calendar week touching [start_date, end_date].

    Weeks are whole weeks, so the first and last may extend past the range.
    Levels use the weekly thresholds.
    """
    week_start, _ = get_period_range("weekly", start_date, week_starts_on)
    stats = []

    while week_start <= end_date:
        week_end = week_start + timedelta(days=6)
        week_events = _work_events_starting(events, week_start, week_end)
        total_minutes = sum(capped_minutes(e) for e in week_events)

        stats.append(
            WeeklyStats(
                week_start=week_start,
                week_end=week_end,
                total_minutes=total_minutes,
                event_count=len(week_events),
                level=get_workload_level(total_minutes / 60, "weekly", thresholds),
            )
        )
        week_start += timedelta(days=7)

    return stats
