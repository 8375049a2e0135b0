"""Tests for analytics roll-ups."""

from datetime import date, datetime

import pytest

from conftest import classified, personal_event, work_event
from models.events import ServiceType
from models.workload import WorkloadLevel
from services.analytics import (
    calculate_day_of_week_stats,
    calculate_service_breakdown,
    calculate_top_clients,
    calculate_weekly_stats,
    capped_minutes,
)

SUNDAY = date(2025, 11, 2)
MONDAY = date(2025, 11, 3)


def test_capped_minutes():
    assert capped_minutes(work_event(datetime(2025, 11, 3, 9), 45)) == 45
    assert capped_minutes(work_event(datetime(2025, 11, 3, 18), 3 * 24 * 60, overnight=True)) == 720


class TestServiceBreakdown:
    def test_counts_minutes_and_shares(self):
        events = [
            classified("Bella - walk 45", datetime(2025, 11, 3, 9), datetime(2025, 11, 3, 9, 45)),
            classified("Max - 30", datetime(2025, 11, 3, 11), datetime(2025, 11, 3, 11, 30)),
            classified("Luna - 30", datetime(2025, 11, 3, 13), datetime(2025, 11, 3, 13, 30)),
            classified("Luna - ON", datetime(2025, 11, 3, 20), datetime(2025, 11, 5, 8)),
            personal_event(datetime(2025, 11, 3, 12), 60),
        ]
        breakdown = calculate_service_breakdown(events)

        assert [b.service_type for b in breakdown][0] == ServiceType.DROP_IN
        by_type = {b.service_type: b for b in breakdown}
        assert by_type[ServiceType.DROP_IN].count == 2
        assert by_type[ServiceType.DROP_IN].minutes == 60
        assert by_type[ServiceType.WALK].label == "Walk"
        assert by_type[ServiceType.OVERNIGHT].minutes == 720
        assert sum(b.percentage for b in breakdown) == pytest.approx(100)
        assert by_type[ServiceType.DROP_IN].percentage == pytest.approx(50)

    def test_no_work_events(self):
        assert calculate_service_breakdown([personal_event(datetime(2025, 11, 3, 12), 60)]) == []


class TestTopClients:
    def test_sorted_by_visits(self):
        events = [
            work_event(datetime(2025, 11, 3, 9), 30, client="Bella"),
            work_event(datetime(2025, 11, 3, 11), 30, client="Max"),
            work_event(datetime(2025, 11, 4, 11), 30, client="Max"),
            work_event(datetime(2025, 11, 4, 18), 24 * 60, client="Luna", overnight=True),
        ]
        clients = calculate_top_clients(events)

        assert [c.name for c in clients] == ["Max", "Bella", "Luna"]
        assert clients[0].visit_count == 2
        assert clients[0].total_minutes == 60
        assert clients[2].total_minutes == 720

    def test_limit(self):
        events = [work_event(datetime(2025, 11, 3, 7 + i), 30, client=f"Client{i}") for i in range(5)]
        assert len(calculate_top_clients(events, limit=3)) == 3


class TestDayOfWeek:
    def test_averaged_over_occurrences(self):
        # Nov 3 - Nov 16: two Mondays, one with two visits
        events = [
            work_event(datetime(2025, 11, 3, 9), 60),
            work_event(datetime(2025, 11, 3, 11), 60),
            work_event(datetime(2025, 11, 10, 9), 60),
            work_event(datetime(2025, 11, 20, 9), 60),  # outside range
        ]
        stats = calculate_day_of_week_stats(events, MONDAY, date(2025, 11, 16), week_starts_on=6)

        assert [s.day for s in stats] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        monday = stats[1]
        assert monday.weekday == 0
        assert monday.average_minutes == 90
        assert monday.average_events == 1.5
        assert stats[4].average_events == 0

    def test_weekday_not_in_range(self):
        stats = calculate_day_of_week_stats([], MONDAY, MONDAY, week_starts_on=0)
        assert stats[0].day == "Mon"
        assert all(s.average_minutes == 0 for s in stats)


class TestWeeklyStats:
    def test_whole_weeks_covering_range(self):
        events = [
            work_event(datetime(2025, 11, 3, 9), 60),
            work_event(datetime(2025, 11, 9, 9), 30 * 60, overnight=True),  # capped to 12h
        ]
        weeks = calculate_weekly_stats(events, MONDAY, date(2025, 11, 12), week_starts_on=6)

        assert [(w.week_start, w.week_end) for w in weeks] == [
            (SUNDAY, date(2025, 11, 8)),
            (date(2025, 11, 9), date(2025, 11, 15)),
        ]
        assert weeks[0].total_hours == 1
        assert weeks[0].event_count == 1
        assert weeks[1].total_hours == 12
        assert weeks[0].level == WorkloadLevel.COMFORTABLE

    def test_weekly_threshold_level(self):
        events = [work_event(datetime(2025, 11, 3 + d, 8), 8 * 60) for d in range(5)]
        [week] = calculate_weekly_stats(events, MONDAY, date(2025, 11, 7), week_starts_on=0)
        assert week.total_hours == 40
        assert week.level == WorkloadLevel.HIGH
