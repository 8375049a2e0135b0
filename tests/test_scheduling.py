"""Tests for multi-event generation and conflict detection."""

from datetime import date, datetime, timedelta

import pytest

from conftest import personal_event, work_event
from models.events import ServiceType
from models.scheduling import (
    DEFAULT_TEMPLATES,
    BookingType,
    DropinConfig,
    GeneratedEvent,
    MultiEventConfig,
    OvernightConfig,
    Template,
    VisitSlot,
)
from services.scheduling import detect_conflicts, generate_events

FRIDAY = date(2025, 11, 7)
SATURDAY = date(2025, 11, 8)


def duration(event) -> timedelta:
    return event.end - event.start


class TestDailyVisits:
    def test_weekday_and_weekend_slots(self):
        config = MultiEventConfig(
            client_name="Bella",
            start_date=FRIDAY,
            end_date=SATURDAY,
            visits=[VisitSlot("visit-30", "09:00")],
            weekend_visits=[VisitSlot("walk-45", "10:00")],
        )
        events = generate_events(config, DEFAULT_TEMPLATES)

        assert len(events) == 2
        assert duration(events[0]) == timedelta(minutes=30)
        assert duration(events[1]) == timedelta(minutes=45)
        assert events[0].start == datetime(2025, 11, 7, 9, 0)
        assert events[1].start == datetime(2025, 11, 8, 10, 0)

    def test_weekday_slots_used_on_weekend_without_override(self):
        config = MultiEventConfig(
            client_name="Bella",
            start_date=FRIDAY,
            end_date=SATURDAY,
            visits=[VisitSlot("visit-30", "09:00"), VisitSlot("visit-30", "17:00")],
        )
        assert len(generate_events(config, DEFAULT_TEMPLATES)) == 4

    def test_slot_duration_overrides_template(self):
        config = MultiEventConfig(
            client_name="Bella",
            start_date=FRIDAY,
            end_date=FRIDAY,
            visits=[VisitSlot("visit-30", "09:00", duration_minutes=20)],
        )
        [event] = generate_events(config, DEFAULT_TEMPLATES)
        assert duration(event) == timedelta(minutes=20)
        assert event.title == "30-Minute Visit - Bella"
        assert event.template_id == "visit-30"

    def test_zero_duration_falls_back_to_default(self):
        templates = [Template("custom", "Custom Visit", ServiceType.DROP_IN, 0)]
        config = MultiEventConfig(
            client_name="Bella",
            start_date=FRIDAY,
            end_date=FRIDAY,
            visits=[VisitSlot("custom", "09:00")],
        )
        [event] = generate_events(config, templates)
        assert duration(event) == timedelta(minutes=30)


class TestOvernightStay:
    def test_overnight_span(self):
        config = MultiEventConfig(
            client_name="Luna",
            start_date=FRIDAY,
            end_date=SATURDAY,
            booking_type=BookingType.OVERNIGHT_STAY,
            overnight_config=OvernightConfig("overnight", "18:00", "08:00"),
        )
        [event] = generate_events(config, DEFAULT_TEMPLATES)
        assert duration(event) == timedelta(hours=14)
        assert event.start == datetime(2025, 11, 7, 18, 0)

    def test_same_day_dates_roll_to_next_morning(self):
        config = MultiEventConfig(
            client_name="Luna",
            start_date=FRIDAY,
            end_date=FRIDAY,
            booking_type=BookingType.OVERNIGHT_STAY,
            overnight_config=OvernightConfig("overnight", "18:00", "08:00"),
        )
        [event] = generate_events(config, DEFAULT_TEMPLATES)
        assert event.end == datetime(2025, 11, 8, 8, 0)

    def test_daily_dropins(self):
        config = MultiEventConfig(
            client_name="Luna",
            start_date=FRIDAY,
            end_date=date(2025, 11, 9),
            booking_type=BookingType.OVERNIGHT_STAY,
            overnight_config=OvernightConfig("overnight", "18:00", "08:00"),
            dropin_config=DropinConfig("dropin-15", "13:00"),
        )
        events = generate_events(config, DEFAULT_TEMPLATES)
        assert len(events) == 4
        assert [e.template_id for e in events[1:]] == ["dropin-15"] * 3
        assert all(duration(e) == timedelta(minutes=15) for e in events[1:])


class TestInvalidConfig:
    def test_errors_raised_together(self):
        config = MultiEventConfig(client_name="", start_date=SATURDAY, end_date=FRIDAY)
        with pytest.raises(ValueError) as exc_info:
            generate_events(config, DEFAULT_TEMPLATES)

        lines = str(exc_info.value).split("\n")
        assert "Client name is required" in lines
        assert "Start date must be on or before end date" in lines
        assert "At least one visit slot is required" in lines

    def test_unknown_template(self):
        config = MultiEventConfig(
            client_name="Bella",
            start_date=FRIDAY,
            end_date=FRIDAY,
            visits=[VisitSlot("visit-90", "09:00")],
        )
        with pytest.raises(ValueError, match="Unknown template 'visit-90'"):
            generate_events(config, DEFAULT_TEMPLATES)


class TestConflicts:
    def test_overlap_detected(self):
        existing = [work_event(datetime(2025, 11, 7, 9, 15), 30)]
        generated = [GeneratedEvent("Visit - Bella", datetime(2025, 11, 7, 9), datetime(2025, 11, 7, 9, 30))]
        assert detect_conflicts(existing, generated) == generated

    def test_back_to_back_is_not_conflict(self):
        existing = [work_event(datetime(2025, 11, 7, 9, 30), 30)]
        generated = [GeneratedEvent("Visit - Bella", datetime(2025, 11, 7, 9), datetime(2025, 11, 7, 9, 30))]
        assert detect_conflicts(existing, generated) == []

    def test_symmetric(self):
        a = GeneratedEvent("A", datetime(2025, 11, 7, 9), datetime(2025, 11, 7, 10))
        b = GeneratedEvent("B", datetime(2025, 11, 7, 9, 45), datetime(2025, 11, 7, 11))
        assert bool(detect_conflicts([a], [b])) == bool(detect_conflicts([b], [a]))

    def test_personal_events_block_too(self):
        existing = [personal_event(datetime(2025, 11, 7, 9), 60)]
        generated = [GeneratedEvent("Visit - Bella", datetime(2025, 11, 7, 9, 30), datetime(2025, 11, 7, 10))]
        assert len(detect_conflicts(existing, generated)) == 1
