"""Tests for interval arithmetic."""

from datetime import date, datetime, timedelta

import pytest

from conftest import work_event
from core.intervals import (
    days_spanned,
    each_day,
    event_overlaps_day,
    hours_in_range,
    minutes_for_day,
    minutes_in_range,
    overlaps,
)


class TestMinutesInRange:
    def test_clamped_at_range_end(self):
        event = work_event(datetime(2026, 1, 30, 9), 3 * 24 * 60)
        hours = minutes_in_range(event, date(2026, 1, 1), date(2026, 1, 31)) / 60
        assert hours == pytest.approx(39)

    def test_clamped_at_range_start(self):
        event = work_event(datetime(2025, 12, 31, 20), 16 * 60)  # ends Jan 1 12:00
        hours = minutes_in_range(event, date(2026, 1, 1), date(2026, 1, 31)) / 60
        assert hours == pytest.approx(12)

    def test_outside_range(self):
        event = work_event(datetime(2026, 2, 5, 9), 60)
        assert minutes_in_range(event, date(2026, 1, 1), date(2026, 1, 31)) == 0

    def test_datetime_bounds(self):
        event = work_event(datetime(2026, 1, 5, 9), 120)
        assert minutes_in_range(event, datetime(2026, 1, 5, 10), datetime(2026, 1, 5, 23)) == 60

    def test_hours(self):
        event = work_event(datetime(2026, 1, 5, 9), 90)
        assert hours_in_range(event, date(2026, 1, 5), date(2026, 1, 5)) == 1.5

    def test_per_day_minutes_add_up_to_range(self):
        start, end = datetime(2026, 1, 5, 9, 17), datetime(2026, 1, 9, 1, 34)
        event = work_event(start, (end - start) // timedelta(minutes=1))
        first, last = date(2026, 1, 5), date(2026, 1, 9)

        per_day = sum(minutes_in_range(event, day, day) for day in each_day(first, last))
        assert per_day == pytest.approx(minutes_in_range(event, first, last))
        assert per_day == pytest.approx(5297)

        inner_first, inner_last = date(2026, 1, 6), date(2026, 1, 8)
        inner = sum(minutes_in_range(event, day, day) for day in each_day(inner_first, inner_last))
        assert inner == pytest.approx(minutes_in_range(event, inner_first, inner_last))
        assert inner == pytest.approx(3 * 1440)


class TestMinutesForDay:
    def test_overnight_capped(self):
        event = work_event(datetime(2026, 1, 5, 0), 24 * 60, overnight=True)
        assert minutes_for_day(event, date(2026, 1, 5)) == 720

    def test_cap_can_be_disabled(self):
        event = work_event(datetime(2026, 1, 5, 0), 24 * 60, overnight=True)
        assert minutes_for_day(event, date(2026, 1, 5), cap_overnight=False) == 1440

    def test_split_across_midnight(self):
        event = work_event(datetime(2026, 1, 5, 18), 14 * 60, overnight=True)
        assert minutes_for_day(event, date(2026, 1, 5)) == 360
        assert minutes_for_day(event, date(2026, 1, 6)) == 480


class TestOverlap:
    def test_back_to_back_do_not_overlap(self):
        assert not overlaps(datetime(2026, 1, 5, 9), datetime(2026, 1, 5, 10),
                            datetime(2026, 1, 5, 10), datetime(2026, 1, 5, 11))

    def test_symmetric(self):
        a = (datetime(2026, 1, 5, 9), datetime(2026, 1, 5, 10))
        b = (datetime(2026, 1, 5, 9, 30), datetime(2026, 1, 5, 11))
        assert overlaps(*a, *b) and overlaps(*b, *a)

    def test_event_ending_at_midnight_not_on_next_day(self):
        event = work_event(datetime(2026, 1, 5, 23), 60)
        assert event_overlaps_day(event, date(2026, 1, 5))
        assert not event_overlaps_day(event, date(2026, 1, 6))

    def test_zero_length_event(self):
        event = work_event(datetime(2026, 1, 5, 9), 0)
        assert event_overlaps_day(event, date(2026, 1, 5))


def test_days_spanned():
    event = work_event(datetime(2026, 1, 5, 18), 14 * 60)
    assert days_spanned(event) == [date(2026, 1, 5), date(2026, 1, 6)]

    all_day = work_event(datetime(2026, 1, 7), 24 * 60)
    assert days_spanned(all_day) == [date(2026, 1, 7)]
