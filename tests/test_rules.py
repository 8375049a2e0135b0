"""Tests for the workload rules engine and burnout scoring."""

from datetime import date, datetime, timedelta

import pytest

from conftest import personal_event, work_event
from models.workload import (
    BurnoutLevel,
    RuleSeverity,
    RuleViolation,
    RuleViolationType,
    WorkloadRules,
)
from services.rules import (
    assess_burnout_risk,
    burnout_level,
    check_consecutive_busy_days,
    check_day,
    check_weekend_work,
    check_weekly_limits,
    evaluate_rules,
    evaluate_workload,
    would_violate_rules,
)

RULES = WorkloadRules()
MONDAY = date(2025, 11, 3)


def visits_on(day: date, count: int, minutes: int = 30) -> list:
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=7)
    return [work_event(start + timedelta(minutes=minutes * i), minutes) for i in range(count)]


def busy_days(first: date, days: int, hours: int = 5) -> list:
    return [
        work_event(datetime.combine(first + timedelta(days=d), datetime.min.time()) + timedelta(hours=9), hours * 60)
        for d in range(days)
    ]


def violation(severity: RuleSeverity, kind=RuleViolationType.MAX_HOURS_DAY) -> RuleViolation:
    return RuleViolation(kind, severity, "t", "d", 1, 1)


class TestDailyLimits:
    def test_one_over_is_warning(self):
        violations = check_day(visits_on(MONDAY, RULES.max_visits_per_day + 1), MONDAY, RULES)
        assert [v.type for v in violations] == [RuleViolationType.MAX_VISITS_DAY]
        assert violations[0].severity == RuleSeverity.WARNING
        assert violations[0].title == "Too Many Visits"

    def test_three_over_is_critical(self):
        violations = check_day(visits_on(MONDAY, RULES.max_visits_per_day + 3), MONDAY, RULES)
        assert violations[0].severity == RuleSeverity.CRITICAL
        assert violations[0].metric == 11

    def test_at_limit_is_fine(self):
        assert check_day(visits_on(MONDAY, RULES.max_visits_per_day), MONDAY, RULES) == []

    def test_long_day(self):
        violations = check_day(visits_on(MONDAY, 1, minutes=11 * 60), MONDAY, RULES)
        assert violations[0].type == RuleViolationType.MAX_HOURS_DAY
        assert violations[0].severity == RuleSeverity.WARNING

        violations = check_day(visits_on(MONDAY, 1, minutes=13 * 60), MONDAY, RULES)
        assert violations[0].severity == RuleSeverity.CRITICAL

    def test_personal_events_not_counted(self):
        events = visits_on(MONDAY, 8) + [personal_event(datetime(2025, 11, 3, 18), 60)]
        assert check_day(events, MONDAY, RULES) == []


class TestWouldViolate:
    def test_candidate_tips_day_over(self):
        existing = visits_on(MONDAY, 8)
        candidate = work_event(datetime(2025, 11, 3, 18), 30)
        violations = would_violate_rules(existing, candidate, RULES)
        assert len(violations) == 1
        assert violations[0].date == MONDAY

    def test_candidate_on_free_day(self):
        existing = visits_on(MONDAY, 8)
        assert would_violate_rules(existing, work_event(datetime(2025, 11, 4, 9), 30), RULES) == []

    def test_overnight_checks_both_days(self):
        tuesday = MONDAY + timedelta(days=1)
        existing = visits_on(MONDAY, 8) + visits_on(tuesday, 8)
        candidate = work_event(datetime(2025, 11, 3, 20), 720, overnight=True)
        violations = would_violate_rules(existing, candidate, RULES)
        assert {v.date for v in violations} == {MONDAY, tuesday}


class TestWeeklyAndStreaks:
    def test_weekly_limit(self):
        events = busy_days(date(2025, 11, 2), 7, hours=8)  # 56h
        violations = check_weekly_limits(events, date(2025, 11, 2), date(2025, 11, 8), RULES)
        assert violations[0].type == RuleViolationType.MAX_HOURS_WEEK
        assert violations[0].severity == RuleSeverity.WARNING
        assert violations[0].date == date(2025, 11, 2)

    def test_weekly_limit_critical(self):
        events = busy_days(date(2025, 11, 2), 7, hours=9)  # 63h
        violations = check_weekly_limits(events, date(2025, 11, 2), date(2025, 11, 8), RULES)
        assert violations[0].severity == RuleSeverity.CRITICAL

    def test_streak_broken_by_rest_day(self):
        events = busy_days(MONDAY, 6) + busy_days(MONDAY + timedelta(days=7), 3)
        violations = check_consecutive_busy_days(events, MONDAY, MONDAY + timedelta(days=13), RULES)
        assert len(violations) == 1
        assert violations[0].metric == 6
        assert violations[0].date == MONDAY
        assert violations[0].severity == RuleSeverity.WARNING

    def test_open_streak_at_range_end(self):
        events = busy_days(MONDAY, 8)
        violations = check_consecutive_busy_days(events, MONDAY, MONDAY + timedelta(days=7), RULES)
        assert violations[0].metric == 8
        assert violations[0].severity == RuleSeverity.CRITICAL

    def test_streak_at_limit(self):
        events = busy_days(MONDAY, 5)
        assert check_consecutive_busy_days(events, MONDAY, MONDAY + timedelta(days=6), RULES) == []

    def test_weekend_work_is_info(self):
        saturday = date(2025, 11, 8)
        violations = check_weekend_work(busy_days(saturday, 1), saturday, saturday)
        assert violations[0].severity == RuleSeverity.INFO
        assert "Saturday" in violations[0].description
        assert check_weekend_work(busy_days(MONDAY, 1), MONDAY, MONDAY) == []


class TestEvaluate:
    def test_weekly_check_uses_week_of_today(self):
        events = busy_days(date(2025, 11, 2), 7, hours=8)
        in_week = evaluate_rules(events, date(2025, 11, 2), date(2025, 11, 8), today=date(2025, 11, 5))
        other_week = evaluate_rules(events, date(2025, 11, 2), date(2025, 11, 8), today=date(2025, 11, 20))

        assert RuleViolationType.MAX_HOURS_WEEK in {v.type for v in in_week}
        assert RuleViolationType.MAX_HOURS_WEEK not in {v.type for v in other_week}

    def test_weekend_warnings_can_be_disabled(self):
        saturday = date(2025, 11, 8)
        rules = WorkloadRules(warn_on_weekend_work=False)
        violations = evaluate_rules(busy_days(saturday, 1), saturday, saturday, rules, today=saturday)
        assert violations == []

    def test_quiet_month(self):
        risk = evaluate_workload([], date(2025, 11, 1), date(2025, 11, 30), today=date(2025, 11, 15))
        assert risk.level == BurnoutLevel.LOW
        assert risk.score == 0
        assert risk.violations == []

    def test_recomputes_every_call(self):
        events = visits_on(MONDAY, 9)
        first = evaluate_rules(events, MONDAY, MONDAY, today=MONDAY)
        second = evaluate_rules(events + visits_on(MONDAY, 2), MONDAY, MONDAY, today=MONDAY)
        assert first[0].severity == RuleSeverity.WARNING
        assert second[0].severity == RuleSeverity.CRITICAL


class TestBurnout:
    @pytest.mark.parametrize(
        "score,level",
        [(0, "low"), (29, "low"), (30, "moderate"), (50, "high"), (69, "high"), (70, "critical")],
    )
    def test_levels(self, score, level):
        assert burnout_level(score).value == level

    def test_score_components(self):
        violations = [
            violation(RuleSeverity.CRITICAL),
            violation(RuleSeverity.CRITICAL),
            violation(RuleSeverity.WARNING),
            violation(RuleSeverity.INFO),
        ]
        risk = assess_burnout_risk(violations, weekly_hours=40)
        assert risk.score == 20 + 20 + 10 + 15
        assert risk.level == BurnoutLevel.HIGH
        assert "Busy weekly schedule" in risk.factors

    def test_streak_and_high_week(self):
        violations = [violation(RuleSeverity.WARNING, RuleViolationType.CONSECUTIVE_BUSY_DAYS)]
        risk = assess_burnout_risk(violations, weekly_hours=46)
        assert risk.score == 10 + 25 + 15
        assert "Extended periods without rest" in risk.factors

    def test_several_warnings_adds_factor_only(self):
        risk = assess_burnout_risk([violation(RuleSeverity.WARNING)] * 3, weekly_hours=0)
        assert risk.score == 30
        assert "Several workload warnings" in risk.factors

    def test_capped_at_100(self):
        risk = assess_burnout_risk([violation(RuleSeverity.CRITICAL)] * 6, weekly_hours=50)
        assert risk.score == 100
        assert risk.level == BurnoutLevel.CRITICAL
