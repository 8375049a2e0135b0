"""Workload, rules, scheduling, calendar parsing and report services."""
