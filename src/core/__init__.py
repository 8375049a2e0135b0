"""Workload engine core: classification, intervals, validation and configuration."""
