"""Telemetry: system logging and aggregation audit logging."""
