"""Shared helpers used across layers: telemetry and small utilities."""
