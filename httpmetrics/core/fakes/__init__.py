"""Fakes for core services."""

from httpmetrics.core.fakes.metrics_service import FakeMetricsService

__all__ = ["FakeMetricsService"]
