"""Metrics renderer adapters."""

from httpmetrics.adapters.metrics_renderer.fake import FakeMetricsRenderer
from httpmetrics.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer

__all__ = ["PrometheusMetricsRenderer", "FakeMetricsRenderer"]
