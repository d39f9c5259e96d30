"""HTTP metrics adapters."""

from httpmetrics.adapters.http_metrics.fake import FakeHttpMetrics
from httpmetrics.adapters.http_metrics.prometheus import PrometheusHttpMetrics

__all__ = ["PrometheusHttpMetrics", "FakeHttpMetrics"]
