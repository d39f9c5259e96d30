"""Core protocols for dependency injection."""

from httpmetrics.core.protocols.http_metrics import HttpMetrics
from httpmetrics.core.protocols.metrics_renderer import MetricsRenderer
from httpmetrics.core.protocols.metrics_service import MetricsService

__all__ = [
    "HttpMetrics",
    "MetricsRenderer",
    "MetricsService",
]
