"""MetricsService protocol for the metrics facade.

Abstracts the facade so the wiring code depends on a protocol rather than
the concrete Prometheus-backed class.  Production uses
``PrometheusMetricsService``; tests inject ``FakeMetricsService``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from httpmetrics.core.protocols.http_metrics import HttpMetrics
from httpmetrics.core.protocols.metrics_renderer import MetricsRenderer


@runtime_checkable
class MetricsService(Protocol):
    """Protocol for the metrics facade.

    ``http`` is handed to the middlewares, ``renderer`` to whatever serves
    the scrape endpoint.
    """

    http: HttpMetrics
    renderer: MetricsRenderer

    async def start(self, *, host: str, port: int) -> None:
        """Start the metrics sidecar server."""
        ...

    async def stop(self) -> None:
        """Stop the metrics sidecar server."""
        ...
