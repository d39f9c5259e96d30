"""Prometheus-backed MetricsService implementation.

Owns the shared CollectorRegistry, the HTTP metrics adapter, the renderer
and the optional sidecar server behind a single object, built once at
startup and handed to the middlewares.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry

from httpmetrics.adapters.http_metrics import PrometheusHttpMetrics
from httpmetrics.adapters.metrics_renderer import PrometheusMetricsRenderer
from httpmetrics.core.protocols.http_metrics import HttpMetrics
from httpmetrics.core.protocols.metrics_renderer import MetricsRenderer

if TYPE_CHECKING:
    from httpmetrics.api.metrics_server import ApiMetricsServer


class PrometheusMetricsService:
    """Prometheus-backed facade over the metrics adapters and the sidecar server.

    Satisfies the ``MetricsService`` protocol structurally.
    """

    http: HttpMetrics
    renderer: MetricsRenderer

    def __init__(
        self,
        http: HttpMetrics,
        renderer: MetricsRenderer,
        metrics_path: str = "/metrics",
    ) -> None:
        self.http = http
        self.renderer = renderer
        self._metrics_path = metrics_path
        self._server: ApiMetricsServer | None = None

    @classmethod
    def create(
        cls,
        namespace: str,
        registry: CollectorRegistry | None = None,
        metrics_path: str = "/metrics",
    ) -> PrometheusMetricsService:
        """Build the registry and every adapter that shares it.

        Raises:
            MetricsRegistrationError: If an instrument name is already taken
                in ``registry``.
        """
        registry = registry or CollectorRegistry()
        return cls(
            http=PrometheusHttpMetrics(namespace=namespace, registry=registry),
            renderer=PrometheusMetricsRenderer(registry),
            metrics_path=metrics_path,
        )

    async def start(self, *, host: str, port: int) -> None:
        """Start the sidecar metrics server."""
        from httpmetrics.api.metrics_server import ApiMetricsServer

        self._server = ApiMetricsServer(self.renderer, port, host, path=self._metrics_path)
        await self._server.start()

    async def stop(self) -> None:
        """Stop the sidecar metrics server if it is running."""
        if self._server:
            await self._server.stop()
            self._server = None
