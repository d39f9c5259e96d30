"""Prometheus-backed MetricsRenderer.

Serializes one shared CollectorRegistry.  Scrapers that ask for OpenMetrics
get it; everyone else gets the classic text exposition format.
"""

from typing import Optional

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from prometheus_client.exposition import choose_encoder

from httpmetrics.core.protocols.metrics_renderer import MetricsRenderer


class PrometheusMetricsRenderer(MetricsRenderer):
    """Render the instruments registered on ``registry``."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self._registry = registry

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST

    def generate(self) -> bytes:
        return generate_latest(self._registry)

    def render(self, accept: Optional[str] = None) -> tuple[bytes, str]:
        if not accept or "application/openmetrics-text" not in accept:
            return self.generate(), self.content_type
        encoder, content_type = choose_encoder(accept)
        return encoder(self._registry), content_type
