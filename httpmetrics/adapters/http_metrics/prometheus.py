"""Prometheus implementation of the HttpMetrics protocol.

Creates its instruments on a caller-supplied CollectorRegistry (or a fresh
one) so the HTTP metrics are isolated from the default global registry.
Instrument names are prefixed with the configured namespace.
"""

from typing import Callable, TypeVar

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
)

from httpmetrics.core.exceptions import MetricsRegistrationError
from httpmetrics.core.http_status import status_class
from httpmetrics.core.logging import logger
from httpmetrics.core.protocols.http_metrics import HttpMetrics

_DURATION_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

_M = TypeVar("_M")


def exponential_buckets(start: float, factor: float, count: int) -> tuple[float, ...]:
    """Return ``count`` bucket bounds starting at ``start``, each ``factor`` times the last."""
    if count < 1:
        raise ValueError("count must be positive")
    if start <= 0:
        raise ValueError("start must be positive")
    if factor <= 1:
        raise ValueError("factor must be greater than 1")
    return tuple(start * factor**i for i in range(count))


_SIZE_BUCKETS = exponential_buckets(100, 10, 8)


class PrometheusHttpMetrics(HttpMetrics):
    """Prometheus-backed HTTP metrics collection."""

    def __init__(self, namespace: str = "", registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()
        self._namespace = namespace
        self._logger = logger.with_context(component="http_metrics", namespace=namespace or "-")

        self._requests_total = self._register(
            "http_requests_total",
            lambda: Counter(
                "http_requests_total",
                "Total HTTP requests",
                ["method", "path", "status"],
                namespace=namespace,
                registry=self._registry,
            ),
        )

        self._request_duration = self._register(
            "http_request_duration_seconds",
            lambda: Histogram(
                "http_request_duration_seconds",
                "HTTP request duration in seconds",
                ["method", "path", "status"],
                namespace=namespace,
                buckets=_DURATION_BUCKETS,
                registry=self._registry,
            ),
        )

        self._request_size = self._register(
            "http_request_size_bytes",
            lambda: Histogram(
                "http_request_size_bytes",
                "HTTP request body size in bytes",
                ["method", "path"],
                namespace=namespace,
                buckets=_SIZE_BUCKETS,
                registry=self._registry,
            ),
        )

        self._response_size = self._register(
            "http_response_size_bytes",
            lambda: Histogram(
                "http_response_size_bytes",
                "HTTP response body size in bytes",
                ["method", "path"],
                namespace=namespace,
                buckets=_SIZE_BUCKETS,
                registry=self._registry,
            ),
        )

        self._in_flight = self._register(
            "http_requests_in_flight",
            lambda: Gauge(
                "http_requests_in_flight",
                "Number of HTTP requests currently being served",
                ["method"],
                namespace=namespace,
                registry=self._registry,
            ),
        )

        self._errors_total = self._register(
            "http_errors_total",
            lambda: Counter(
                "http_errors_total",
                "Total HTTP requests that ended in an error",
                ["method", "path", "error_type"],
                namespace=namespace,
                registry=self._registry,
            ),
        )

        self._responses_by_status = self._register(
            "http_responses_by_status_total",
            lambda: Counter(
                "http_responses_by_status_total",
                "Total HTTP responses by status class and code",
                ["status_class", "status_code"],
                namespace=namespace,
                registry=self._registry,
            ),
        )

        self._logger.info("Registered HTTP metric instruments")

    def _register(self, name: str, factory: Callable[[], _M]) -> _M:
        try:
            return factory()
        except ValueError as e:
            full_name = f"{self._namespace}_{name}" if self._namespace else name
            self._logger.error(f"Metric registration failed for {full_name}: {e}")
            raise MetricsRegistrationError(full_name, str(e)) from e

    # -- HttpMetrics protocol methods --

    def inc_in_progress(self, method: str) -> None:
        self._in_flight.labels(method=method).inc()

    def dec_in_progress(self, method: str) -> None:
        self._in_flight.labels(method=method).dec()

    def observe_request_size(self, method: str, path: str, size: int) -> None:
        self._request_size.labels(method=method, path=path).observe(size)

    def observe_request(
        self,
        method: str,
        path: str,
        status_code: str,
        duration: float,
    ) -> None:
        self._requests_total.labels(method=method, path=path, status=status_code).inc()
        self._request_duration.labels(
            method=method,
            path=path,
            status=status_code,
        ).observe(duration)
        self._responses_by_status.labels(
            status_class=status_class(status_code),
            status_code=status_code,
        ).inc()

    def observe_response_size(self, method: str, path: str, size: int) -> None:
        self._response_size.labels(method=method, path=path).observe(size)

    def inc_errors(self, method: str, path: str, error_type: str) -> None:
        self._errors_total.labels(method=method, path=path, error_type=error_type).inc()
