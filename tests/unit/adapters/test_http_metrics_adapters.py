"""Unit tests for the HTTP metrics adapters."""

import pytest
from prometheus_client import REGISTRY, CollectorRegistry, Counter, generate_latest

from httpmetrics.adapters.http_metrics import FakeHttpMetrics, PrometheusHttpMetrics
from httpmetrics.adapters.http_metrics.prometheus import exponential_buckets
from httpmetrics.core.exceptions import HttpMetricsError, MetricsRegistrationError
from httpmetrics.core.protocols import HttpMetrics


class TestFakeHttpMetrics:
    """Tests for the FakeHttpMetrics test helper."""

    def test_satisfies_protocol(self):
        assert isinstance(FakeHttpMetrics(), HttpMetrics)

    def test_in_progress_pairs_back_to_zero(self):
        fake = FakeHttpMetrics()
        fake.inc_in_progress("GET")
        fake.inc_in_progress("GET")
        fake.dec_in_progress("GET")

        assert fake.in_progress == {"GET": 1}

    def test_errors_of_type_filters(self):
        fake = FakeHttpMetrics()
        fake.inc_errors("GET", "/a", "client_error")
        fake.inc_errors("GET", "/b", "panic")

        assert [e.path for e in fake.errors_of_type("panic")] == ["/b"]

    def test_clear_resets_all_state(self):
        """clear() should empty every collection."""
        fake = FakeHttpMetrics()
        fake.inc_in_progress("GET")
        fake.observe_request_size("POST", "/test", 10)
        fake.observe_request("GET", "/test", "200", 0.01)
        fake.observe_response_size("GET", "/test", 512)
        fake.inc_errors("GET", "/test", "server_error")

        fake.clear()

        assert fake.in_progress == {}
        assert fake.requests == []
        assert fake.request_sizes == []
        assert fake.response_sizes == []
        assert fake.errors == []


class TestExponentialBuckets:
    """Bucket helper used for the size histograms."""

    def test_size_scheme(self):
        assert exponential_buckets(100, 10, 8) == (
            100,
            1_000,
            10_000,
            100_000,
            1_000_000,
            10_000_000,
            100_000_000,
            1_000_000_000,
        )

    @pytest.mark.parametrize("start, factor, count", [(100, 10, 0), (0, 10, 3), (100, 1, 3)])
    def test_rejects_invalid_arguments(self, start, factor, count):
        with pytest.raises(ValueError):
            exponential_buckets(start, factor, count)


class TestPrometheusHttpMetrics:
    """Tests for the Prometheus adapter."""

    @pytest.fixture
    def registry(self):
        return CollectorRegistry()

    @pytest.fixture
    def adapter(self, registry):
        return PrometheusHttpMetrics(namespace="test", registry=registry)

    def test_registry_is_separate_from_default(self):
        """Adapter registry must not be the default global registry."""
        adapter = PrometheusHttpMetrics()
        assert adapter._registry is not REGISTRY

    def test_satisfies_protocol(self, adapter):
        assert isinstance(adapter, HttpMetrics)

    def test_all_families_are_registered(self, registry, adapter):
        adapter.observe_request("GET", "/x", "200", 0.01)
        adapter.observe_request_size("GET", "/x", 10)
        adapter.observe_response_size("GET", "/x", 10)
        adapter.inc_in_progress("GET")
        adapter.inc_errors("GET", "/x", "client_error")

        output = generate_latest(registry).decode()
        for family in (
            "test_http_requests_total",
            "test_http_request_duration_seconds",
            "test_http_request_size_bytes",
            "test_http_response_size_bytes",
            "test_http_requests_in_flight",
            "test_http_errors_total",
            "test_http_responses_by_status_total",
        ):
            assert f"# TYPE {family.removesuffix('_total')}" in output

    def test_observe_request_updates_counter_duration_and_status_class(self, registry, adapter):
        adapter.observe_request("POST", "/api/v1/items", "201", 0.05)
        adapter.observe_request("POST", "/api/v1/items", "201", 0.03)

        labels = {"method": "POST", "path": "/api/v1/items", "status": "201"}
        assert registry.get_sample_value("test_http_requests_total", labels) == 2
        assert registry.get_sample_value("test_http_request_duration_seconds_count", labels) == 2
        assert registry.get_sample_value(
            "test_http_request_duration_seconds_sum", labels
        ) == pytest.approx(0.08)
        assert (
            registry.get_sample_value(
                "test_http_responses_by_status_total",
                {"status_class": "2xx", "status_code": "201"},
            )
            == 2
        )

    def test_duration_buckets_span_5ms_to_10s(self, registry, adapter):
        adapter.observe_request("GET", "/", "200", 0.004)

        labels = {"method": "GET", "path": "/", "status": "200"}
        assert registry.get_sample_value(
            "test_http_request_duration_seconds_bucket", {**labels, "le": "0.005"}
        ) == 1
        assert registry.get_sample_value(
            "test_http_request_duration_seconds_bucket", {**labels, "le": "10.0"}
        ) == 1

    def test_size_buckets_follow_exponential_scheme(self, registry, adapter):
        adapter.observe_request_size("POST", "/upload", 1500)

        labels = {"method": "POST", "path": "/upload"}
        assert registry.get_sample_value("test_http_request_size_bytes_bucket", {**labels, "le": "1000.0"}) == 0
        assert registry.get_sample_value("test_http_request_size_bytes_bucket", {**labels, "le": "10000.0"}) == 1
        assert registry.get_sample_value("test_http_request_size_bytes_sum", labels) == 1500

    def test_in_flight_gauge(self, registry, adapter):
        adapter.inc_in_progress("GET")
        adapter.inc_in_progress("GET")
        adapter.dec_in_progress("GET")

        assert registry.get_sample_value("test_http_requests_in_flight", {"method": "GET"}) == 1

    def test_error_counter(self, registry, adapter):
        adapter.inc_errors("GET", "/health", "server_error")

        assert (
            registry.get_sample_value(
                "test_http_errors_total",
                {"method": "GET", "path": "/health", "error_type": "server_error"},
            )
            == 1
        )

    def test_empty_namespace_uses_bare_names(self):
        registry = CollectorRegistry()
        PrometheusHttpMetrics(registry=registry).observe_request("GET", "/", "200", 0.1)

        assert (
            registry.get_sample_value(
                "http_requests_total", {"method": "GET", "path": "/", "status": "200"}
            )
            == 1
        )

    def test_duplicate_registration_is_fatal(self, registry, adapter):
        with pytest.raises(MetricsRegistrationError) as exc_info:
            PrometheusHttpMetrics(namespace="test", registry=registry)

        assert isinstance(exc_info.value, HttpMetricsError)
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert exc_info.value.name == "test_http_requests_total"

    def test_collision_with_foreign_metric_is_fatal(self, registry):
        Counter("shop_http_errors_total", "Someone else's counter", registry=registry)

        with pytest.raises(MetricsRegistrationError, match="shop_http_errors_total"):
            PrometheusHttpMetrics(namespace="shop", registry=registry)

    def test_other_namespace_on_same_registry_is_fine(self, registry, adapter):
        other = PrometheusHttpMetrics(namespace="other", registry=registry)
        other.inc_in_progress("GET")

        assert registry.get_sample_value("other_http_requests_in_flight", {"method": "GET"}) == 1

    def test_label_mismatch_is_a_programming_error(self, adapter):
        with pytest.raises(ValueError):
            adapter._errors_total.labels(method="GET").inc()
