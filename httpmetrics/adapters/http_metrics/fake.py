"""Fake HttpMetrics for testing.

Records all calls in memory so tests can assert on metrics behaviour
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass

from httpmetrics.core.http_status import status_class


@dataclass
class RequestRecord:
    """Single observed request."""

    method: str
    path: str
    status_code: str
    duration: float

    @property
    def status_class(self) -> str:
        return status_class(self.status_code)


@dataclass
class SizeRecord:
    """Single observed request or response body size."""

    method: str
    path: str
    size: int


@dataclass
class ErrorRecord:
    """Single error counter increment."""

    method: str
    path: str
    error_type: str


class FakeHttpMetrics:
    """In-memory spy implementing the HttpMetrics protocol.

    Usage:
        fake = FakeHttpMetrics()
        # … inject into middleware …
        assert fake.in_progress == {"GET": 0}
        assert len(fake.requests) == 1
    """

    def __init__(self) -> None:
        self.in_progress: dict[str, int] = {}
        self.requests: list[RequestRecord] = []
        self.request_sizes: list[SizeRecord] = []
        self.response_sizes: list[SizeRecord] = []
        self.errors: list[ErrorRecord] = []

    def inc_in_progress(self, method: str) -> None:
        self.in_progress[method] = self.in_progress.get(method, 0) + 1

    def dec_in_progress(self, method: str) -> None:
        self.in_progress[method] = self.in_progress.get(method, 0) - 1

    def observe_request_size(self, method: str, path: str, size: int) -> None:
        self.request_sizes.append(SizeRecord(method, path, size))

    def observe_request(
        self,
        method: str,
        path: str,
        status_code: str,
        duration: float,
    ) -> None:
        self.requests.append(RequestRecord(method, path, status_code, duration))

    def observe_response_size(self, method: str, path: str, size: int) -> None:
        self.response_sizes.append(SizeRecord(method, path, size))

    def inc_errors(self, method: str, path: str, error_type: str) -> None:
        self.errors.append(ErrorRecord(method, path, error_type))

    # -- test helpers --

    def errors_of_type(self, error_type: str) -> list[ErrorRecord]:
        return [e for e in self.errors if e.error_type == error_type]

    def clear(self) -> None:
        """Reset all recorded state."""
        self.in_progress.clear()
        self.requests.clear()
        self.request_sizes.clear()
        self.response_sizes.clear()
        self.errors.clear()
