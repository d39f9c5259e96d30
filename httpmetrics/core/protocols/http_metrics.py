"""HttpMetrics protocol for HTTP request/response instrumentation.

Abstracts metric collection so the middlewares depend on a protocol rather
than a concrete library.  Production uses Prometheus; tests inject a fake
that records calls in memory.

Every method is called on the request path, so implementations must be
safe under concurrent use and must not block.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class HttpMetrics(Protocol):
    """Protocol for HTTP request/response metrics collection."""

    def inc_in_progress(self, method: str) -> None:
        """Increment the in-flight gauge for the given HTTP method."""
        ...

    def dec_in_progress(self, method: str) -> None:
        """Decrement the in-flight gauge for the given HTTP method."""
        ...

    def observe_request_size(self, method: str, path: str, size: int) -> None:
        """Record the declared request body size in bytes."""
        ...

    def observe_request(
        self,
        method: str,
        path: str,
        status_code: str,
        duration: float,
    ) -> None:
        """Record a completed request (count, latency and status class).

        Args:
            method: HTTP method (GET, POST, …).
            path: Request path.
            status_code: Response status code as a string.
            duration: Request duration in seconds.
        """
        ...

    def observe_response_size(self, method: str, path: str, size: int) -> None:
        """Record the number of response body bytes written."""
        ...

    def inc_errors(self, method: str, path: str, error_type: str) -> None:
        """Increment the error counter.

        Args:
            method: HTTP method.
            path: Request path.
            error_type: ``client_error``, ``server_error`` or ``panic``.
        """
        ...
