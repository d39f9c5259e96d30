"""MetricsRenderer protocol for the scrape side of the metrics layer.

``HttpMetrics`` only collects.  Anything that serves the collected state,
the ``/metrics`` route and the sidecar server alike, goes through this
protocol and lets the scraper's ``Accept`` header pick the exposition format.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class MetricsRenderer(Protocol):
    """Serializes collected metrics for a scrape."""

    @property
    def content_type(self) -> str:
        """Content type of ``generate()`` output."""
        ...

    def generate(self) -> bytes:
        """Serialize all collected metrics in the default text format."""
        ...

    def render(self, accept: Optional[str] = None) -> tuple[bytes, str]:
        """Serialize for a scraper sending ``accept``.

        Returns the body and the content type that describes it.  A missing
        or unrecognised ``accept`` falls back to ``generate()``.
        """
        ...
