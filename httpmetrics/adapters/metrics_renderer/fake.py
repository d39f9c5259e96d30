"""Fake MetricsRenderer for testing the scrape endpoints."""

from typing import Optional

from httpmetrics.core.protocols.metrics_renderer import MetricsRenderer


class FakeMetricsRenderer(MetricsRenderer):
    """Returns a fixed body and remembers every ``Accept`` it was asked with."""

    def __init__(self, body: bytes = b"# fake metrics\n", content_type: str = "text/plain") -> None:
        self.body = body
        self._content_type = content_type
        self.generate_calls: int = 0
        self.accepts: list[Optional[str]] = []

    @property
    def content_type(self) -> str:
        return self._content_type

    def generate(self) -> bytes:
        self.generate_calls += 1
        return self.body

    def render(self, accept: Optional[str] = None) -> tuple[bytes, str]:
        self.accepts.append(accept)
        return self.generate(), self.content_type
