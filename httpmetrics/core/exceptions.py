"""Exceptions raised by the metrics layer."""


class HttpMetricsError(Exception):
    """Base class for all errors raised by httpmetrics."""


class MetricsRegistrationError(HttpMetricsError):
    """An instrument could not be registered, usually because its name is taken.

    This is a startup-time configuration error: the process should not
    start serving with a half-built set of instruments.
    """

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"Failed to register metric '{name}': {message}")
