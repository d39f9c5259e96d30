"""Request-level HTTP telemetry for ASGI services."""

__version__ = "0.1.0"
