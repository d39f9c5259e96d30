"""Logging setup with contextual loggers.

Components bind their own context once (``logger.with_context(...)``) and the
fields travel with every record they emit.
"""

import logging
import sys
from typing import Any, MutableMapping

_LOGGER_NAME = "httpmetrics"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s%(context)s"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that carries a dict of context fields."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None) -> None:
        super().__init__(logger, dict(extra or {}))

    def with_context(self, **kwargs: Any) -> "ContextualLogger":
        """Return a new logger with ``kwargs`` merged into the current context."""
        return ContextualLogger(self.logger, {**self.extra, **kwargs})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("context", _render_context(self.extra))
        kwargs["extra"] = extra
        return msg, kwargs


def _render_context(context: dict[str, Any]) -> str:
    if not context:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in sorted(context.items()))


class _ContextFilter(logging.Filter):
    """Make ``%(context)s`` safe for records that did not go through the adapter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = ""
        return True


def configure_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the package logger."""
    base = logging.getLogger(_LOGGER_NAME)
    base.setLevel(level.upper())
    for handler in list(base.handlers):
        base.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.addFilter(_ContextFilter())
    base.addHandler(handler)
    base.propagate = False


logger = ContextualLogger(logging.getLogger(_LOGGER_NAME))
