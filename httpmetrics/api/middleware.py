"""ASGI middlewares recording request telemetry.

Install ``RecoveryMiddleware`` outside ``HttpMetricsMiddleware`` (see
``httpmetrics.api.setup.instrument_app``)::

    RecoveryMiddleware -> HttpMetricsMiddleware -> app
"""

import time
from typing import Iterable

from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from httpmetrics.api.interceptor import ResponseInterceptor
from httpmetrics.core.http_status import PANIC, error_type_for_status
from httpmetrics.core.logging import logger
from httpmetrics.core.protocols.http_metrics import HttpMetrics

# Marks scope["state"] once the request has been counted.
_OBSERVED_KEY = "httpmetrics.request_observed"


def _declared_content_length(scope: Scope) -> int | None:
    """Return the request's ``content-length`` if it is a valid integer."""
    raw = Headers(scope=scope).get("content-length")
    if raw is None:
        return None
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


class HttpMetricsMiddleware:
    """Record count, latency, sizes, in-flight and errors for every HTTP request.

    The middleware is purely observational: exceptions from the wrapped app
    propagate untouched and only requests that return normally get a
    count/latency observation.  The in-flight gauge is released on every
    exit path.
    """

    def __init__(
        self,
        app: ASGIApp,
        metrics: HttpMetrics,
        excluded_paths: Iterable[str] = (),
    ) -> None:
        self.app = app
        self._metrics = metrics
        self._excluded_paths = frozenset(excluded_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in self._excluded_paths:
            await self.app(scope, receive, send)
            return

        method: str = scope["method"]
        path: str = scope["path"]
        start = time.perf_counter()

        self._metrics.inc_in_progress(method)
        try:
            content_length = _declared_content_length(scope)
            if content_length is not None and content_length > 0:
                self._metrics.observe_request_size(method, path, content_length)

            interceptor = ResponseInterceptor(send)
            await self.app(scope, receive, interceptor)

            duration = time.perf_counter() - start
            status_code = interceptor.status_code
            self._metrics.observe_request(method, path, str(status_code), duration)
            scope.setdefault("state", {})[_OBSERVED_KEY] = True

            if interceptor.bytes_written > 0:
                self._metrics.observe_response_size(method, path, interceptor.bytes_written)

            error_type = error_type_for_status(status_code)
            if error_type is not None:
                self._metrics.inc_errors(method, path, error_type)
        finally:
            self._metrics.dec_in_progress(method)


class RecoveryMiddleware:
    """Turn unhandled exceptions into one ``panic`` observation and a generic 500.

    Must be the outermost of the two middlewares so that faults raised
    anywhere below, including inside ``HttpMetricsMiddleware``, are caught
    here exactly once.  Exceptions are never re-raised.
    """

    def __init__(self, app: ASGIApp, metrics: HttpMetrics) -> None:
        self.app = app
        self._metrics = metrics
        self._logger = logger.with_context(component="recovery_middleware")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        interceptor = ResponseInterceptor(send)
        try:
            await self.app(scope, receive, interceptor)
        except Exception:
            await self._recover(scope, receive, send, interceptor, time.perf_counter() - start)

    async def _recover(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
        interceptor: ResponseInterceptor,
        duration: float,
    ) -> None:
        method: str = scope["method"]
        path: str = scope["path"]
        self._logger.exception(f"Unhandled error while serving {method} {path}")

        try:
            self._metrics.inc_errors(method, path, PANIC)
            if not scope.get("state", {}).get(_OBSERVED_KEY):
                self._metrics.observe_request(method, path, "500", duration)
        except Exception:
            self._logger.exception("Failed to record panic observation")

        if interceptor.response_started:
            # Headers are already on the wire; the client sees a truncated body.
            self._logger.warning(f"Response for {method} {path} already started, cannot send 500")
            return

        response = PlainTextResponse("Internal Server Error", status_code=500)
        try:
            await response(scope, receive, send)
        except OSError as e:
            self._logger.warning(f"Could not deliver 500 response for {method} {path}: {e}")
