"""Sidecar HTTP server exposing the metrics endpoint on its own port."""

from typing import Optional

from aiohttp import web

from httpmetrics.core.logging import logger
from httpmetrics.core.protocols.metrics_renderer import MetricsRenderer


class ApiMetricsServer:
    """aiohttp server that serves ``renderer.render()`` on ``GET <path>``.

    Runs inside the service's event loop, next to the main app, so scrapes
    never compete with application routes or middlewares.
    """

    def __init__(
        self,
        renderer: MetricsRenderer,
        port: int,
        host: str = "0.0.0.0",
        path: str = "/metrics",
    ) -> None:
        """Initialize the metrics server.

        Args:
            renderer: Renders the current metrics state.
            port: Port to listen on; 0 lets the OS pick one.
            host: Host to bind to.
            path: Route serving the metrics.
        """
        self._renderer = renderer
        self._host = host
        self._port = port
        self._path = path
        self._app = web.Application()
        self._app.add_routes([web.get(path, self._handle_metrics)])
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None
        self._logger = logger.with_context(component="metrics_server", path=path)

    async def _handle_metrics(self, request: web.Request) -> web.Response:
        # content_type may carry a charset, which web.Response rejects as an argument.
        body, content_type = self._renderer.render(request.headers.get("Accept"))
        return web.Response(body=body, headers={"Content-Type": content_type})

    @property
    def bound_port(self) -> int | None:
        """Port the server actually listens on, or None when not started."""
        if self._runner is None or not self._runner.addresses:
            return None
        return self._runner.addresses[0][1]

    async def start(self) -> None:
        """Start listening.  Safe to run next to the main ASGI server."""
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, host=self._host, port=self._port)
        await self._site.start()
        self._logger.info(
            f"Metrics server listening on http://{self._host}:{self.bound_port}{self._path}"
        )

    async def stop(self) -> None:
        """Stop the server.  A no-op when it was never started."""
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        self._site = None
        self._logger.info("Metrics server stopped")
