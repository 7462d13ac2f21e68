"""HTTP server adapter for hub callbacks.

Provides an aiohttp application that implements RouteRegistrarPort.
Routes are kept in a table and served through a single catch-all POST
route, so callback routes can be added or replaced while the server is
running. aiohttp's own router is frozen once the application starts and
rejects duplicate registrations.
"""

import logging

from aiohttp import web

from hubwatch.core.models import Acknowledgment
from hubwatch.core.ports import CallbackRoute, RouteRegistrarPort

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 1024 * 1024
RESPONSE_HEADERS = {"Content-Type": "text/json"}


class AiohttpCallbackServer(RouteRegistrarPort):
    """aiohttp server that receives hub notifications.

    Each response carries an empty body and the acknowledgment status.
    """

    def __init__(self, host: str = "0.0.0.0", port: int = 3000):
        """Initialize the HTTP server.

        Args:
            host: Host to listen on (default 0.0.0.0).
            port: Port to listen on (default 3000).
        """
        self.host = host
        self.port = port
        self.routes: dict[str, CallbackRoute] = {}
        self.app = web.Application(client_max_size=MAX_BODY_SIZE)
        self.app.router.add_get("/health", self._health)
        self.app.router.add_post("/{path:.*}", self._dispatch)
        self._runner: web.AppRunner | None = None

    def add_post(self, path: str, handler: CallbackRoute) -> None:
        if path in self.routes:
            logger.debug(f"Replacing handler for POST {path}")
        self.routes[path] = handler

    async def _health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "healthy", "routes": sorted(self.routes)})

    async def _dispatch(self, request: web.Request) -> web.Response:
        handler = self.routes.get(request.path)
        if handler is None:
            raise web.HTTPNotFound()

        try:
            body = await request.read()
        except web.HTTPRequestEntityTooLarge as e:
            logger.warning(f"Rejected oversized callback body on {request.path}: {e.text}")
            return web.Response(
                status=Acknowledgment.FAILURE.status_code, headers=RESPONSE_HEADERS
            )
        try:
            ack = await handler(body)
        except Exception as e:
            # Log full exception server-side; the hub only sees the status
            logger.error(f"Error handling callback {request.path}: {e}", exc_info=True)
            ack = Acknowledgment.FAILURE

        return web.Response(status=ack.status_code, headers=RESPONSE_HEADERS)

    async def start(self) -> None:
        """Start serving on host:port."""
        logger.info(f"Starting hub callback server on {self.host}:{self.port}")
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        logger.info("Hub callback server started")

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        logger.info("Hub callback server stopped")
