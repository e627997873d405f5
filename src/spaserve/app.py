"""spaserve application class.

Built once from a ``ServerConfig``; the resolver and route table are
fixed at construction and shared read-only by every request.
"""

import logging

import anyio

from spaserve._internal.asgi import Receive, Scope, Send
from spaserve.config import ServerConfig
from spaserve.handlers import StaticSite
from spaserve.http.request import Request
from spaserve.http.response import AnyResponse
from spaserve.resolver import FileResolver
from spaserve.routing.router import Router
from spaserve.server.handler import dispatch, handle_request

logger = logging.getLogger("spaserve.server")


class App:
    """The spaserve application: an ASGI callable serving a static root.

    Usage::

        app = App(ServerConfig(static_dir="dist"))
        app.run()

    Or drive it directly without a server::

        response = await app.handle("GET", "/app.js")
    """

    __slots__ = ("_router", "_site", "config")

    def __init__(self, config: ServerConfig | None = None) -> None:
        self.config: ServerConfig = config or ServerConfig()
        resolver = FileResolver(self.config.static_dir, index=self.config.index)
        self._site = StaticSite(resolver, chunk_size=self.config.chunk_size)

        self._router = Router()
        for route in self._site.routes():
            self._router.add(route)
        self._router.compile()

    @property
    def resolver(self) -> FileResolver:
        return self._site.resolver

    @property
    def router(self) -> Router:
        return self._router

    async def handle(self, method: str, path: str, *, query_string: str = "") -> AnyResponse:
        """Handle one request without ASGI: (method, path) -> response.

        Per-request failures come back as error responses, never raised.
        A returned ``FileResponse`` holds an open file; stream it through
        ``send_file_response`` or close ``response.file`` yourself.
        """
        request = Request(method=method.upper(), path=path or "/", query_string=query_string)
        return await dispatch(self._router, request)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server and block.

        Raises ``BindFailure`` if the address cannot be bound.
        """
        from spaserve.server.run import run_server

        run_server(
            self,
            host or self.config.host,
            self.config.port if port is None else port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan directly, delegates HTTP scopes to the request
        pipeline, and ignores anything else (server-specific lifecycle
        scopes included).
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, router=self._router)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Startup only reports on the static root; a missing index is a
        warning, since ``GET /`` will answer 500 until it appears.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                root = self.resolver.directory
                logger.info("Serving static files from %s", root)
                if not await anyio.Path(self.resolver.index_path).is_file():
                    logger.warning("%s not found; GET / will fail until it exists", self.resolver.index_path)
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                logger.info("Shutting down")
                await send({"type": "lifespan.shutdown.complete"})
                return
