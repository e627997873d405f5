"""ASGI handler — translates ASGI scope/messages to spaserve types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through routing, sends the response
back through ASGI send(), and writes the access line.
"""

import logging
import time

from spaserve._internal.asgi import Receive, Scope, Send
from spaserve.errors import HTTPError
from spaserve.http.request import Request
from spaserve.http.response import AnyResponse, FileResponse
from spaserve.log import log_access
from spaserve.routing.router import Router
from spaserve.server.errors import handle_http_error, handle_internal_error
from spaserve.server.sender import send_file_response, send_response

logger = logging.getLogger("spaserve.server")


async def dispatch(router: Router, request: Request) -> AnyResponse:
    """Route a request and run its handler, mapping errors to responses.

    Never raises for per-request failures: every outcome is a response.
    """
    try:
        match = router.match(request.method, request.path)
        return await match.route.handler(request, **match.path_params)
    except HTTPError as exc:
        return handle_http_error(exc, request)
    except Exception as exc:
        return handle_internal_error(exc, request)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    start = time.perf_counter()
    request = Request.from_asgi(scope)
    response = await dispatch(router, request)

    try:
        if isinstance(response, FileResponse):
            await send_file_response(response, send, head=request.is_head)
        else:
            await send_response(response, send, head=request.is_head)
    except OSError:
        # Headers may already be out; nothing left to do but drop the connection
        logger.exception("response aborted: %s %s", request.method, request.path)
        raise
    finally:
        log_access(request.method, request.path, response.status, time.perf_counter() - start)
