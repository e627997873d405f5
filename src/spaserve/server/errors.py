"""Error handling pipeline for spaserve requests.

Maps HTTPError exceptions and unexpected failures to generic Response
objects. Details and causes go to the server log, never to the client.
"""

import logging
from http import HTTPStatus

from spaserve.errors import HTTPError
from spaserve.http.request import Request
from spaserve.http.response import Response

logger = logging.getLogger("spaserve.server")


def status_phrase(status: int) -> str:
    """Standard reason phrase, e.g. ``Not Found`` for 404."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response.

    Client errors are logged at DEBUG; server errors at ERROR with the
    chained cause.
    """
    if exc.status >= 500:
        cause = exc.__cause__
        logger.error(
            "%d %s %s: %s",
            exc.status,
            request.method,
            request.path,
            exc.detail,
            exc_info=(type(cause), cause, cause.__traceback__) if cause is not None else None,
        )
    else:
        logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    resp = Response(body=status_phrase(exc.status), status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    return Response(body=status_phrase(500), status=500)
