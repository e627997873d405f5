"""Listener startup.

Probes the address first so a busy port surfaces as ``BindFailure``
with a clear message, then starts a pounce ASGI server with the live
spaserve App object.
"""

from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING

from spaserve.errors import BindFailure, ConfigurationError

if TYPE_CHECKING:
    from spaserve.app import App

logger = logging.getLogger("spaserve.server")


def check_bindable(host: str, port: int) -> None:
    """Raise ``BindFailure`` if *host*:*port* cannot be bound right now."""
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)
    except socket.gaierror as exc:
        raise BindFailure(host, port, str(exc)) from exc

    family, socktype, proto, _, address = infos[0]
    try:
        with socket.socket(family, socktype, proto) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(address)
    except OSError as exc:
        raise BindFailure(host, port, exc.strerror or str(exc)) from exc


def run_server(app: App, host: str, port: int, *, log_level: str = "info") -> None:
    """Start a pounce server for *app* and block until it stops.

    Raises ``BindFailure`` when the address is unavailable, either at the
    probe or when pounce itself binds.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "The pounce server is required to listen. Install it with: pip install spaserve[server]"
        raise ConfigurationError(msg) from exc

    check_bindable(host, port)

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        log_level=log_level,
    )
    server = Server(config, app)

    logger.info("Listening on http://%s:%d", host, port)
    try:
        server.run()
    except OSError as exc:
        raise BindFailure(host, port, exc.strerror or str(exc)) from exc
