"""spaserve — a static file server for single-page applications.

Serves a directory over HTTP: files by path, ``index.html`` for
directories, 404 for everything else.

Basic usage::

    from spaserve import App, ServerConfig

    app = App(ServerConfig(static_dir="static"))
    app.run()

Or from the shell, in the directory containing ``static/``::

    spaserve
"""

from spaserve.app import App
from spaserve.config import ServerConfig
from spaserve.errors import (
    BindFailure,
    ConfigurationError,
    Forbidden,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    ReadFailure,
    SpaServeError,
)
from spaserve.http.request import Request
from spaserve.http.response import AnyResponse, FileResponse, Response
from spaserve.resolver import FileResolver, ResolvedFile

__version__ = "0.1.0"
__all__ = [
    "AnyResponse",
    "App",
    "BindFailure",
    "ConfigurationError",
    "FileResolver",
    "FileResponse",
    "Forbidden",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "ReadFailure",
    "Request",
    "ResolvedFile",
    "Response",
    "ServerConfig",
    "SpaServeError",
]
