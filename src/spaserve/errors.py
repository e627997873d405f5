"""spaserve exception hierarchy.

Shared across the resolver, router, handlers, and server so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class SpaServeError(Exception):
    """Base for all spaserve-specific errors."""


class ConfigurationError(SpaServeError):
    """Raised when server configuration is invalid.

    Typically raised while constructing ``ServerConfig`` at startup.
    """


class BindFailure(SpaServeError):  # noqa: N818
    """The listener could not bind its address. Fatal at startup."""

    def __init__(self, host: str, port: int, reason: str = "") -> None:
        self.host = host
        self.port = port
        self.reason = reason
        message = f"cannot bind {host}:{port}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class HTTPError(SpaServeError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, resolver, or handlers. The ASGI handler
    catches these and turns them into a generic response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — nothing under the static root matches the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class Forbidden(HTTPError):  # noqa: N818
    """403 — the request path escapes the static root."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class ReadFailure(HTTPError):  # noqa: N818
    """500 — a file exists (or should) but could not be read.

    Raise with ``from exc`` so the underlying ``OSError`` is kept as
    ``__cause__`` for the server log. The detail never reaches the client.
    """

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=500, detail=detail)
