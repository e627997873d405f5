"""Immutable HTTP request.

Only metadata is kept: request bodies are never read.
"""

from dataclasses import dataclass

from spaserve._internal.asgi import HTTPScope, Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    query_string: str = ""

    @classmethod
    def from_asgi(cls, scope: Scope) -> "Request":
        """Build a Request from an ASGI HTTP scope."""
        typed = HTTPScope.from_scope(scope)
        return cls(
            method=typed.method.upper(),
            path=typed.path or "/",
            query_string=typed.query_string.decode("latin-1"),
        )

    @property
    def is_head(self) -> bool:
        """True for HEAD requests, which get headers but no body."""
        return self.method == "HEAD"
