"""HTTP responses with a chainable .with_*() transformation API.

Each transformation returns a new response. ``Response`` carries a buffered
body; ``FileResponse`` carries an open file that the sender streams.
"""

from dataclasses import dataclass, replace
from typing import TypeAlias

from anyio import AsyncFile


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def header(self, name: str) -> str | None:
        """First value of a header, case-insensitive."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


@dataclass(frozen=True, slots=True)
class FileResponse:
    """A response whose body is streamed from an open file.

    ``size`` is sent as ``Content-Length``; the sender reads ``file`` in
    ``chunk_size`` pieces and closes it when done, including for HEAD.
    """

    file: AsyncFile[bytes]
    size: int
    content_type: str = "application/octet-stream"
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    chunk_size: int = 64 * 1024


# Any response type the pipeline can produce
AnyResponse: TypeAlias = Response | FileResponse
