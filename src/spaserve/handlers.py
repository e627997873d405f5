"""Route handlers for the static site.

Two routes: ``/`` reads the root index document directly, everything
else goes through the ``FileResolver``.
"""

from urllib.parse import quote

import anyio

from spaserve.errors import NotFound, ReadFailure
from spaserve.http.request import Request
from spaserve.http.response import AnyResponse, FileResponse, Response
from spaserve.resolver import FileResolver, canonicalize
from spaserve.routing.route import Route

# Methods served on every route; anything else is 405
SERVED_METHODS = frozenset({"GET", "HEAD"})

INDEX_CONTENT_TYPE = "text/html; charset=utf-8"


class StaticSite:
    """Handlers bound to one resolver.

    Stateless across requests: the resolver and chunk size are fixed at
    construction and only read afterwards.
    """

    __slots__ = ("_chunk_size", "_resolver")

    def __init__(self, resolver: FileResolver, *, chunk_size: int = 64 * 1024) -> None:
        self._resolver = resolver
        self._chunk_size = chunk_size

    @property
    def resolver(self) -> FileResolver:
        return self._resolver

    async def index(self, request: Request) -> Response:
        """Serve ``{root}/index.html``; any read error is a 500."""
        index_path = self._resolver.index_path
        try:
            body = await anyio.Path(index_path).read_bytes()
        except OSError as exc:
            msg = f"failed to read {index_path}: {exc}"
            raise ReadFailure(msg) from exc
        return Response(body=body, content_type=INDEX_CONTENT_TYPE)

    async def asset(self, request: Request, path: str = "") -> AnyResponse:
        """Serve a file under the root, with directory-index fallback."""
        resolved = await self._resolver.resolve(request.path)
        if resolved is None:
            raise NotFound(f"No file for {request.path!r}")

        # /docs -> /docs/ so relative links inside the index resolve. The
        # location is rebuilt from canonical segments, never "//host" form.
        if resolved.directory_index and not request.path.endswith("/"):
            location = "/" + "".join(f"{quote(segment)}/" for segment in canonicalize(request.path))
            if request.query_string:
                location = f"{location}?{request.query_string}"
            return Response(body="", status=307).with_header("Location", location)

        file = await self._resolver.open(resolved)
        return FileResponse(
            file=file,
            size=resolved.size,
            content_type=resolved.content_type,
            chunk_size=self._chunk_size,
        )

    def routes(self) -> tuple[Route, ...]:
        """The route table for this site."""
        return (
            Route("/", self.index, SERVED_METHODS, name="index"),
            Route("/{path:path}", self.asset, SERVED_METHODS, name="static"),
        )
