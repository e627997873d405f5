"""Static file resolution.

Maps a request path onto a file under the static root, applying the
directory-index fallback. Traversal is rejected explicitly: lexically
before the filesystem is touched, then again on the real path so
symlinks cannot lead outside the root.

All filesystem calls go through anyio so they run in worker threads and
never block the event loop.
"""

import errno
import mimetypes
import stat
from dataclasses import dataclass
from pathlib import Path

import anyio
from anyio import AsyncFile

from spaserve.errors import Forbidden, NotFound, ReadFailure

# errno values that mean "nothing there" rather than "cannot read"
_MISSING = frozenset({errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG})


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """A regular file that satisfies a request."""

    path: Path
    size: int
    content_type: str
    directory_index: bool = False


def guess_content_type(path: str | Path) -> str:
    """Content type from the file extension; octet-stream when unknown."""
    content_type, _ = mimetypes.guess_type(str(path))
    return content_type or "application/octet-stream"


def canonicalize(request_path: str) -> tuple[str, ...]:
    """Normalize a request path into segments relative to the root.

    Empty and ``.`` segments are dropped, ``..`` pops the previous
    segment. Climbing above the root raises ``Forbidden``.

    Examples::

        "/"               -> ()
        "/css/./app.css"  -> ("css", "app.css")
        "/a/../b.js"      -> ("b.js",)
        "/../etc/passwd"  -> Forbidden
    """
    if "\x00" in request_path:
        raise NotFound(f"NUL byte in path {request_path!r}")

    parts: list[str] = []
    for segment in request_path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not parts:
                raise Forbidden(f"path escapes static root: {request_path!r}")
            parts.pop()
            continue
        parts.append(segment)
    return tuple(parts)


def _is_missing(exc: OSError) -> bool:
    return isinstance(exc, (FileNotFoundError, NotADirectoryError)) or exc.errno in _MISSING


class FileResolver:
    """Resolves request paths against a fixed static root.

    The root is resolved to an absolute path once, at construction, and
    never changes. Nothing is cached between requests.

    Usage::

        resolver = FileResolver("static")
        resolved = await resolver.resolve("/docs/")
        if resolved is not None:
            file = await resolver.open(resolved)
    """

    __slots__ = ("_directory", "_index")

    def __init__(self, directory: str | Path, *, index: str = "index.html") -> None:
        self._directory = Path(directory).resolve()
        self._index = index

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def index_path(self) -> Path:
        """The root index document (``{root}/index.html``)."""
        return self._directory / self._index

    async def resolve(self, request_path: str) -> ResolvedFile | None:
        """Find the file for *request_path*, or ``None`` if there is none.

        Raises ``Forbidden`` for traversal attempts and ``ReadFailure``
        for filesystem errors other than "does not exist".
        """
        segments = canonicalize(request_path)
        candidate = self._directory.joinpath(*segments)

        real = await self._real_path(candidate, request_path)

        st = await self._stat(real)
        if st is None:
            return None

        if stat.S_ISREG(st.st_mode):
            return ResolvedFile(path=real, size=st.st_size, content_type=guess_content_type(real))

        if stat.S_ISDIR(st.st_mode):
            return await self._resolve_index(real, request_path)

        # FIFOs, sockets, devices
        return None

    async def open(self, resolved: ResolvedFile) -> AsyncFile[bytes]:
        """Open a resolved file for streaming."""
        try:
            return await anyio.open_file(resolved.path, "rb")
        except OSError as exc:
            if _is_missing(exc):
                raise NotFound(f"{resolved.path} disappeared before open") from exc
            raise ReadFailure(f"cannot open {resolved.path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _real_path(self, candidate: Path, request_path: str) -> Path:
        """Follow symlinks and check the result stays under the root."""
        try:
            real = Path(await anyio.Path(candidate).resolve())
        except OSError as exc:
            raise ReadFailure(f"cannot resolve {candidate}: {exc}") from exc
        if not real.is_relative_to(self._directory):
            raise Forbidden(f"path escapes static root: {request_path!r}")
        return real

    async def _stat(self, path: Path):
        """stat() the path; ``None`` if it does not exist."""
        try:
            return await anyio.Path(path).stat()
        except OSError as exc:
            if _is_missing(exc):
                return None
            raise ReadFailure(f"cannot stat {path}: {exc}") from exc

    async def _resolve_index(self, directory: Path, request_path: str) -> ResolvedFile | None:
        index = directory / self._index
        st = await self._stat(index)
        if st is None or not stat.S_ISREG(st.st_mode):
            return None
        # The index itself may be a symlink out of the root
        real = await self._real_path(index, request_path)
        return ResolvedFile(
            path=real,
            size=st.st_size,
            content_type=guess_content_type(real),
            directory_index=True,
        )
