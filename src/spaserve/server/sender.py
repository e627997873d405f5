"""ASGI response sending — translates spaserve responses to ASGI messages.

Buffered responses go out in one body message; file responses are read
in chunks and sent with ``more_body=True`` until the file is exhausted.
HEAD requests get the same headers and an empty body.
"""

from spaserve._internal.asgi import Send
from spaserve.http.response import FileResponse, Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(
    content_type: str,
    headers: tuple[tuple[str, str], ...],
    content_length: int,
) -> list[tuple[bytes, bytes]]:
    raw: list[tuple[bytes, bytes]] = [
        (b"content-type", content_type.encode("latin-1")),
    ]
    for name, value in headers:
        raw.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw.append((b"content-length", str(content_length).encode("latin-1")))
    return raw


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a buffered Response into ASGI send() calls."""
    body = response.body_bytes if _body_allowed(response.status) else b""

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response.content_type, response.headers, len(body)),
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )


async def send_file_response(response: FileResponse, send: Send, *, head: bool = False) -> None:
    """Stream a FileResponse, closing the file however sending ends.

    Exactly ``response.size`` bytes are sent, matching ``Content-Length``
    even if the file grew since it was resolved. A file that shrank, or
    any read error after the headers are out, raises ``OSError``; the
    server then aborts the connection.
    """
    async with response.file:
        await send(
            {
                "type": "http.response.start",
                "status": response.status,
                "headers": _raw_headers(response.content_type, response.headers, response.size),
            }
        )
        if not head:
            remaining = response.size
            while remaining > 0:
                chunk = await response.file.read(min(response.chunk_size, remaining))
                if not chunk:
                    msg = f"file ended {remaining} bytes short of its Content-Length"
                    raise OSError(msg)
                remaining -= len(chunk)
                await send(
                    {
                        "type": "http.response.body",
                        "body": chunk,
                        "more_body": True,
                    }
                )

    # Close the stream
    await send(
        {
            "type": "http.response.body",
            "body": b"",
            "more_body": False,
        }
    )
