"""Tests for the App class: direct dispatch, lifespan, and the access log."""

import asyncio
import logging
from typing import Any

import anyio

from spaserve import App, ServerConfig
from spaserve.http.response import FileResponse, Response
from spaserve.resolver import FileResolver
from spaserve.server.sender import send_file_response
from spaserve.testing import TestClient


async def _lifespan_exchange(app: App, *messages: str) -> list[dict[str, Any]]:
    inbox: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
    sent: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    for msg_type in messages:
        inbox.put_nowait({"type": msg_type})

    await app({"type": "lifespan", "asgi": {"version": "3.0"}}, inbox.get, send)
    return sent


class TestAppConstruction:
    def test_default_config(self) -> None:
        app = App()
        assert app.config.port == 8080
        assert app.config.host == "0.0.0.0"
        assert app.resolver.directory.name == "static"

    def test_routes_compiled(self, app) -> None:
        names = [route.name for route in app.router.routes]
        assert names == ["index", "static"]

    def test_root_resolved_absolute(self, static_dir) -> None:
        app = App(ServerConfig(static_dir=static_dir))
        assert app.resolver.directory.is_absolute()
        assert app.resolver.index_path == static_dir.resolve() / "index.html"


class TestHandle:
    async def test_root(self, app) -> None:
        response = await app.handle("GET", "/")
        assert isinstance(response, Response)
        assert response.status == 200
        assert response.body_bytes == b"<h1>Home</h1>"

    async def test_asset_is_file_response(self, app) -> None:
        response = await app.handle("GET", "/style.css")
        assert isinstance(response, FileResponse)
        try:
            assert response.status == 200
            assert response.content_type.startswith("text/css")
            assert response.size == len("body { color: red; }")
        finally:
            await response.file.aclose()

    async def test_not_found(self, app) -> None:
        response = await app.handle("GET", "/nope.js")
        assert response.status == 404
        assert response.text == "Not Found"

    async def test_method_lowercase_is_normalized(self, app) -> None:
        response = await app.handle("get", "/")
        assert response.status == 200

    async def test_disallowed_method(self, app) -> None:
        response = await app.handle("DELETE", "/")
        assert response.status == 405
        assert response.header("Allow") == "GET, HEAD"

    async def test_redirect_keeps_query(self, app) -> None:
        response = await app.handle("GET", "/docs", query_string="tab=2")
        assert response.status == 307
        assert response.header("Location") == "/docs/?tab=2"

    async def test_handler_crash_is_500(self, app, monkeypatch, caplog) -> None:
        async def boom(*args, **kwargs):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(FileResolver, "resolve", boom)
        with caplog.at_level(logging.ERROR, logger="spaserve.server"):
            response = await app.handle("GET", "/app.js")

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "unexpected" not in response.text
        assert any(r.exc_info and r.exc_info[0] is RuntimeError for r in caplog.records)


class TestLifespan:
    async def test_startup_and_shutdown(self, app) -> None:
        sent = await _lifespan_exchange(app, "lifespan.startup", "lifespan.shutdown")
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_logs_root(self, app, static_dir, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="spaserve.server"):
            await _lifespan_exchange(app, "lifespan.startup", "lifespan.shutdown")

        messages = [r.getMessage() for r in caplog.records]
        assert any(str(static_dir.resolve()) in m for m in messages)
        assert not any(r.levelno == logging.WARNING for r in caplog.records)

    async def test_missing_index_warns(self, app, static_dir, caplog) -> None:
        (static_dir / "index.html").unlink()

        with caplog.at_level(logging.INFO, logger="spaserve.server"):
            sent = await _lifespan_exchange(app, "lifespan.startup", "lifespan.shutdown")

        assert sent[0]["type"] == "lifespan.startup.complete"
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "index.html" in warnings[0].getMessage()

    async def test_index_check_uses_async_path(self, app, monkeypatch, caplog) -> None:
        checked: list[str] = []

        async def is_file(self) -> bool:
            checked.append(self.name)
            return False

        monkeypatch.setattr(anyio.Path, "is_file", is_file)

        with caplog.at_level(logging.WARNING, logger="spaserve.server"):
            await _lifespan_exchange(app, "lifespan.startup", "lifespan.shutdown")

        assert checked == ["index.html"]
        assert any("index.html" in r.getMessage() for r in caplog.records)

    async def test_test_client_runs_lifespan(self, app, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="spaserve.server"):
            async with TestClient(app) as client:
                assert (await client.get("/")).status == 200

        messages = [r.getMessage() for r in caplog.records]
        assert "Shutting down" in messages


class TestASGI:
    async def test_non_http_scope_ignored(self, app) -> None:
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "websocket.connect"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "websocket", "path": "/"}, receive, send)
        assert sent == []

    async def test_access_log_line(self, app, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="spaserve.access"):
            async with TestClient(app) as client:
                await client.get("/app.js")
                await client.get("/missing")

        records = [r for r in caplog.records if r.name == "spaserve.access"]
        assert len(records) == 2

        first, second = records
        assert first.method == "GET"
        assert first.path == "/app.js"
        assert first.status == 200
        assert first.latency_ms >= 0
        assert first.getMessage().startswith("method=GET path=/app.js status=200 latency_ms=")
        assert second.status == 404


class TestStreamingFraming:
    async def test_body_matches_content_length_after_file_grows(self, app, static_dir) -> None:
        response = await app.handle("GET", "/app.js")
        assert isinstance(response, FileResponse)

        with (static_dir / "app.js").open("ab") as f:
            f.write(b"x" * 100)

        messages: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            messages.append(message)

        await send_file_response(response, send)

        declared = int(dict(messages[0]["headers"])[b"content-length"])
        body = b"".join(m["body"] for m in messages[1:])
        assert declared == len(body) == len("console.log('hello');")
