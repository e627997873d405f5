"""Shared fixtures: a temporary static root and an App serving it."""

import pytest

from spaserve import App, ServerConfig


@pytest.fixture
def static_dir(tmp_path):
    """Create temporary static files for testing."""
    static = tmp_path / "static"
    static.mkdir()

    (static / "index.html").write_text("<h1>Home</h1>")
    (static / "style.css").write_text("body { color: red; }")
    (static / "app.js").write_text("console.log('hello');")
    (static / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (static / "data.unknownext").write_bytes(b"\x00\x01\x02\x03")

    # Nested directory without index
    css = static / "css"
    css.mkdir()
    (css / "main.css").write_text("h1 { font-size: 2em; }")

    # Nested directory with index
    docs = static / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    return static


@pytest.fixture
def app(static_dir):
    return App(ServerConfig(static_dir=static_dir))
