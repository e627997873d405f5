"""Tests for spaserve.server.run — address probing and server startup."""

import socket
import sys
import types
from unittest.mock import MagicMock

import pytest

from spaserve import App
from spaserve.errors import BindFailure, ConfigurationError
from spaserve.server.run import check_bindable, run_server


@pytest.fixture
def listening_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        yield sock.getsockname()[1]


@pytest.fixture
def fake_pounce(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Register stand-in pounce modules so no real server starts."""
    server_cls = MagicMock(name="Server")
    config_cls = MagicMock(name="ServerConfig")

    pounce = types.ModuleType("pounce")
    config_mod = types.ModuleType("pounce.config")
    config_mod.ServerConfig = config_cls  # type: ignore[attr-defined]
    server_mod = types.ModuleType("pounce.server")
    server_mod.Server = server_cls  # type: ignore[attr-defined]

    monkeypatch.setitem(sys.modules, "pounce", pounce)
    monkeypatch.setitem(sys.modules, "pounce.config", config_mod)
    monkeypatch.setitem(sys.modules, "pounce.server", server_mod)
    server_cls.config_cls = config_cls
    return server_cls


class TestCheckBindable:
    def test_free_port(self) -> None:
        check_bindable("127.0.0.1", 0)

    def test_port_in_use(self, listening_port: int) -> None:
        with pytest.raises(BindFailure) as exc_info:
            check_bindable("127.0.0.1", listening_port)

        assert exc_info.value.port == listening_port
        assert f"127.0.0.1:{listening_port}" in str(exc_info.value)

    def test_unresolvable_host(self) -> None:
        with pytest.raises(BindFailure):
            check_bindable("no-such-host.invalid", 8080)


class TestRunServer:
    def test_starts_pounce_with_app(self, fake_pounce: MagicMock) -> None:
        app = App()
        run_server(app, "127.0.0.1", 0, log_level="debug")

        fake_pounce.config_cls.assert_called_once_with(
            host="127.0.0.1", port=0, workers=1, log_level="debug"
        )
        fake_pounce.assert_called_once_with(fake_pounce.config_cls.return_value, app)
        fake_pounce.return_value.run.assert_called_once()

    def test_bind_failure_before_start(self, fake_pounce: MagicMock, listening_port: int) -> None:
        with pytest.raises(BindFailure):
            run_server(App(), "127.0.0.1", listening_port)

        fake_pounce.return_value.run.assert_not_called()

    def test_server_os_error_is_bind_failure(self, fake_pounce: MagicMock) -> None:
        fake_pounce.return_value.run.side_effect = OSError(98, "Address already in use")

        with pytest.raises(BindFailure) as exc_info:
            run_server(App(), "127.0.0.1", 0)

        assert "Address already in use" in str(exc_info.value)

    def test_missing_pounce(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "pounce", None)
        monkeypatch.setitem(sys.modules, "pounce.config", None)

        with pytest.raises(ConfigurationError, match="spaserve\\[server\\]"):
            run_server(App(), "127.0.0.1", 0)
