"""Tests for the remote-keyboard command line."""

from __future__ import annotations

import ipaddress
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from remote_keyboard import cli
from remote_keyboard.domain.models import SessionReport
from remote_keyboard.keyboard.pynput_backend import PynputKeyInjector
from remote_keyboard.keyboard.usb_hid_backend import UsbHidKeyInjector
from remote_keyboard.protocol.codec import ProtocolError


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.chdir(tmp_path)
    return str(tmp_path / "missing.yaml")


class TestParseArgs:
    def test_host_defaults(self) -> None:
        args = cli.parse_args(["host"])
        assert args.command == "host"
        assert args.port is None
        assert args.backend is None

    def test_host_port(self) -> None:
        assert cli.parse_args(["host", "-p", "6000"]).port == 6000

    def test_connect_ip(self) -> None:
        args = cli.parse_args(["connect", "192.168.1.20", "--port", "6000"])
        assert args.ip == ipaddress.ip_address("192.168.1.20")
        assert args.port == 6000

    def test_connect_rejects_hostname(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args(["connect", "not-an-ip"])
        assert exc_info.value.code == 2

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(SystemExit):
            cli.parse_args(["host", "--backend", "http"])


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 0
        assert "remote-keyboard" in capsys.readouterr().out

    def test_host_applies_overrides(self, config_path: str) -> None:
        with patch.object(cli, "_host", new=AsyncMock()) as host:
            cli.main(["-c", config_path, "host", "-p", "6000", "--bind", "127.0.0.1"])
        settings = host.call_args.args[0]
        assert settings.host.port == 6000
        assert settings.host.bind_address == "127.0.0.1"

    def test_connect_passes_ip(self, config_path: str) -> None:
        with patch.object(cli, "_connect", new=AsyncMock()) as connect:
            cli.main(["-c", config_path, "connect", "10.0.0.5"])
        settings, ip = connect.call_args.args
        assert ip == "10.0.0.5"
        assert settings.client.port == 58008

    def test_socket_error_exits_1(self, config_path: str) -> None:
        with patch.object(cli, "_host", new=AsyncMock(side_effect=OSError("Address already in use"))):
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["-c", config_path, "host"])
        assert exc_info.value.code == 1

    def test_protocol_error_exits_1(self, config_path: str) -> None:
        with patch.object(cli, "_host", new=AsyncMock(side_effect=ProtocolError("Invalid mode 99"))):
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["-c", config_path, "host"])
        assert exc_info.value.code == 1

    def test_out_of_range_host_port_exits_1(self, config_path: str) -> None:
        with patch.object(cli, "_host", new=AsyncMock()) as host:
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["-c", config_path, "host", "--bind", "127.0.0.1", "-p", "70000"])
        assert exc_info.value.code == 1
        host.assert_not_called()

    def test_out_of_range_client_port_exits_1(self, config_path: str) -> None:
        with patch.object(cli, "_connect", new=AsyncMock()) as connect:
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["-c", config_path, "connect", "127.0.0.1", "-p", "0"])
        assert exc_info.value.code == 1
        connect.assert_not_called()

    def test_keyboard_interrupt_exits_130(self, config_path: str) -> None:
        with patch.object(cli, "_connect", new=AsyncMock(side_effect=KeyboardInterrupt)):
            with pytest.raises(SystemExit) as exc_info:
                cli.main(["-c", config_path, "connect", "127.0.0.1"])
        assert exc_info.value.code == 130


class TestHelpers:
    def test_build_injector_default(self, config_path: str) -> None:
        from remote_keyboard.config.settings import Settings

        assert isinstance(cli._build_injector(Settings()), PynputKeyInjector)

    def test_build_injector_usb_hid(self, config_path: str) -> None:
        from remote_keyboard.config.settings import Settings

        settings = Settings()
        settings.host.backend = "usb_hid"
        settings.host.usb_hid_device = "/dev/hidg1"
        injector = cli._build_injector(settings)
        assert isinstance(injector, UsbHidKeyInjector)
        assert str(injector._writer._device_path) == "/dev/hidg1"

    @pytest.mark.asyncio
    async def test_host_serves_on_configured_address(self, config_path: str) -> None:
        from remote_keyboard.config.settings import Settings

        settings = Settings()
        report = SessionReport(role="host", peer="10.0.0.2:5000", frames=4)
        with patch("remote_keyboard.session.host.HostSession.serve", new=AsyncMock(return_value=report)) as serve:
            await cli._host(settings)
        serve.assert_awaited_once_with("0.0.0.0", 58008)
