"""Tests for the host session loop."""

from __future__ import annotations

import asyncio
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from remote_keyboard.domain.models import Char, NamedKey
from remote_keyboard.keyboard.base import KeyInjectionError
from remote_keyboard.protocol.codec import ProtocolError, TruncatedFrameError
from remote_keyboard.session.host import HostSession, accept_one, open_listener

ReaderFactory = Callable[..., asyncio.StreamReader]


class TestHostRun:
    @pytest.mark.asyncio
    async def test_injects_in_order(self, make_reader: ReaderFactory, recording_injector) -> None:
        reader = make_reader(bytes([0, 0, 65, 1, 0, 65]))
        report = await HostSession(recording_injector).run(reader, peer="10.0.0.2:5000")
        assert recording_injector.calls == [(Char.of("A"), True), (Char.of("A"), False)]
        assert report.role == "host"
        assert report.frames == 2
        assert report.peer == "10.0.0.2:5000"

    @pytest.mark.asyncio
    async def test_named_keys(self, make_reader: ReaderFactory, recording_injector) -> None:
        reader = make_reader(bytes([0, 1, 0, 0, 99, 1, 0, 99, 1, 1]))
        await HostSession(recording_injector).run(reader)
        assert recording_injector.calls == [
            (NamedKey.CTRL, True),
            (Char.of("c"), True),
            (Char.of("c"), False),
            (NamedKey.CTRL, False),
        ]

    @pytest.mark.asyncio
    async def test_empty_stream_ends_cleanly(self, make_reader: ReaderFactory, recording_injector) -> None:
        report = await HostSession(recording_injector).run(make_reader(b""))
        assert report.frames == 0
        assert recording_injector.calls == []

    @pytest.mark.asyncio
    async def test_protocol_error_stops_after_valid_frames(
        self, make_reader: ReaderFactory, recording_injector
    ) -> None:
        reader = make_reader(bytes([0, 40, 0, 200, 1, 40]))
        with pytest.raises(ProtocolError):
            await HostSession(recording_injector).run(reader)
        assert recording_injector.calls == [(NamedKey.SPACE, True)]

    @pytest.mark.asyncio
    async def test_truncated_frame_propagates(self, make_reader: ReaderFactory, recording_injector) -> None:
        with pytest.raises(TruncatedFrameError):
            await HostSession(recording_injector).run(make_reader(bytes([0, 0])))
        assert recording_injector.calls == []

    @pytest.mark.asyncio
    async def test_injection_failure_propagates(self, make_reader: ReaderFactory) -> None:
        injector = AsyncMock()
        injector.inject.side_effect = KeyInjectionError("device gone", backend="usb_hid")
        with pytest.raises(KeyInjectionError, match="device gone"):
            await HostSession(injector).run(make_reader(bytes([0, 2])))

    @pytest.mark.asyncio
    async def test_connection_reset_propagates(self, recording_injector) -> None:
        reader = asyncio.StreamReader()
        reader.set_exception(ConnectionResetError("reset by peer"))
        with pytest.raises(ConnectionResetError):
            await HostSession(recording_injector).run(reader)


class TestListener:
    @pytest.mark.asyncio
    async def test_accept_one_connection(self) -> None:
        listener = open_listener("127.0.0.1", 0)
        port = listener.getsockname()[1]
        try:
            accept_task = asyncio.ensure_future(accept_one(listener))
            _, client_writer = await asyncio.open_connection("127.0.0.1", port)
            reader, writer, peer = await accept_task
            assert peer.startswith("127.0.0.1:")
            client_writer.write(b"\x00\x01")
            await client_writer.drain()
            assert await reader.readexactly(2) == b"\x00\x01"
            writer.close()
            client_writer.close()
        finally:
            listener.close()

    def test_bind_failure_raises_os_error(self) -> None:
        first = open_listener("127.0.0.1", 0)
        try:
            port = first.getsockname()[1]
            with pytest.raises(OSError):
                open_listener("127.0.0.1", port)
        finally:
            first.close()


class TestHostServe:
    @pytest.mark.asyncio
    async def test_serve_connects_injector_after_accept(self, recording_injector, unused_tcp_port: int) -> None:
        session = HostSession(recording_injector)
        serve_task = asyncio.ensure_future(session.serve("127.0.0.1", unused_tcp_port))

        for _ in range(100):
            try:
                _, writer = await asyncio.open_connection("127.0.0.1", unused_tcp_port)
                break
            except OSError:
                await asyncio.sleep(0.01)
        else:
            pytest.fail("host never started listening")

        writer.write(bytes([0, 39, 1, 39]))
        await writer.drain()
        writer.close()
        await writer.wait_closed()

        report = await asyncio.wait_for(serve_task, timeout=5)
        assert report.frames == 2
        assert recording_injector.calls == [(NamedKey.RETURN, True), (NamedKey.RETURN, False)]
        assert recording_injector.connect_count == 1
        assert not recording_injector.connected

    @pytest.mark.asyncio
    async def test_serve_stops_listening_after_first_client(
        self, recording_injector, unused_tcp_port: int
    ) -> None:
        session = HostSession(recording_injector)
        serve_task = asyncio.ensure_future(session.serve("127.0.0.1", unused_tcp_port))

        for _ in range(100):
            try:
                _, first = await asyncio.open_connection("127.0.0.1", unused_tcp_port)
                break
            except OSError:
                await asyncio.sleep(0.01)
        else:
            pytest.fail("host never started listening")

        # Let the host accept and close its listener
        for _ in range(100):
            if recording_injector.connected:
                break
            await asyncio.sleep(0.01)

        with pytest.raises(OSError):
            await asyncio.open_connection("127.0.0.1", unused_tcp_port)

        first.close()
        await first.wait_closed()
        await asyncio.wait_for(serve_task, timeout=5)
