"""Host side of a remote keyboard session.

Listens for one client, then reads frames off the connection and replays
each decoded key event through a KeyInjector, strictly in order. The
loop ends cleanly when the client closes the connection; any other
failure ends the session and propagates to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import socket

from remote_keyboard.domain.models import SessionReport
from remote_keyboard.keyboard.base import KeyInjector
from remote_keyboard.protocol.codec import EndOfStream, decode
from remote_keyboard.protocol.modes import DEFAULT_PORT

logger = logging.getLogger(__name__)


def open_listener(bind_address: str = "0.0.0.0", port: int = DEFAULT_PORT) -> socket.socket:
    """Bind a non-blocking TCP listening socket.

    Raises:
        OSError: If the address cannot be bound.
    """
    family = socket.AF_INET6 if ":" in bind_address else socket.AF_INET
    listener = socket.create_server((bind_address, port), family=family, backlog=1)
    listener.setblocking(False)
    return listener


async def accept_one(
    listener: socket.socket,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter, str]:
    """Accept a single connection and wrap it in asyncio streams.

    Returns:
        Tuple of (reader, writer, peer) where peer is "host:port".
    """
    loop = asyncio.get_running_loop()
    conn, addr = await loop.sock_accept(listener)
    reader, writer = await asyncio.open_connection(sock=conn)
    peer = f"{addr[0]}:{addr[1]}"
    return reader, writer, peer


class HostSession:
    """Replays key events received from exactly one client.

    Coordinates: accept -> (decode -> inject) until end of stream
    """

    def __init__(self, injector: KeyInjector) -> None:
        self._injector = injector

    async def serve(self, bind_address: str = "0.0.0.0", port: int = DEFAULT_PORT) -> SessionReport:
        """Listen on ``port``, accept one client and run the session.

        The listener is closed as soon as the client connects; a second
        client is never accepted.

        Raises:
            OSError: On bind failure or connection errors.
            ProtocolError: If the client sends a malformed frame.
            KeyInjectionError: If the injection backend fails.
        """
        listener = open_listener(bind_address, port)
        logger.info("Listening on port %d...", port)
        try:
            reader, writer, peer = await accept_one(listener)
        finally:
            listener.close()

        logger.info("Received client %s", peer)
        try:
            async with self._injector:
                return await self.run(reader, peer=peer)
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as e:
                logger.debug("Error while closing connection: %s", e)

    async def run(self, reader: asyncio.StreamReader, peer: str = "") -> SessionReport:
        """Decode and inject frames until the stream ends.

        The injector must already be connected.
        """
        frames = 0
        while True:
            try:
                event = await decode(reader)
            except EndOfStream:
                break
            await self._injector.inject(event.symbol, event.pressed)
            frames += 1

        logger.info("Terminated connection (%d frames)", frames)
        return SessionReport(role="host", peer=peer, frames=frames)
