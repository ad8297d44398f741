"""Client side of a remote keyboard session.

Forwards every supported key transition from an input source to the
host as soon as it happens: encode, write, drain, next. Unsupported keys
are dropped before they reach the wire.
"""

from __future__ import annotations

import asyncio
import logging

from remote_keyboard.domain.models import KeyTransition, SessionReport
from remote_keyboard.input.base import InputSource
from remote_keyboard.input.keymap import to_key_event
from remote_keyboard.protocol.codec import encode
from remote_keyboard.protocol.modes import DEFAULT_PORT

logger = logging.getLogger(__name__)


class ClientSession:
    """Sends the key transitions of one input source to one host."""

    def __init__(self, source: InputSource) -> None:
        self._source = source

    @staticmethod
    def frame_for(transition: KeyTransition) -> bytes | None:
        """Encode a transition, or return None for keys that are not sent.

        Raises:
            EncodingError: If the key maps to a non-ASCII character.
        """
        event = to_key_event(transition)
        if event is None:
            return None
        return encode(event)

    async def connect(self, host: str, port: int = DEFAULT_PORT) -> SessionReport:
        """Open the input source, connect to the host and run the session.

        Raises:
            InputError: If the input source cannot be opened.
            OSError: On connection or write failure.
        """
        async with self._source:
            logger.info("Connecting to %s:%d", host, port)
            _, writer = await asyncio.open_connection(host, port)
            logger.info("Connected to %s:%d", host, port)
            try:
                return await self.run(writer, peer=f"{host}:{port}")
            finally:
                writer.close()
                try:
                    await writer.wait_closed()
                except OSError as e:
                    logger.debug("Error while closing connection: %s", e)

    async def run(self, writer: asyncio.StreamWriter, peer: str = "") -> SessionReport:
        """Forward transitions until the input source finishes.

        The input source must already be open. The first write failure
        propagates and ends the session.
        """
        frames = 0
        async for transition in self._source.transitions():
            frame = self.frame_for(transition)
            if frame is None:
                logger.debug("Ignoring unsupported key %s", transition.code)
                continue
            writer.write(frame)
            await writer.drain()
            frames += 1
            logger.debug(
                "Sent %s %s", "press" if transition.pressed else "release", transition.code
            )

        logger.info("Input closed, %d frames sent", frames)
        return SessionReport(role="client", peer=peer, frames=frames)
