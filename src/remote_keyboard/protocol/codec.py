"""Encode key events to wire frames and decode them back.

A frame is 2 bytes for a named key and 3 bytes for a literal character
(see ``remote_keyboard.protocol.modes``). ``decode`` consumes exactly one
frame per call and never buffers across calls, so a session can read
frames straight off an ``asyncio.StreamReader``.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from remote_keyboard.domain.models import Char, KeyEvent
from remote_keyboard.protocol.modes import (
    ACTIONS_BY_STATE,
    KEYS_BY_MODE,
    MAX_CHAR_CODE,
    MODE_CHAR,
    action_for_state,
    key_for_mode,
    mode_for,
    state_for,
)

logger = logging.getLogger(__name__)


class CodecError(Exception):
    """Base class for frame encoding and decoding failures."""


class EndOfStream(CodecError):
    """The stream closed cleanly between frames."""


class ProtocolError(CodecError):
    """A received frame is malformed."""


class EncodingError(CodecError):
    """A key event cannot be represented on the wire."""


class TruncatedFrameError(OSError):
    """The stream closed after a frame had been partially read."""


class Frame(BaseModel):
    """The wire shape of one key event."""

    model_config = ConfigDict(frozen=True)

    state: int = Field(description="0 = pressed, 1 = released")
    mode: int = Field(description="0 = character, otherwise a named key")
    char: int | None = Field(default=None, description="ASCII code, character mode only")

    @model_validator(mode="after")
    def _check_shape(self) -> Frame:
        if self.state not in ACTIONS_BY_STATE:
            raise ValueError(f"State is not pressed or released (got {self.state})")
        if self.mode == MODE_CHAR:
            if self.char is None:
                raise ValueError("character frame is missing its character byte")
            if not 0 <= self.char <= MAX_CHAR_CODE:
                raise ValueError(f"Received non-ascii char {self.char}")
        elif self.mode in KEYS_BY_MODE:
            if self.char is not None:
                raise ValueError(f"mode {self.mode} frame cannot carry a character")
        else:
            raise ValueError(f"Invalid mode {self.mode}")
        return self

    @classmethod
    def from_event(cls, event: KeyEvent) -> Frame:
        """Build the frame for an event.

        Raises:
            EncodingError: If the event carries a non-ASCII character.
        """
        state = state_for(event.action)
        symbol = event.symbol
        if isinstance(symbol, Char):
            if not symbol.is_ascii:
                raise EncodingError(f"Cannot send non-ascii character {symbol.value!r}")
            return cls(state=state, mode=MODE_CHAR, char=symbol.code)
        return cls(state=state, mode=mode_for(symbol))

    def to_event(self) -> KeyEvent:
        action = action_for_state(self.state)
        if self.mode == MODE_CHAR:
            return KeyEvent(action=action, symbol=Char(value=chr(self.char)))
        return KeyEvent(action=action, symbol=key_for_mode(self.mode))

    def to_bytes(self) -> bytes:
        if self.mode == MODE_CHAR:
            return bytes([self.state, self.mode, self.char])
        return bytes([self.state, self.mode])


def encode(event: KeyEvent) -> bytes:
    """Encode a key event as a 2- or 3-byte frame.

    Raises:
        EncodingError: If the event carries a non-ASCII character.
    """
    return Frame.from_event(event).to_bytes()


async def decode(reader: asyncio.StreamReader) -> KeyEvent:
    """Read exactly one frame from ``reader`` and return its key event.

    Raises:
        EndOfStream: If the stream ends before the two header bytes arrive.
        ProtocolError: If the state, mode or character byte is invalid.
        TruncatedFrameError: If the stream ends before the character byte
            of a character frame.
        OSError: Transport failures from the reader propagate unchanged.
    """
    try:
        header = await reader.readexactly(2)
    except asyncio.IncompleteReadError as e:
        raise EndOfStream(f"Stream closed after {len(e.partial)} of 2 header bytes") from e

    state, mode = header[0], header[1]
    char: int | None = None
    # Only a well-formed character header is followed by a third byte
    if mode == MODE_CHAR and state in ACTIONS_BY_STATE:
        try:
            body = await reader.readexactly(1)
        except asyncio.IncompleteReadError as e:
            raise TruncatedFrameError("Stream closed before the character byte") from e
        char = body[0]

    try:
        frame = Frame(state=state, mode=mode, char=char)
    except ValidationError as e:
        raise ProtocolError(_first_error(e)) from e

    event = frame.to_event()
    logger.debug("Decoded %s %s", event.action.value, event.symbol)
    return event


def _first_error(error: ValidationError) -> str:
    """Return the message of the first validator failure."""
    details = error.errors()[0]
    cause = details.get("ctx", {}).get("error")
    return str(cause) if cause is not None else details["msg"]
