"""Wire protocol for remote_keyboard.

Public API:
    encode / decode -- KeyEvent <-> 2- or 3-byte frame
    Frame -- validated wire shape of one event
    CodecError, EndOfStream, ProtocolError, EncodingError,
    TruncatedFrameError -- failure kinds
"""

from remote_keyboard.protocol.codec import (
    CodecError,
    EncodingError,
    EndOfStream,
    Frame,
    ProtocolError,
    TruncatedFrameError,
    decode,
    encode,
)

__all__ = [
    "CodecError",
    "EncodingError",
    "EndOfStream",
    "Frame",
    "ProtocolError",
    "TruncatedFrameError",
    "decode",
    "encode",
]
