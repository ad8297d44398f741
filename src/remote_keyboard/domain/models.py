"""Core domain models for the remote_keyboard system.

These models represent the data flowing between the two machines: raw
key transitions observed by the client's input source, the semantic key
events that travel over the wire, and the summary a session returns when
its connection ends.
"""

from __future__ import annotations

import enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class KeyAction(str, enum.Enum):
    """Whether a key went down or came back up."""

    PRESSED = "pressed"
    RELEASED = "released"


class NamedKey(str, enum.Enum):
    """Every non-character key that can cross the wire."""

    # Modifiers
    CTRL = "ctrl"
    SHIFT = "shift"
    ALT = "alt"
    META = "meta"
    OPTION = "option"
    CAPS_LOCK = "caps_lock"
    # Navigation
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    # Editing
    BACKSPACE = "backspace"
    DELETE = "delete"
    RETURN = "return"
    TAB = "tab"
    SPACE = "space"
    ESCAPE = "escape"
    HELP = "help"
    # Function keys
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"
    F13 = "f13"
    F14 = "f14"
    F15 = "f15"
    F16 = "f16"
    F17 = "f17"
    F18 = "f18"
    F19 = "f19"
    F20 = "f20"


# ---------------------------------------------------------------------------
# Key symbols and events
# ---------------------------------------------------------------------------


class Char(BaseModel):
    """A literal character key.

    Any single character can be held here; only ASCII (0-127) can be
    encoded onto the wire.
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(min_length=1, max_length=1, description="The character")

    @classmethod
    def of(cls, value: str) -> Char:
        return cls(value=value)

    @property
    def code(self) -> int:
        return ord(self.value)

    @property
    def is_ascii(self) -> bool:
        return self.code <= 0x7F


KeySymbol = Union[NamedKey, Char]


class KeyEvent(BaseModel):
    """One key transition, as transmitted from client to host."""

    model_config = ConfigDict(frozen=True)

    action: KeyAction = Field(description="Pressed or released")
    symbol: KeySymbol = Field(description="Which key changed state")

    @property
    def pressed(self) -> bool:
        return self.action is KeyAction.PRESSED

    @classmethod
    def press(cls, symbol: KeySymbol) -> KeyEvent:
        return cls(action=KeyAction.PRESSED, symbol=symbol)

    @classmethod
    def release(cls, symbol: KeySymbol) -> KeyEvent:
        return cls(action=KeyAction.RELEASED, symbol=symbol)


class KeyTransition(BaseModel):
    """A raw key transition reported by an input source.

    ``code`` is the source's own name for the key (a Tk keysym for the
    window input). It may or may not map to a KeySymbol.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Source-specific key code, e.g. 'Shift_L'")
    pressed: bool = Field(description="True on key-down, False on key-up")


# ---------------------------------------------------------------------------
# Session results
# ---------------------------------------------------------------------------


class SessionReport(BaseModel):
    """Summary of a session that ended normally."""

    role: Literal["host", "client"]
    peer: str = Field(default="", description="Remote address as host:port")
    frames: int = Field(default=0, ge=0, description="Frames sent or received")
