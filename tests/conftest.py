"""Shared test fixtures for the remote_keyboard test suite.

Provides in-memory byte streams, a recording key injector and a scripted
input source, so sessions can be exercised without a display, an OS
keyboard or a network.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable

import pytest

from remote_keyboard.domain.models import Char, KeyEvent, KeySymbol, KeyTransition, NamedKey
from remote_keyboard.input.base import InputSource
from remote_keyboard.keyboard.base import KeyInjector


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class RecordingInjector(KeyInjector):
    """A KeyInjector that remembers every call instead of touching the OS."""

    def __init__(self) -> None:
        self.calls: list[tuple[KeySymbol, bool]] = []
        self.connected = False
        self.connect_count = 0

    async def connect(self) -> None:
        self.connected = True
        self.connect_count += 1

    async def disconnect(self) -> None:
        self.connected = False

    async def inject(self, symbol: KeySymbol, pressed: bool) -> None:
        self.calls.append((symbol, pressed))


class ScriptedInput(InputSource):
    """An InputSource that replays a fixed list of transitions, then closes."""

    def __init__(self, transitions: list[KeyTransition]) -> None:
        super().__init__()
        self._script = list(transitions)
        self.open_count = 0

    async def open(self) -> None:
        self._is_open = True
        self.open_count += 1

    async def close(self) -> None:
        self._is_open = False

    async def transitions(self) -> AsyncIterator[KeyTransition]:
        for transition in self._script:
            yield transition


# ---------------------------------------------------------------------------
# Stream helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def make_reader() -> Callable[..., asyncio.StreamReader]:
    """Build a StreamReader pre-loaded with bytes (call inside a running loop)."""

    def _make(data: bytes, eof: bool = True) -> asyncio.StreamReader:
        reader = asyncio.StreamReader()
        if data:
            reader.feed_data(data)
        if eof:
            reader.feed_eof()
        return reader

    return _make


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def press_a() -> KeyEvent:
    return KeyEvent.press(Char.of("A"))


@pytest.fixture
def release_a() -> KeyEvent:
    return KeyEvent.release(Char.of("A"))


@pytest.fixture
def ctrl_c_transitions() -> list[KeyTransition]:
    """Ctrl+C as the window would report it."""
    return [
        KeyTransition(code="Control_L", pressed=True),
        KeyTransition(code="c", pressed=True),
        KeyTransition(code="c", pressed=False),
        KeyTransition(code="Control_L", pressed=False),
    ]


@pytest.fixture
def recording_injector() -> RecordingInjector:
    return RecordingInjector()


@pytest.fixture
def all_named_keys() -> list[NamedKey]:
    return list(NamedKey)


@pytest.fixture
def make_input() -> Callable[[list[KeyTransition]], ScriptedInput]:
    """Build a scripted input source from a list of transitions."""
    return ScriptedInput
