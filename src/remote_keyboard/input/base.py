"""Abstract base class for key input sources.

An input source delivers the raw key transitions the client forwards to
the host. The sequence is lazy and unbounded while the source is open,
and it ends for good when the source closes (for the window source: when
the user closes the window).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator

from remote_keyboard.domain.models import KeyTransition

logger = logging.getLogger(__name__)


class InputSource(ABC):
    """Abstract interface for capturing local key transitions.

    Example usage::

        async with TkWindowInput(title="RemoteKeyboard") as source:
            async for transition in source.transitions():
                handle(transition)
    """

    def __init__(self) -> None:
        self._is_open: bool = False

    @property
    def is_open(self) -> bool:
        """Whether the source is open and can deliver transitions."""
        return self._is_open

    @abstractmethod
    async def open(self) -> None:
        """Acquire the OS resources needed to receive key events.

        Raises:
            InputError: If the source cannot be opened.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the source. Safe to call multiple times."""
        ...

    @abstractmethod
    def transitions(self) -> AsyncIterator[KeyTransition]:
        """Yield key transitions in the order they happened.

        The iterator finishes when the source is closed by its user. It
        cannot be restarted; open a new source instead.
        """
        ...

    async def __aenter__(self) -> InputSource:
        await self.open()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.close()


class InputError(Exception):
    """Raised when an input source cannot be used."""
