"""Abstract base class for OS key injection.

The host session hands every decoded key event to a KeyInjector. Backends
decide how the key reaches the operating system: the pynput backend
synthesizes events on the local desktop, the USB HID backend turns the
host into a physical keyboard for whatever machine it is plugged into.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from remote_keyboard.domain.models import KeySymbol

logger = logging.getLogger(__name__)


class KeyInjector(ABC):
    """Abstract interface for pressing and releasing keys on the host.

    Example usage::

        async with PynputKeyInjector() as injector:
            await injector.inject(NamedKey.SHIFT, pressed=True)
            await injector.inject(Char.of("A"), pressed=True)
            await injector.inject(Char.of("A"), pressed=False)
            await injector.inject(NamedKey.SHIFT, pressed=False)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Acquire whatever the backend needs to inject keys.

        Raises:
            KeyInjectionError: If the backend cannot be initialized.
        """
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release backend resources. Safe to call more than once."""
        ...

    @abstractmethod
    async def inject(self, symbol: KeySymbol, pressed: bool) -> None:
        """Press (``pressed=True``) or release a single key.

        Keys the backend has no way to produce are logged and dropped
        rather than raised; the session treats injection as infallible
        for every symbol on the wire.

        Raises:
            KeyInjectionError: If the backend itself fails (device gone).
        """
        ...

    async def __aenter__(self) -> KeyInjector:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


class KeyInjectionError(Exception):
    """Raised when a key injection backend fails."""

    def __init__(self, message: str, backend: str = "") -> None:
        super().__init__(message)
        self.backend = backend
