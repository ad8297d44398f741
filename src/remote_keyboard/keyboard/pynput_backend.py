"""pynput key injection backend.

Synthesizes key presses on the host's own desktop session through
``pynput.keyboard.Controller``. pynput is imported on connect() because
importing it needs a display server on Linux.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from remote_keyboard.domain.models import Char, KeySymbol, NamedKey
from remote_keyboard.keyboard.base import KeyInjectionError, KeyInjector

logger = logging.getLogger(__name__)

# NamedKey -> pynput.keyboard.Key attribute name
PYNPUT_KEY_NAMES: dict[NamedKey, str] = {
    NamedKey.CTRL: "ctrl",
    NamedKey.SHIFT: "shift",
    NamedKey.ALT: "alt",
    # Command on macOS, Windows/Super elsewhere
    NamedKey.META: "cmd",
    NamedKey.OPTION: "alt",
    NamedKey.CAPS_LOCK: "caps_lock",
    NamedKey.UP: "up",
    NamedKey.DOWN: "down",
    NamedKey.LEFT: "left",
    NamedKey.RIGHT: "right",
    NamedKey.HOME: "home",
    NamedKey.END: "end",
    NamedKey.PAGE_UP: "page_up",
    NamedKey.PAGE_DOWN: "page_down",
    NamedKey.BACKSPACE: "backspace",
    NamedKey.DELETE: "delete",
    NamedKey.RETURN: "enter",
    NamedKey.TAB: "tab",
    NamedKey.SPACE: "space",
    NamedKey.ESCAPE: "esc",
    # pynput has no Help key; Apple keyboards put Help where Insert is
    NamedKey.HELP: "insert",
    **{NamedKey(f"f{i}"): f"f{i}" for i in range(1, 21)},
}

# ASCII control characters that correspond to a named key
CONTROL_CHAR_KEYS: dict[str, str] = {
    "\n": "enter",
    "\r": "enter",
    "\t": "tab",
    "\b": "backspace",
    "\x1b": "esc",
    "\x7f": "delete",
}


class PynputKeyInjector(KeyInjector):
    """Injects keys into the local desktop with pynput.

    Letters arrive upper-case from the client (one code per physical key)
    and are injected lower-case, so the resulting case follows the Shift
    and CapsLock transitions replayed alongside them.
    """

    def __init__(self, controller: Any | None = None) -> None:
        self._controller = controller
        self._keys: Any | None = None
        self._rejected: tuple[type[BaseException], ...] = ()

    @property
    def is_connected(self) -> bool:
        return self._keys is not None

    async def connect(self) -> None:
        """Import pynput and create the keyboard controller."""
        try:
            from pynput.keyboard import Controller, Key
        except ImportError as e:
            raise KeyInjectionError(
                f"pynput is not usable on this host: {e}", backend="pynput"
            ) from e

        if self._controller is None:
            self._controller = Controller()
        self._keys = Key
        self._rejected = (Controller.InvalidKeyException, Controller.InvalidCharacterException)
        logger.info("Connected to pynput keyboard controller")

    async def disconnect(self) -> None:
        if self._keys is not None:
            self._keys = None
            logger.info("Disconnected from pynput keyboard controller")

    async def inject(self, symbol: KeySymbol, pressed: bool) -> None:
        """Press or release ``symbol`` through the pynput controller."""
        if self._keys is None or self._controller is None:
            raise KeyInjectionError("Not connected to pynput", backend="pynput")

        key = self._resolve(symbol)
        action = self._controller.press if pressed else self._controller.release
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, action, key)
        except self._rejected as e:
            logger.warning("pynput rejected %s: %s", symbol, e)
            return
        except Exception as e:
            raise KeyInjectionError(
                f"Failed to inject {symbol}: {e}", backend="pynput"
            ) from e
        logger.debug("Injected %s %s", "press" if pressed else "release", symbol)

    def _resolve(self, symbol: KeySymbol) -> Any:
        """Translate a KeySymbol into the object pynput expects."""
        if isinstance(symbol, Char):
            if symbol.value in CONTROL_CHAR_KEYS:
                return getattr(self._keys, CONTROL_CHAR_KEYS[symbol.value])
            return symbol.value.lower()
        return getattr(self._keys, PYNPUT_KEY_NAMES[symbol])
