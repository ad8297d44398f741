"""Tk window input source.

Opens a small visible window whose only job is to hold keyboard focus.
Key events delivered to the window are queued by Tk callbacks and handed
out by ``transitions()``, which pumps the Tk event loop from the asyncio
loop so the client stays single-threaded.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Any, AsyncIterator

from remote_keyboard.domain.models import KeyTransition
from remote_keyboard.input.base import InputError, InputSource

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "RemoteKeyboard"
DEFAULT_POLL_INTERVAL = 0.01


class TkWindowInput(InputSource):
    """Captures key presses and releases sent to a Tk window.

    Tk reports the keysym in effect at the moment of the event, so a key
    pressed as ``1`` may be released as ``exclam`` if Shift went down in
    between. Releases therefore reuse the keysym recorded when the same
    hardware keycode was pressed.
    """

    def __init__(
        self,
        title: str = DEFAULT_TITLE,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        super().__init__()
        self._title = title
        self._poll_interval = poll_interval
        self._root: Any | None = None
        self._pending: deque[KeyTransition] = deque()
        self._held: dict[int, str] = {}
        self._close_requested = False

    async def open(self) -> None:
        """Create the window and bind key handlers."""
        try:
            import tkinter as tk
        except ImportError as e:
            raise InputError(f"tkinter is not available: {e}") from e
        try:
            root = tk.Tk()
        except tk.TclError as e:
            raise InputError(f"Cannot create input window: {e}") from e

        root.title(self._title)
        root.geometry("320x120")
        tk.Label(root, text="Type here to control the remote keyboard").pack(expand=True)
        root.bind("<KeyPress>", self._on_key_press)
        root.bind("<KeyRelease>", self._on_key_release)
        root.protocol("WM_DELETE_WINDOW", self._on_close)
        root.focus_force()

        self._root = root
        self._close_requested = False
        self._is_open = True
        logger.info("Opened input window %r", self._title)

    async def close(self) -> None:
        """Destroy the window."""
        if self._root is not None:
            self._root.destroy()
            logger.info("Closed input window")
        self._root = None
        self._is_open = False
        self._pending.clear()
        self._held.clear()

    async def transitions(self) -> AsyncIterator[KeyTransition]:
        """Yield queued key transitions until the window is closed."""
        if not self._is_open or self._root is None:
            raise RuntimeError("Input window is not open. Call open() first.")

        while self._is_open:
            self._root.update()
            while self._pending:
                yield self._pending.popleft()
            if self._close_requested:
                logger.info("Input window close requested")
                return
            await asyncio.sleep(self._poll_interval)

    def _on_key_press(self, event: Any) -> None:
        self._held[event.keycode] = event.keysym
        self._pending.append(KeyTransition(code=event.keysym, pressed=True))

    def _on_key_release(self, event: Any) -> None:
        keysym = self._held.pop(event.keycode, event.keysym)
        self._pending.append(KeyTransition(code=keysym, pressed=False))

    def _on_close(self) -> None:
        self._close_requested = True
