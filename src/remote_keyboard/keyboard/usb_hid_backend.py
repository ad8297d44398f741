"""USB HID key injection backend.

Replays key events by writing USB HID reports to /dev/hidg0 on a
Raspberry Pi (or any Linux board) configured as a USB keyboard gadget.
The machine the board is plugged into sees a physical keyboard.
"""

from __future__ import annotations

import logging

from remote_keyboard.domain.models import KeySymbol
from remote_keyboard.hid.codes import symbol_to_hid
from remote_keyboard.hid.writer import HidWriteError, HidWriter
from remote_keyboard.keyboard.base import KeyInjectionError, KeyInjector

logger = logging.getLogger(__name__)


class UsbHidKeyInjector(KeyInjector):
    """Injects keys as USB HID reports.

    Requires:
        - Board with USB OTG (Pi Zero, Pi 4, etc.)
        - USB HID keyboard gadget configured
        - /dev/hidg0 device present and writable
    """

    def __init__(self, device_path: str = "/dev/hidg0") -> None:
        self._writer = HidWriter(device_path=device_path)

    async def connect(self) -> None:
        """Open the USB HID gadget device."""
        try:
            await self._writer.open()
            logger.info("Connected to USB HID device")
        except HidWriteError as e:
            raise KeyInjectionError(str(e), backend="usb_hid") from e

    async def disconnect(self) -> None:
        """Release held keys and close the USB HID gadget device."""
        await self._writer.close()
        logger.info("Disconnected from USB HID device")

    async def inject(self, symbol: KeySymbol, pressed: bool) -> None:
        """Press or release ``symbol`` via an updated HID report."""
        try:
            modifier, usage_code = symbol_to_hid(symbol)
        except ValueError as e:
            logger.warning("Dropping key with no HID usage: %s", e)
            return
        try:
            if pressed:
                await self._writer.press(modifier, usage_code)
            else:
                await self._writer.release(modifier, usage_code)
        except HidWriteError as e:
            raise KeyInjectionError(
                f"Failed to inject {symbol}: {e}", backend="usb_hid"
            ) from e
        logger.debug(
            "Injected %s (mod=0x%02X usage=0x%02X)",
            "press" if pressed else "release", modifier, usage_code,
        )
