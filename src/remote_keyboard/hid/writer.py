"""Stateful USB HID report writer for /dev/hidg0.

Keeps track of which keys are currently held and writes the full 8-byte
report after every change:
    [modifier, 0x00, key1, key2, key3, key4, key5, key6]

Pressing adds a key to the report, releasing removes it, so remote
press/release pairs (and modifier chords) are replayed as they happened.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# 8-byte empty report = all keys released
RELEASE_REPORT = b"\x00" * 8

# Boot keyboards report at most six non-modifier keys at once
MAX_KEY_SLOTS = 6


class HidWriteError(Exception):
    """Raised when writing to the HID device fails."""


class HidWriter:
    """Writes USB HID keyboard reports reflecting the held-key state.

    A held key is identified by its ``(modifier, usage_code)`` pair as
    returned by ``symbol_to_hid``. Usage code 0 means a pure modifier.

    Usage::

        async with HidWriter() as writer:
            await writer.press(0x02, 0x00)   # Shift down
            await writer.press(0x00, 0x04)   # a down -> "A"
            await writer.release(0x00, 0x04)
            await writer.release(0x02, 0x00)
    """

    def __init__(self, device_path: str = "/dev/hidg0") -> None:
        self._device_path = Path(device_path)
        self._fd: int | None = None
        self._held: list[tuple[int, int]] = []

    @property
    def is_open(self) -> bool:
        return self._fd is not None

    @property
    def held(self) -> list[tuple[int, int]]:
        return list(self._held)

    async def open(self) -> None:
        """Open the HID gadget device for writing."""
        import os

        try:
            loop = asyncio.get_running_loop()
            self._fd = await loop.run_in_executor(
                None, lambda: os.open(str(self._device_path), os.O_WRONLY)
            )
            logger.info("Opened HID device: %s", self._device_path)
        except OSError as e:
            raise HidWriteError(
                f"Cannot open HID device {self._device_path}: {e}"
            ) from e

    async def close(self) -> None:
        """Release all keys and close the device."""
        import os

        if self._fd is not None:
            try:
                await self.release_all()
            except HidWriteError as e:
                logger.warning("Could not release keys before closing: %s", e)
            try:
                loop = asyncio.get_running_loop()
                fd = self._fd
                await loop.run_in_executor(None, lambda: os.close(fd))
            except OSError as e:
                logger.warning("Error closing HID device: %s", e)
            self._fd = None
            logger.info("Closed HID device")

    async def _write_report(self, report: bytes) -> None:
        """Write an 8-byte HID report to the device."""
        import os

        if self._fd is None:
            raise HidWriteError("HID device not open")
        if len(report) != 8:
            raise HidWriteError(f"HID report must be 8 bytes, got {len(report)}")
        try:
            loop = asyncio.get_running_loop()
            fd = self._fd
            await loop.run_in_executor(None, lambda: os.write(fd, report))
        except OSError as e:
            raise HidWriteError(f"Failed to write HID report: {e}") from e

    def build_report(self) -> bytes:
        """Build the report for the keys currently held."""
        modifier = 0x00
        codes: list[int] = []
        for mod, code in self._held:
            modifier |= mod
            if code and code not in codes:
                codes.append(code)
        if len(codes) > MAX_KEY_SLOTS:
            logger.debug("Rollover: %d keys held, reporting first %d", len(codes), MAX_KEY_SLOTS)
            codes = codes[:MAX_KEY_SLOTS]
        codes += [0x00] * (MAX_KEY_SLOTS - len(codes))
        return bytes([modifier, 0x00, *codes])

    async def press(self, modifier: int, usage_code: int) -> None:
        """Mark a key as held and send the updated report.

        Pressing a key that is already held (auto-repeat) resends the
        current report unchanged.
        """
        key = (modifier, usage_code)
        if key not in self._held:
            self._held.append(key)
        await self._write_report(self.build_report())

    async def release(self, modifier: int, usage_code: int) -> None:
        """Mark a key as released and send the updated report."""
        key = (modifier, usage_code)
        if key in self._held:
            self._held.remove(key)
        await self._write_report(self.build_report())

    async def release_all(self) -> None:
        """Forget all held keys and send an all-zeros report."""
        self._held.clear()
        await self._write_report(RELEASE_REPORT)

    async def __aenter__(self) -> HidWriter:
        await self.open()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.close()
