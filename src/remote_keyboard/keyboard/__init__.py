"""Key injection module for remote_keyboard.

Replays received key events on the host through pluggable backends.

Public API:
    KeyInjector -- Abstract base class
    KeyInjectionError -- Backend failure
    PynputKeyInjector -- Local desktop injection via pynput
    UsbHidKeyInjector -- USB HID gadget injection via /dev/hidg0
"""

from remote_keyboard.keyboard.base import KeyInjectionError, KeyInjector

__all__ = ["KeyInjector", "KeyInjectionError", "PynputKeyInjector", "UsbHidKeyInjector"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations."""
    if name == "PynputKeyInjector":
        from remote_keyboard.keyboard.pynput_backend import PynputKeyInjector
        return PynputKeyInjector
    if name == "UsbHidKeyInjector":
        from remote_keyboard.keyboard.usb_hid_backend import UsbHidKeyInjector
        return UsbHidKeyInjector
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
