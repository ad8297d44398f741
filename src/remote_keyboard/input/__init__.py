"""Key input module for remote_keyboard.

Captures local key transitions for the client to forward.

Public API:
    InputSource -- Abstract base class
    InputError -- Source cannot be opened
    TkWindowInput -- Focus window built with tkinter
"""

from remote_keyboard.input.base import InputError, InputSource

__all__ = ["InputSource", "InputError", "TkWindowInput"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require a display."""
    if name == "TkWindowInput":
        from remote_keyboard.input.tk_window import TkWindowInput
        return TkWindowInput
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
