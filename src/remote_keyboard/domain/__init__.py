"""Domain models for remote_keyboard.

Key symbols, key events, raw input transitions and session reports.
All models use Pydantic v2 for validation.
"""

from remote_keyboard.domain.models import (
    Char,
    KeyAction,
    KeyEvent,
    KeySymbol,
    KeyTransition,
    NamedKey,
    SessionReport,
)

__all__ = [
    "Char",
    "KeyAction",
    "KeyEvent",
    "KeySymbol",
    "KeyTransition",
    "NamedKey",
    "SessionReport",
]
