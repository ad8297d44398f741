"""Wire state and mode bytes.

Every frame starts with two bytes:

    [state, mode]           -- named key
    [state, 0x00, char]     -- literal ASCII character

- state: 0 = pressed, 1 = released
- mode:  0 = literal character, 1..41 = named keys (table below)

Frame length is implied by the mode byte, so there is no length prefix
and no delimiter. Both encode and decode read this table; it is the only
place the numbers live.
"""

from __future__ import annotations

from remote_keyboard.domain.models import KeyAction, NamedKey

# ---------------------------------------------------------------------------
# State byte
# ---------------------------------------------------------------------------

STATE_PRESSED: int = 0
STATE_RELEASED: int = 1

STATE_CODES: dict[KeyAction, int] = {
    KeyAction.PRESSED: STATE_PRESSED,
    KeyAction.RELEASED: STATE_RELEASED,
}

ACTIONS_BY_STATE: dict[int, KeyAction] = {v: k for k, v in STATE_CODES.items()}

# ---------------------------------------------------------------------------
# Mode byte
# ---------------------------------------------------------------------------

MODE_CHAR: int = 0

MODE_CODES: dict[NamedKey, int] = {
    NamedKey.CTRL: 1,
    NamedKey.SHIFT: 2,
    NamedKey.ALT: 3,
    NamedKey.BACKSPACE: 4,
    NamedKey.CAPS_LOCK: 5,
    NamedKey.DELETE: 6,
    NamedKey.DOWN: 7,
    NamedKey.UP: 8,
    NamedKey.LEFT: 9,
    NamedKey.RIGHT: 10,
    NamedKey.END: 11,
    NamedKey.ESCAPE: 12,
    # Function keys (F1=13 .. F20=32)
    NamedKey.F1: 13, NamedKey.F2: 14, NamedKey.F3: 15, NamedKey.F4: 16,
    NamedKey.F5: 17, NamedKey.F6: 18, NamedKey.F7: 19, NamedKey.F8: 20,
    NamedKey.F9: 21, NamedKey.F10: 22, NamedKey.F11: 23, NamedKey.F12: 24,
    NamedKey.F13: 25, NamedKey.F14: 26, NamedKey.F15: 27, NamedKey.F16: 28,
    NamedKey.F17: 29, NamedKey.F18: 30, NamedKey.F19: 31, NamedKey.F20: 32,
    NamedKey.HELP: 33,
    NamedKey.HOME: 34,
    NamedKey.META: 35,
    NamedKey.OPTION: 36,
    NamedKey.PAGE_DOWN: 37,
    NamedKey.PAGE_UP: 38,
    NamedKey.RETURN: 39,
    NamedKey.SPACE: 40,
    NamedKey.TAB: 41,
}

KEYS_BY_MODE: dict[int, NamedKey] = {v: k for k, v in MODE_CODES.items()}

# Highest code point a character frame may carry
MAX_CHAR_CODE: int = 0x7F

# TCP port both roles use unless told otherwise
DEFAULT_PORT: int = 58008


def state_for(action: KeyAction) -> int:
    """Return the state byte for a key action."""
    return STATE_CODES[action]


def action_for_state(state: int) -> KeyAction:
    """Convert a state byte back into a key action.

    Raises:
        ValueError: If the byte is neither pressed nor released.
    """
    if state not in ACTIONS_BY_STATE:
        raise ValueError(f"Invalid state byte: {state}")
    return ACTIONS_BY_STATE[state]


def mode_for(key: NamedKey) -> int:
    """Return the mode byte for a named key."""
    return MODE_CODES[key]


def key_for_mode(mode: int) -> NamedKey:
    """Convert a named-key mode byte back into its key.

    ``MODE_CHAR`` is not a named key and is rejected here; callers handle
    character frames before reaching this lookup.

    Raises:
        ValueError: If the mode is not in the table.
    """
    if mode not in KEYS_BY_MODE:
        raise ValueError(f"Invalid mode byte: {mode}")
    return KEYS_BY_MODE[mode]

