"""USB HID keyboard usage codes for KeySymbols.

Reference: USB HID Usage Tables v1.4, Section 10 (Keyboard/Keypad Page 0x07).

A USB HID boot keyboard report is 8 bytes:
    [modifier_byte, 0x00, key1, key2, key3, key4, key5, key6]

- Byte 0: modifier bitmask (ctrl, shift, alt, meta for left/right)
- Byte 1: reserved (always 0x00)
- Bytes 2-7: up to 6 simultaneous key usage codes
"""

from __future__ import annotations

from remote_keyboard.domain.models import Char, KeySymbol, NamedKey

# ---------------------------------------------------------------------------
# Modifier bitmasks (byte 0 of HID report)
# ---------------------------------------------------------------------------

MODIFIER_NONE: int = 0x00
MODIFIER_LEFT_CTRL: int = 0x01
MODIFIER_LEFT_SHIFT: int = 0x02
MODIFIER_LEFT_ALT: int = 0x04
MODIFIER_LEFT_META: int = 0x08
MODIFIER_RIGHT_CTRL: int = 0x10
MODIFIER_RIGHT_SHIFT: int = 0x20
MODIFIER_RIGHT_ALT: int = 0x40
MODIFIER_RIGHT_META: int = 0x80

# Modifier keys never take a key slot; they only set a bit
MODIFIER_KEYS: dict[NamedKey, int] = {
    NamedKey.CTRL: MODIFIER_LEFT_CTRL,
    NamedKey.SHIFT: MODIFIER_LEFT_SHIFT,
    NamedKey.ALT: MODIFIER_LEFT_ALT,
    NamedKey.OPTION: MODIFIER_LEFT_ALT,
    NamedKey.META: MODIFIER_LEFT_META,
}

# ---------------------------------------------------------------------------
# Named key -> usage code
# ---------------------------------------------------------------------------

NAMED_KEY_CODES: dict[NamedKey, int] = {
    NamedKey.RETURN: 0x28,
    NamedKey.ESCAPE: 0x29,
    NamedKey.BACKSPACE: 0x2A,
    NamedKey.TAB: 0x2B,
    NamedKey.SPACE: 0x2C,
    NamedKey.CAPS_LOCK: 0x39,
    # F1=0x3A .. F12=0x45
    NamedKey.F1: 0x3A, NamedKey.F2: 0x3B, NamedKey.F3: 0x3C, NamedKey.F4: 0x3D,
    NamedKey.F5: 0x3E, NamedKey.F6: 0x3F, NamedKey.F7: 0x40, NamedKey.F8: 0x41,
    NamedKey.F9: 0x42, NamedKey.F10: 0x43, NamedKey.F11: 0x44, NamedKey.F12: 0x45,
    # Navigation
    NamedKey.HOME: 0x4A,
    NamedKey.PAGE_UP: 0x4B,
    NamedKey.DELETE: 0x4C,
    NamedKey.END: 0x4D,
    NamedKey.PAGE_DOWN: 0x4E,
    NamedKey.RIGHT: 0x4F, NamedKey.LEFT: 0x50,
    NamedKey.DOWN: 0x51, NamedKey.UP: 0x52,
    # F13=0x68 .. F20=0x6F
    NamedKey.F13: 0x68, NamedKey.F14: 0x69, NamedKey.F15: 0x6A, NamedKey.F16: 0x6B,
    NamedKey.F17: 0x6C, NamedKey.F18: 0x6D, NamedKey.F19: 0x6E, NamedKey.F20: 0x6F,
    NamedKey.HELP: 0x75,
}

# ---------------------------------------------------------------------------
# Unshifted ASCII character -> usage code (US layout)
# ---------------------------------------------------------------------------

CHAR_CODES: dict[str, int] = {
    # Letters (a=0x04 .. z=0x1D)
    "a": 0x04, "b": 0x05, "c": 0x06, "d": 0x07,
    "e": 0x08, "f": 0x09, "g": 0x0A, "h": 0x0B,
    "i": 0x0C, "j": 0x0D, "k": 0x0E, "l": 0x0F,
    "m": 0x10, "n": 0x11, "o": 0x12, "p": 0x13,
    "q": 0x14, "r": 0x15, "s": 0x16, "t": 0x17,
    "u": 0x18, "v": 0x19, "w": 0x1A, "x": 0x1B,
    "y": 0x1C, "z": 0x1D,
    # Numbers (1=0x1E .. 0=0x27)
    "1": 0x1E, "2": 0x1F, "3": 0x20, "4": 0x21,
    "5": 0x22, "6": 0x23, "7": 0x24, "8": 0x25,
    "9": 0x26, "0": 0x27,
    # Control characters that have a key of their own
    "\n": 0x28, "\r": 0x28,
    "\x1b": 0x29,
    "\b": 0x2A,
    "\t": 0x2B,
    " ": 0x2C,
    "\x7f": 0x4C,
    # Punctuation / symbols
    "-": 0x2D, "=": 0x2E,
    "[": 0x2F, "]": 0x30,
    "\\": 0x31,
    ";": 0x33, "'": 0x34,
    "`": 0x35,
    ",": 0x36, ".": 0x37, "/": 0x38,
}

# Characters that require Shift to type (US keyboard layout)
SHIFT_CHARS: dict[str, str] = {
    "!": "1", "@": "2", "#": "3", "$": "4",
    "%": "5", "^": "6", "&": "7", "*": "8",
    "(": "9", ")": "0", "_": "-", "+": "=",
    "{": "[", "}": "]", "|": "\\",
    ":": ";", '"': "'", "~": "`",
    "<": ",", ">": ".", "?": "/",
}


def char_to_hid(char: str) -> tuple[int, int]:
    """Convert a single character to (modifier_byte, usage_code).

    Letters are case-folded: the client sends one code per physical key,
    and the case comes from the Shift/CapsLock state replayed separately.

    Raises:
        ValueError: If the character has no known HID mapping.
    """
    if char.isascii() and char.isalpha():
        char = char.lower()
    if char in CHAR_CODES:
        return (MODIFIER_NONE, CHAR_CODES[char])
    if char in SHIFT_CHARS:
        return (MODIFIER_LEFT_SHIFT, CHAR_CODES[SHIFT_CHARS[char]])
    raise ValueError(f"No HID mapping for character: {char!r}")


def symbol_to_hid(symbol: KeySymbol) -> tuple[int, int]:
    """Convert a KeySymbol to (modifier_byte, usage_code).

    Modifier keys return their bit with a usage code of 0.

    Raises:
        ValueError: If the symbol has no known HID mapping.
    """
    if isinstance(symbol, Char):
        return char_to_hid(symbol.value)
    if symbol in MODIFIER_KEYS:
        return (MODIFIER_KEYS[symbol], 0x00)
    if symbol in NAMED_KEY_CODES:
        return (MODIFIER_NONE, NAMED_KEY_CODES[symbol])
    raise ValueError(f"No HID mapping for key: {symbol!r}")
