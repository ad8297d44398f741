"""Tk keysym -> KeySymbol mapping.

This table is the client-side pass-filter: a keysym missing from it is
silently never sent. Letters fold to upper case so each physical key has
one code; the host rebuilds case from the Shift/CapsLock transitions.
"""

from __future__ import annotations

import string

from remote_keyboard.domain.models import Char, KeyAction, KeyEvent, KeySymbol, KeyTransition, NamedKey

# Tk names for printable ASCII characters that are not their own keysym
PUNCTUATION_KEYSYMS: dict[str, str] = {
    "exclam": "!", "quotedbl": '"', "numbersign": "#", "dollar": "$",
    "percent": "%", "ampersand": "&", "apostrophe": "'", "quoteright": "'",
    "parenleft": "(", "parenright": ")", "asterisk": "*", "plus": "+",
    "comma": ",", "minus": "-", "period": ".", "slash": "/",
    "colon": ":", "semicolon": ";", "less": "<", "equal": "=",
    "greater": ">", "question": "?", "at": "@", "bracketleft": "[",
    "backslash": "\\", "bracketright": "]", "asciicircum": "^",
    "underscore": "_", "grave": "`", "quoteleft": "`", "braceleft": "{",
    "bar": "|", "braceright": "}", "asciitilde": "~",
}

KEYPAD_KEYSYMS: dict[str, str] = {
    **{f"KP_{d}": d for d in string.digits},
    "KP_Add": "+",
    "KP_Subtract": "-",
    "KP_Multiply": "*",
    "KP_Divide": "/",
    "KP_Decimal": ".",
    "KP_Separator": ",",
    "KP_Equal": "=",
}

NAMED_KEYSYMS: dict[str, NamedKey] = {
    # Modifiers (left and right collapse)
    "Control_L": NamedKey.CTRL, "Control_R": NamedKey.CTRL,
    "Shift_L": NamedKey.SHIFT, "Shift_R": NamedKey.SHIFT,
    "Alt_L": NamedKey.ALT, "Alt_R": NamedKey.ALT,
    "Super_L": NamedKey.META, "Super_R": NamedKey.META,
    "Win_L": NamedKey.META, "Win_R": NamedKey.META,
    "Meta_L": NamedKey.META, "Meta_R": NamedKey.META,
    "Option_L": NamedKey.OPTION, "Option_R": NamedKey.OPTION,
    "Caps_Lock": NamedKey.CAPS_LOCK,
    # Navigation
    "Up": NamedKey.UP, "Down": NamedKey.DOWN,
    "Left": NamedKey.LEFT, "Right": NamedKey.RIGHT,
    "Home": NamedKey.HOME, "End": NamedKey.END,
    "Prior": NamedKey.PAGE_UP, "Page_Up": NamedKey.PAGE_UP,
    "Next": NamedKey.PAGE_DOWN, "Page_Down": NamedKey.PAGE_DOWN,
    # Editing
    "BackSpace": NamedKey.BACKSPACE,
    "Delete": NamedKey.DELETE,
    "Return": NamedKey.RETURN, "KP_Enter": NamedKey.RETURN,
    "Tab": NamedKey.TAB, "ISO_Left_Tab": NamedKey.TAB,
    "space": NamedKey.SPACE,
    "Escape": NamedKey.ESCAPE,
    "Help": NamedKey.HELP,
    # Function keys
    **{f"F{i}": NamedKey(f"f{i}") for i in range(1, 21)},
}


def _build_keymap() -> dict[str, KeySymbol]:
    keymap: dict[str, KeySymbol] = {}
    for letter in string.ascii_letters:
        keymap[letter] = Char(value=letter.upper())
    for digit in string.digits:
        keymap[digit] = Char(value=digit)
    for keysym, char in {**PUNCTUATION_KEYSYMS, **KEYPAD_KEYSYMS}.items():
        keymap[keysym] = Char(value=char)
    keymap.update(NAMED_KEYSYMS)
    return keymap


KEYMAP: dict[str, KeySymbol] = _build_keymap()


def symbol_for(code: str) -> KeySymbol | None:
    """Return the KeySymbol for a keysym, or None if it is not forwarded."""
    return KEYMAP.get(code)


def to_key_event(transition: KeyTransition) -> KeyEvent | None:
    """Turn a raw transition into a KeyEvent, or None if it is filtered out."""
    symbol = symbol_for(transition.code)
    if symbol is None:
        return None
    action = KeyAction.PRESSED if transition.pressed else KeyAction.RELEASED
    return KeyEvent(action=action, symbol=symbol)
