"""Shortcut hint formatting and keycap splitting.

Raw specs such as ``"cmd+shift+c"`` are turned into the symbol form shown in
the popups (``"⌘⇧C"``). Actions store that formatted text, so matching a query
against a shortcut always compares against symbols.
"""

from __future__ import annotations

COMMAND = "⌘"
CONTROL = "⌃"
OPTION = "⌥"
SHIFT = "⇧"
RETURN = "↵"
ESCAPE = "⎋"
TAB = "⇥"
BACKSPACE = "⌫"
SPACE = "␣"
ARROW_UP = "↑"
ARROW_DOWN = "↓"
ARROW_LEFT = "←"
ARROW_RIGHT = "→"

_MODIFIER_SYMBOLS: dict[str, str] = {
    "cmd": COMMAND,
    "command": COMMAND,
    "super": COMMAND,
    "meta": COMMAND,
    "ctrl": CONTROL,
    "control": CONTROL,
    "alt": OPTION,
    "option": OPTION,
    "opt": OPTION,
    "shift": SHIFT,
}

_NAMED_KEY_SYMBOLS: dict[str, str] = {
    "return": RETURN,
    "enter": RETURN,
    "esc": ESCAPE,
    "escape": ESCAPE,
    "tab": TAB,
    "backspace": BACKSPACE,
    "delete": BACKSPACE,
    "space": SPACE,
    "arrowup": ARROW_UP,
    "up": ARROW_UP,
    "arrowdown": ARROW_DOWN,
    "down": ARROW_DOWN,
    "arrowleft": ARROW_LEFT,
    "left": ARROW_LEFT,
    "arrowright": ARROW_RIGHT,
    "right": ARROW_RIGHT,
}

KEY_SYMBOLS: dict[str, str] = {**_MODIFIER_SYMBOLS, **_NAMED_KEY_SYMBOLS}

KEYCAP_SYMBOLS = frozenset(KEY_SYMBOLS.values())


def _format_part(part: str) -> str:
    token = part.strip()
    return KEY_SYMBOLS.get(token.lower(), token.upper())


def format_shortcut_hint(raw: str) -> str:
    """Format a ``+``-separated shortcut for display.

    Unknown tokens are upper-cased verbatim (``"f1"`` becomes ``"F1"``), so any
    input produces a string.

    Examples:
        >>> format_shortcut_hint("cmd+shift+c")
        '⌘⇧C'
        >>> format_shortcut_hint("ctrl+alt+tab")
        '⌃⌥⇥'
    """
    if not raw:
        return ""
    return "".join(_format_part(part) for part in raw.split("+"))


def parse_shortcut_keycaps(formatted: str) -> list[str]:
    """Split a formatted hint into one keycap per symbol or character."""
    return [char if char in KEYCAP_SYMBOLS else char.upper() for char in formatted]


def shortcut_keycaps(raw: str) -> list[str]:
    """Keycaps for a raw shortcut string."""
    return parse_shortcut_keycaps(format_shortcut_hint(raw))
