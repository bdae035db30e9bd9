"""Keyboard handling for command bars.

Maps raw key names (as delivered by Textual, e.g. ``"up"``, ``"pagedown"``,
``"enter"``) to command-bar intents, and drives an
:class:`~actionbar.dialog.ActionsDialog` from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from textual.binding import Binding, BindingType

if TYPE_CHECKING:
    from actionbar.dialog import ActionsDialog


class KeyIntent(StrEnum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_HOME = "select_first"
    MOVE_END = "select_last"
    MOVE_PAGE_UP = "page_up"
    MOVE_PAGE_DOWN = "page_down"
    EXECUTE_SELECTED = "submit"
    CLOSE = "cancel"
    BACKSPACE = "backspace"
    TYPE_CHAR = "type_char"


@dataclass(frozen=True, slots=True)
class Keystroke:
    intent: KeyIntent
    char: str | None = None


# =============================================================================
# Command Bar Bindings
# =============================================================================

COMMAND_BAR_BINDINGS: list[BindingType] = [
    Binding("up", KeyIntent.MOVE_UP.value, "Up", show=False),
    Binding("down", KeyIntent.MOVE_DOWN.value, "Down", show=False),
    Binding("home", KeyIntent.MOVE_HOME.value, "First", show=False),
    Binding("end", KeyIntent.MOVE_END.value, "Last", show=False),
    Binding("pageup", KeyIntent.MOVE_PAGE_UP.value, "Page up", show=False),
    Binding("pagedown", KeyIntent.MOVE_PAGE_DOWN.value, "Page down", show=False),
    Binding("enter", KeyIntent.EXECUTE_SELECTED.value, "Run", key_display="↵", priority=True),
    Binding("escape", KeyIntent.CLOSE.value, "Close", key_display="⎋"),
    Binding("backspace", KeyIntent.BACKSPACE.value, "", show=False),
]

_UP_KEYS = frozenset({"up", "arrowup"})
_DOWN_KEYS = frozenset({"down", "arrowdown"})
_ENTER_KEYS = frozenset({"enter", "return"})
_ESCAPE_KEYS = frozenset({"escape", "esc"})
_BACKSPACE_KEYS = frozenset({"backspace", "delete"})
_NON_TEXT_KEYS = frozenset(
    {
        "tab",
        "left",
        "arrowleft",
        "right",
        "arrowright",
        "shift",
        "control",
        "alt",
        "meta",
        "cmd",
        "command",
        "capslock",
        "numlock",
        "scrolllock",
    }
)
_NAMED_INTENTS: dict[str, KeyIntent] = {
    "home": KeyIntent.MOVE_HOME,
    "end": KeyIntent.MOVE_END,
    "pageup": KeyIntent.MOVE_PAGE_UP,
    "pagedown": KeyIntent.MOVE_PAGE_DOWN,
}


def _is_typed_char(char: str) -> bool:
    return char.isalnum() or char.isspace() or char in "-_"


def key_intent(
    key: str,
    *,
    platform: bool = False,
    control: bool = False,
    alt: bool = False,
) -> Keystroke | None:
    """Map a key name plus held modifiers to a command-bar keystroke.

    Named navigation keys never type text. A plain character types only when no
    command modifier is held; multi-character names such as
    ``"f1"`` or ``"question_mark"`` never type.
    """
    name = key.lower()
    if name in _UP_KEYS:
        return Keystroke(KeyIntent.MOVE_UP)
    if name in _DOWN_KEYS:
        return Keystroke(KeyIntent.MOVE_DOWN)
    if name in _NAMED_INTENTS:
        return Keystroke(_NAMED_INTENTS[name])
    if name in _ENTER_KEYS:
        return Keystroke(KeyIntent.EXECUTE_SELECTED)
    if name in _ESCAPE_KEYS:
        return Keystroke(KeyIntent.CLOSE)
    if name in _BACKSPACE_KEYS:
        return Keystroke(KeyIntent.BACKSPACE)
    if name == "space":
        return Keystroke(KeyIntent.TYPE_CHAR, " ")
    if name in _NON_TEXT_KEYS:
        return None

    if platform or control or alt or len(key) != 1:
        return None
    if _is_typed_char(key):
        return Keystroke(KeyIntent.TYPE_CHAR, key)
    return None


def apply_key(
    dialog: ActionsDialog,
    key: str,
    *,
    platform: bool = False,
    control: bool = False,
    alt: bool = False,
) -> str | None:
    """Feed one key to ``dialog``.

    Returns:
        The action id to dispatch: the selected id on enter, the cancel id on
        escape, otherwise None.
    """
    keystroke = key_intent(key, platform=platform, control=control, alt=alt)
    if keystroke is None:
        return None

    match keystroke.intent:
        case KeyIntent.EXECUTE_SELECTED:
            return dialog.submit()
        case KeyIntent.CLOSE:
            return dialog.cancel()
        case KeyIntent.TYPE_CHAR:
            if keystroke.char is not None:
                dialog.push_char(keystroke.char)
        case KeyIntent.BACKSPACE:
            dialog.backspace()
        case _:
            getattr(dialog, keystroke.intent.value)()
    return None
