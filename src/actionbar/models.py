"""Value types shared by the ranking, grouping and selection engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any, NewType, Self

ActionIndex = NewType("ActionIndex", int)
"""Position of an action in the original action list."""

SurvivorIndex = NewType("SurvivorIndex", int)
"""Position of an action in the ranked survivor sequence."""


class ActionCategory(StrEnum):
    """Opaque grouping tag carried through from the builders."""

    SCRIPT_CONTEXT = "script_context"
    SCRIPT_OPS = "script_ops"
    GLOBAL_OPS = "global_ops"
    TERMINAL = "terminal"


class SectionStyle(StrEnum):
    """How sections are presented in a dialog."""

    HEADERS = "headers"
    SEPARATORS = "separators"
    NONE = "none"


def _lower(text: str | None) -> str | None:
    return text.lower() if text is not None else None


@dataclass(frozen=True, slots=True)
class Action:
    """One selectable entry of an actions popup.

    The ``*_lower`` fields are derived from their source fields on every
    construction, including the copies returned by the ``with_*`` setters.
    """

    id: str
    title: str
    description: str | None = None
    category: ActionCategory = ActionCategory.SCRIPT_CONTEXT
    shortcut: str | None = None
    section: str | None = None
    icon: Any = None
    has_action: bool = False
    value: str | None = None
    title_lower: str = field(init=False, repr=False, compare=False)
    description_lower: str | None = field(init=False, repr=False, compare=False)
    shortcut_lower: str | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "title_lower", self.title.lower())
        object.__setattr__(self, "description_lower", _lower(self.description))
        object.__setattr__(self, "shortcut_lower", _lower(self.shortcut))

    @classmethod
    def new(
        cls,
        id: str,
        title: str,
        description: str | None = None,
        category: ActionCategory = ActionCategory.SCRIPT_CONTEXT,
    ) -> Self:
        return cls(id=id, title=title, description=description, category=category)

    def with_title(self, title: str) -> Self:
        return replace(self, title=title)

    def with_description(self, description: str | None) -> Self:
        return replace(self, description=description)

    def with_shortcut(self, shortcut: str) -> Self:
        """Set the display shortcut (already symbol formatted, e.g. "⌘⇧C")."""
        return replace(self, shortcut=shortcut)

    def with_shortcut_opt(self, shortcut: str | None) -> Self:
        return replace(self, shortcut=shortcut)

    def with_icon(self, icon: Any) -> Self:
        return replace(self, icon=icon)

    def with_section(self, section: str) -> Self:
        return replace(self, section=section)


@dataclass(frozen=True, slots=True)
class SectionHeader:
    """Non-selectable row labelling the actions that follow it."""

    label: str


@dataclass(frozen=True, slots=True)
class Item:
    """Selectable row pointing into the survivor sequence."""

    index: SurvivorIndex


type Row = SectionHeader | Item


def is_selectable(row: Row) -> bool:
    return isinstance(row, Item)
