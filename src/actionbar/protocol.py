"""Actions defined by scripts over the SDK protocol.

Scripts send their own actions as JSON. They are validated here, invisible
entries are dropped, and the rest become :class:`~actionbar.models.Action`
values with their shortcut formatted once up front.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from actionbar.models import Action, ActionCategory
from actionbar.shortcuts import format_shortcut_hint

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

log = logging.getLogger(__name__)


class ActionsFileError(Exception):
    """Raised when an actions file cannot be read or validated."""


class ProtocolAction(BaseModel):
    """An action as sent by a script (``hasAction``/``visible``/``close`` keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    description: str | None = None
    shortcut: str | None = Field(default=None, description="Raw shortcut, e.g. 'cmd+c'")
    value: str | None = None
    section: str | None = None
    has_action: bool = Field(
        default=False,
        description="True routes the selection back to the script instead of submitting value",
    )
    visible: bool | None = None
    close: bool | None = None

    def is_visible(self) -> bool:
        return self.visible is not False

    def should_close(self) -> bool:
        return self.close is not False

    def to_action(self) -> Action:
        shortcut = format_shortcut_hint(self.shortcut) if self.shortcut else None
        return Action(
            id=self.name,
            title=self.name,
            description=self.description,
            category=ActionCategory.SCRIPT_CONTEXT,
            shortcut=shortcut,
            section=self.section,
            has_action=self.has_action,
            value=self.value,
        )


@dataclass(frozen=True, slots=True)
class ProtocolActionSet:
    """Visible protocol actions plus where each came from in the payload."""

    actions: tuple[Action, ...]
    protocol_indices: tuple[int, ...]

    def protocol_index(self, action_index: int | None) -> int | None:
        """Map a visible action position back to its position in the payload."""
        if action_index is None or not 0 <= action_index < len(self.protocol_indices):
            return None
        return self.protocol_indices[action_index]


def actions_from_protocol(items: Iterable[ProtocolAction]) -> ProtocolActionSet:
    actions: list[Action] = []
    indices: list[int] = []
    seen: set[str] = set()
    duplicates: list[str] = []
    total = 0

    for protocol_index, item in enumerate(items):
        total += 1
        if not item.is_visible():
            continue
        if item.name in seen:
            duplicates.append(item.name)
        seen.add(item.name)
        indices.append(protocol_index)
        actions.append(item.to_action())

    if duplicates:
        log.warning(
            "Protocol actions contain duplicate names %s; selection maps by row position",
            duplicates,
        )
    log.info("Protocol actions set: %d visible of %d total", len(actions), total)
    return ProtocolActionSet(actions=tuple(actions), protocol_indices=tuple(indices))


_PROTOCOL_ACTION_LIST = TypeAdapter(list[ProtocolAction])


def parse_protocol_actions(payload: str | bytes) -> list[ProtocolAction]:
    try:
        return _PROTOCOL_ACTION_LIST.validate_json(payload)
    except ValidationError as exc:
        raise ActionsFileError(f"Invalid actions payload: {exc}") from exc


def load_protocol_actions(path: Path) -> list[ProtocolAction]:
    """Read a JSON array of protocol actions from ``path``."""
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise ActionsFileError(f"Cannot read actions file {path}: {exc}") from exc

    return parse_protocol_actions(payload)
