"""Actions dialog session.

An :class:`ActionsDialog` lives for one open of a popup. It keeps the query
text and the cursor, and reruns the pure ranking/grouping pass whenever either
the query or the action snapshot changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from actionbar.config import DialogConfig, rebuild_required
from actionbar.grouping import (
    build_rows,
    coerce_selection,
    count_section_headers,
    first_selectable_index,
    initial_selection_index,
    last_selectable_index,
    selectable_index_at_or_after,
    selectable_index_at_or_before,
)
from actionbar.limits import COMMAND_BAR_PAGE_JUMP
from actionbar.matching import rank_actions
from actionbar.models import Item
from actionbar.protocol import actions_from_protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from actionbar.models import Action, ActionIndex, Row
    from actionbar.protocol import ProtocolAction

log = logging.getLogger(__name__)

CANCEL_ACTION_ID = "__cancel__"

_DESTRUCTIVE_IDS = frozenset({"move_to_trash", "reset_ranking", "clear_conversation"})
_DESTRUCTIVE_TITLE_PREFIXES = ("remove ", "delete ", "clear ", "move to trash")


def is_destructive_action(action: Action) -> bool:
    """Whether the row should use destructive styling.

    Stable ids are checked first, then title prefixes for script-defined actions.
    """
    action_id = action.id
    if (
        action_id in _DESTRUCTIVE_IDS
        or action_id.startswith(("remove_", "delete_"))
        or "_delete" in action_id
        or "_trash" in action_id
    ):
        return True
    return action.title_lower.startswith(_DESTRUCTIVE_TITLE_PREFIXES)


def empty_state_message(query: str) -> str:
    if not query.strip():
        return "No actions available"
    return "No actions match your search"


class ActionsDialog:
    """Query, rows and cursor of one open actions popup."""

    def __init__(
        self,
        actions: Sequence[Action] = (),
        config: DialogConfig | None = None,
        *,
        page_jump: int = COMMAND_BAR_PAGE_JUMP,
    ) -> None:
        self._config = config or DialogConfig()
        self._page_jump = page_jump
        self._actions: tuple[Action, ...] = tuple(actions)
        self._query = ""
        self._survivors: list[ActionIndex] = []
        self._rows: list[Row] = []
        self._protocol_actions: tuple[ProtocolAction, ...] | None = None
        self._protocol_indices: tuple[int, ...] = ()
        self.selected_index: int | None = None
        self._reset()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def actions(self) -> tuple[Action, ...]:
        return self._actions

    @property
    def query(self) -> str:
        return self._query

    @property
    def survivors(self) -> list[ActionIndex]:
        return list(self._survivors)

    @property
    def rows(self) -> list[Row]:
        return list(self._rows)

    @property
    def config(self) -> DialogConfig:
        return self._config

    def has_protocol_actions(self) -> bool:
        return self._protocol_actions is not None

    def count_section_headers(self) -> int:
        return count_section_headers(self._actions, self._survivors)

    def empty_state_message(self) -> str:
        return empty_state_message(self._query)

    # ------------------------------------------------------------------
    # Action snapshots
    # ------------------------------------------------------------------

    def set_actions(self, actions: Sequence[Action]) -> None:
        """Swap in a new snapshot of built-in actions and refilter."""
        previous_id = self.selected_action_id()
        self._actions = tuple(actions)
        self._protocol_actions = None
        self._protocol_indices = ()
        self._refilter(previous_id)

    def set_protocol_actions(self, items: Sequence[ProtocolAction]) -> None:
        """Replace the actions with script-defined ones and clear the query."""
        action_set = actions_from_protocol(items)
        self._actions = action_set.actions
        self._protocol_actions = tuple(items)
        self._protocol_indices = action_set.protocol_indices
        self._reset()

    def clear_protocol_actions(self, builtin_actions: Sequence[Action]) -> None:
        """Restore built-in actions if script-defined ones are active."""
        if self._protocol_actions is None:
            return
        log.info("Clearing protocol actions, restoring %d built-in actions", len(builtin_actions))
        self._actions = tuple(builtin_actions)
        self._protocol_actions = None
        self._protocol_indices = ()
        self._reset()

    def set_config(self, config: DialogConfig) -> None:
        previous = self._config
        if rebuild_required(previous, config):
            previous_id = self.selected_action_id()
            self._config = config
            self._refilter(previous_id)
        else:
            self._config = config

    # ------------------------------------------------------------------
    # Query editing
    # ------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        if query == self._query:
            return
        previous_id = self.selected_action_id()
        self._query = query
        self._refilter(previous_id)

    def push_char(self, char: str) -> None:
        self.set_query(self._query + char)

    def backspace(self) -> None:
        if self._query:
            self.set_query(self._query[:-1])

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------

    def move_up(self) -> bool:
        """Move to the previous selectable row, skipping headers."""
        if self.selected_index is None or self.selected_index == 0:
            return False
        for index in range(self.selected_index - 1, -1, -1):
            if isinstance(self._rows[index], Item):
                return self._select(index, "up")
        return False

    def move_down(self) -> bool:
        """Move to the next selectable row, skipping headers."""
        if self.selected_index is None:
            return False
        for index in range(self.selected_index + 1, len(self._rows)):
            if isinstance(self._rows[index], Item):
                return self._select(index, "down")
        return False

    def select_first(self) -> bool:
        index = first_selectable_index(self._rows)
        return index is not None and self._select(index, "first")

    def select_last(self) -> bool:
        index = last_selectable_index(self._rows)
        return index is not None and self._select(index, "last")

    def page_up(self) -> bool:
        if not self._rows:
            return False
        target = max((self.selected_index or 0) - self._page_jump, 0)
        index = selectable_index_at_or_before(self._rows, target)
        if index is None:
            index = first_selectable_index(self._rows)
        return index is not None and self._select(index, "page up")

    def page_down(self) -> bool:
        if not self._rows:
            return False
        target = min((self.selected_index or 0) + self._page_jump, len(self._rows) - 1)
        index = selectable_index_at_or_after(self._rows, target)
        if index is None:
            index = last_selectable_index(self._rows)
        return index is not None and self._select(index, "page down")

    def select_row(self, row_index: int) -> int | None:
        """Point the cursor at ``row_index``, coerced off headers."""
        self.selected_index = coerce_selection(self._rows, row_index)
        return self.selected_index

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def selected_survivor_index(self) -> int | None:
        """Survivor position under the cursor; None when on a header or nothing."""
        if self.selected_index is None:
            return None
        row = self._rows[self.selected_index]
        return row.index if isinstance(row, Item) else None

    def selected_action_index(self) -> ActionIndex | None:
        survivor = self.selected_survivor_index()
        if survivor is None:
            return None
        return self._survivors[survivor]

    def selected_action(self) -> Action | None:
        action_index = self.selected_action_index()
        if action_index is None:
            return None
        return self._actions[action_index]

    def selected_action_id(self) -> str | None:
        action = self.selected_action()
        return action.id if action is not None else None

    def selected_protocol_action(self) -> ProtocolAction | None:
        if self._protocol_actions is None:
            return None
        action_index = self.selected_action_index()
        if action_index is None or action_index >= len(self._protocol_indices):
            return None
        return self._protocol_actions[self._protocol_indices[action_index]]

    def selected_action_should_close(self) -> bool:
        """Built-in actions always close; script actions may opt out."""
        protocol_action = self.selected_protocol_action()
        if protocol_action is None:
            return True
        return protocol_action.should_close()

    def submit(self) -> str | None:
        """Return the id of the selected action, or None when nothing is selected."""
        action_id = self.selected_action_id()
        if action_id is not None:
            log.info("Action selected: %s", action_id)
        return action_id

    def cancel(self) -> str:
        log.info("Actions dialog cancelled")
        return CANCEL_ACTION_ID

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _select(self, index: int, direction: str) -> bool:
        self.selected_index = index
        log.debug("Cursor %s: selected_index=%d", direction, index)
        return True

    def _reset(self) -> None:
        self._query = ""
        self._survivors = rank_actions(self._actions, "")
        self._rows = build_rows(self._actions, self._survivors, self._config.section_style)
        self.selected_index = initial_selection_index(self._rows)

    def _refilter(self, previous_id: str | None) -> None:
        """Rerun ranking and grouping, keeping the previously selected action if it survived."""
        self._survivors = rank_actions(self._actions, self._query)
        self._rows = build_rows(self._actions, self._survivors, self._config.section_style)
        self.selected_index = self._row_for_action_id(previous_id)
        if self.selected_index is None:
            self.selected_index = initial_selection_index(self._rows)

        log.debug(
            "Filter changed: %d results, selected=%s",
            len(self._survivors),
            self.selected_index,
        )

    def _row_for_action_id(self, action_id: str | None) -> int | None:
        if action_id is None:
            return None
        survivor = next(
            (
                position
                for position, action_index in enumerate(self._survivors)
                if self._actions[action_index].id == action_id
            ),
            None,
        )
        if survivor is None:
            return None
        return next(
            (
                row_index
                for row_index, row in enumerate(self._rows)
                if isinstance(row, Item) and row.index == survivor
            ),
            None,
        )
