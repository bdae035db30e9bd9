"""Row building and selection coercion for grouped action lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from actionbar.models import Item, SectionHeader, SectionStyle, SurvivorIndex, is_selectable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from actionbar.models import Action, ActionIndex, Row

_UNSET = object()


def build_rows(
    actions: Sequence[Action],
    survivors: Sequence[ActionIndex],
    style: SectionStyle,
) -> list[Row]:
    """Turn the ranked survivors into renderable rows.

    Only ``SectionStyle.HEADERS`` inserts header rows. A header is emitted each
    time the section changes between consecutive survivors; unsectioned actions
    share one unlabelled bucket and never get a header of their own.
    """
    if style is not SectionStyle.HEADERS:
        return [Item(SurvivorIndex(position)) for position in range(len(survivors))]

    rows: list[Row] = []
    current: object = _UNSET
    for position, action_index in enumerate(survivors):
        section = actions[action_index].section
        if section != current:
            if section is not None:
                rows.append(SectionHeader(section))
            current = section
        rows.append(Item(SurvivorIndex(position)))
    return rows


def coerce_selection(rows: Sequence[Row], desired_index: int) -> int | None:
    """Return the selectable row nearest to ``desired_index``.

    Looks forward first, then backward. Returns None when no row is selectable.
    """
    if not rows:
        return None

    index = min(max(desired_index, 0), len(rows) - 1)
    if is_selectable(rows[index]):
        return index

    for candidate in range(index + 1, len(rows)):
        if is_selectable(rows[candidate]):
            return candidate
    for candidate in range(index - 1, -1, -1):
        if is_selectable(rows[candidate]):
            return candidate
    return None


def initial_selection_index(rows: Sequence[Row]) -> int | None:
    """Selection used when a dialog opens or its results change."""
    return coerce_selection(rows, 0)


def first_selectable_index(rows: Sequence[Row]) -> int | None:
    return next((index for index, row in enumerate(rows) if is_selectable(row)), None)


def last_selectable_index(rows: Sequence[Row]) -> int | None:
    return next(
        (index for index in range(len(rows) - 1, -1, -1) if is_selectable(rows[index])),
        None,
    )


def selectable_index_at_or_before(rows: Sequence[Row], start: int) -> int | None:
    if not rows:
        return None
    clamped = min(max(start, 0), len(rows) - 1)
    return next(
        (index for index in range(clamped, -1, -1) if is_selectable(rows[index])),
        None,
    )


def selectable_index_at_or_after(rows: Sequence[Row], start: int) -> int | None:
    if not rows:
        return None
    clamped = min(max(start, 0), len(rows) - 1)
    return next(
        (index for index in range(clamped, len(rows)) if is_selectable(rows[index])),
        None,
    )


def should_render_section_separator(
    actions: Sequence[Action],
    survivors: Sequence[ActionIndex],
    survivor_index: int,
) -> bool:
    """Whether a separator line goes above ``survivor_index`` in SEPARATORS mode."""
    if survivor_index <= 0 or survivor_index >= len(survivors):
        return False
    previous = actions[survivors[survivor_index - 1]]
    current = actions[survivors[survivor_index]]
    return previous.section != current.section


def count_section_headers(actions: Sequence[Action], survivors: Sequence[ActionIndex]) -> int:
    """Number of header rows the survivors produce in HEADERS mode."""
    rows = build_rows(actions, survivors, SectionStyle.HEADERS)
    return sum(1 for row in rows if isinstance(row, SectionHeader))
