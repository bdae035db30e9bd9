"""Tests for row building and selection coercion."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from actionbar.grouping import (
    build_rows,
    coerce_selection,
    count_section_headers,
    first_selectable_index,
    initial_selection_index,
    last_selectable_index,
    selectable_index_at_or_after,
    selectable_index_at_or_before,
    should_render_section_separator,
)
from actionbar.matching import rank_actions
from actionbar.models import (
    Action,
    ActionIndex,
    Item,
    SectionHeader,
    SectionStyle,
    SurvivorIndex,
    is_selectable,
)

pytestmark = pytest.mark.unit


def _sectioned(*sections: str | None) -> list[Action]:
    actions = []
    for position, section in enumerate(sections):
        action = Action.new(f"a{position}", f"Action {position}")
        if section is not None:
            action = action.with_section(section)
        actions.append(action)
    return actions


def _all(actions: list[Action]) -> list[ActionIndex]:
    return [ActionIndex(index) for index in range(len(actions))]


def _item(position: int) -> Item:
    return Item(SurvivorIndex(position))


_rows = st.lists(
    st.one_of(
        st.builds(SectionHeader, st.sampled_from(["Copy", "Export", "Danger"])),
        st.builds(Item, st.integers(min_value=0, max_value=20)),
    ),
    max_size=15,
)


class TestBuildRows:
    def test_headers_inserted_on_section_change(self):
        actions = _sectioned("S1", "S1", "S2")

        rows = build_rows(actions, _all(actions), SectionStyle.HEADERS)

        assert rows == [
            SectionHeader("S1"),
            _item(0),
            _item(1),
            SectionHeader("S2"),
            _item(2),
        ]

    @pytest.mark.parametrize("style", [SectionStyle.SEPARATORS, SectionStyle.NONE])
    def test_non_header_styles_emit_items_only(self, style):
        actions = _sectioned("S1", "S1", "S2")

        rows = build_rows(actions, _all(actions), style)

        assert rows == [_item(0), _item(1), _item(2)]

    def test_empty_survivors_produce_no_rows(self):
        actions = _sectioned("S1")

        assert build_rows(actions, [], SectionStyle.HEADERS) == []

    def test_unsectioned_actions_get_no_header(self):
        actions = _sectioned(None, None)

        assert build_rows(actions, _all(actions), SectionStyle.HEADERS) == [_item(0), _item(1)]

    def test_unsectioned_gap_repeats_section_header(self):
        actions = _sectioned("S1", None, "S1")

        rows = build_rows(actions, _all(actions), SectionStyle.HEADERS)

        assert rows == [SectionHeader("S1"), _item(0), _item(1), SectionHeader("S1"), _item(2)]

    def test_rank_order_can_split_a_section(self):
        actions = _sectioned("S1", "S2", "S1")
        survivors = [ActionIndex(0), ActionIndex(2), ActionIndex(1)]

        rows = build_rows(actions, survivors, SectionStyle.HEADERS)

        assert rows == [SectionHeader("S1"), _item(0), _item(1), SectionHeader("S2"), _item(2)]

    def test_items_point_at_survivor_positions(self):
        actions = _sectioned("S1", "S2", "S3")
        survivors = [ActionIndex(2), ActionIndex(0)]

        rows = build_rows(actions, survivors, SectionStyle.NONE)

        assert rows == [_item(0), _item(1)]

    @given(sections=st.lists(st.sampled_from(["A", "B", None]), max_size=10))
    def test_item_count_matches_survivors(self, sections):
        actions = _sectioned(*sections)

        rows = build_rows(actions, _all(actions), SectionStyle.HEADERS)
        items = [row for row in rows if isinstance(row, Item)]

        assert [item.index for item in items] == list(range(len(actions)))
        assert len(rows) - len(items) == count_section_headers(actions, _all(actions))
        if rows:
            assert isinstance(rows[-1], Item)


class TestCoerceSelection:
    def test_empty_rows(self):
        assert coerce_selection([], 0) is None

    def test_only_headers(self):
        assert coerce_selection([SectionHeader("A"), SectionHeader("B")], 0) is None

    def test_item_is_kept(self):
        rows = [SectionHeader("A"), _item(0), _item(1)]

        assert coerce_selection(rows, 2) == 2

    def test_header_moves_forward(self):
        rows = [SectionHeader("A"), _item(0), _item(1)]

        assert coerce_selection(rows, 0) == 1

    def test_trailing_header_moves_backward(self):
        rows = [_item(0), _item(1), SectionHeader("B")]

        assert coerce_selection(rows, 2) == 1

    def test_past_end_clamps_to_last(self):
        rows = [SectionHeader("A"), _item(0), _item(1)]

        assert coerce_selection(rows, 99) == 2

    def test_negative_clamps_to_first(self):
        rows = [SectionHeader("A"), _item(0)]

        assert coerce_selection(rows, -5) == 1

    def test_prefers_forward_over_backward(self):
        rows = [_item(0), SectionHeader("B"), _item(1)]

        assert coerce_selection(rows, 1) == 2

    @given(rows=_rows, desired=st.integers(min_value=-5, max_value=25))
    def test_result_is_selectable_or_none(self, rows, desired):
        result = coerce_selection(rows, desired)

        if any(is_selectable(row) for row in rows):
            assert result is not None
            assert is_selectable(rows[result])
        else:
            assert result is None

    @given(rows=_rows, desired=st.integers(min_value=0, max_value=25))
    def test_selectable_target_is_unchanged(self, rows, desired):
        if desired < len(rows) and is_selectable(rows[desired]):
            assert coerce_selection(rows, desired) == desired


class TestSelectableHelpers:
    ROWS = [SectionHeader("A"), _item(0), SectionHeader("B"), _item(1), _item(2)]

    def test_initial_selection_skips_leading_header(self):
        assert initial_selection_index(self.ROWS) == 1

    def test_first_and_last(self):
        assert first_selectable_index(self.ROWS) == 1
        assert last_selectable_index(self.ROWS) == 4

    def test_first_and_last_without_items(self):
        assert first_selectable_index([SectionHeader("A")]) is None
        assert last_selectable_index([]) is None

    def test_at_or_before(self):
        assert selectable_index_at_or_before(self.ROWS, 2) == 1
        assert selectable_index_at_or_before(self.ROWS, 0) is None
        assert selectable_index_at_or_before(self.ROWS, 50) == 4

    def test_at_or_after(self):
        assert selectable_index_at_or_after(self.ROWS, 2) == 3
        assert selectable_index_at_or_after(self.ROWS, -3) == 1
        assert selectable_index_at_or_after([_item(0), SectionHeader("B")], 1) is None


class TestSectionSeparators:
    def test_separator_between_different_sections(self):
        actions = _sectioned("S1", "S1", "S2")
        survivors = _all(actions)

        assert not should_render_section_separator(actions, survivors, 0)
        assert not should_render_section_separator(actions, survivors, 1)
        assert should_render_section_separator(actions, survivors, 2)

    def test_out_of_range_survivor(self):
        actions = _sectioned("S1", "S2")

        assert not should_render_section_separator(actions, _all(actions), 5)

    def test_section_to_unsectioned_is_a_change(self):
        actions = _sectioned("S1", None)

        assert should_render_section_separator(actions, _all(actions), 1)

    def test_count_section_headers(self, sectioned_actions):
        assert count_section_headers(sectioned_actions, _all(sectioned_actions)) == 3

    def test_count_section_headers_without_sections(self):
        actions = _sectioned(None, None)

        assert count_section_headers(actions, _all(actions)) == 0


class TestRankThenGroup:
    def test_script_menu_with_headers(self, script_actions):
        survivors = rank_actions(script_actions, "")
        rows = build_rows(script_actions, survivors, SectionStyle.HEADERS)

        assert rows == [
            SectionHeader("Primary"),
            _item(0),
            SectionHeader("File"),
            _item(1),
            _item(2),
        ]
        assert initial_selection_index(rows) == 1

    def test_query_narrows_to_single_section(self, script_actions):
        survivors = rank_actions(script_actions, "copy")
        rows = build_rows(script_actions, survivors, SectionStyle.HEADERS)

        assert survivors == [2]
        assert rows == [SectionHeader("File"), _item(0)]
        assert coerce_selection(rows, 0) == 1
