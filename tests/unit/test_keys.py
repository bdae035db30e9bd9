"""Tests for key-to-intent mapping and driving a dialog from keys."""

from __future__ import annotations

import pytest

from actionbar.config import DialogConfig
from actionbar.dialog import CANCEL_ACTION_ID, ActionsDialog
from actionbar.keys import COMMAND_BAR_BINDINGS, KeyIntent, Keystroke, apply_key, key_intent
from actionbar.models import SectionStyle

pytestmark = pytest.mark.unit


class TestKeyIntent:
    @pytest.mark.parametrize(
        ("key", "intent"),
        [
            ("up", KeyIntent.MOVE_UP),
            ("ArrowUp", KeyIntent.MOVE_UP),
            ("down", KeyIntent.MOVE_DOWN),
            ("home", KeyIntent.MOVE_HOME),
            ("end", KeyIntent.MOVE_END),
            ("pageup", KeyIntent.MOVE_PAGE_UP),
            ("pagedown", KeyIntent.MOVE_PAGE_DOWN),
            ("enter", KeyIntent.EXECUTE_SELECTED),
            ("Return", KeyIntent.EXECUTE_SELECTED),
            ("escape", KeyIntent.CLOSE),
            ("backspace", KeyIntent.BACKSPACE),
            ("delete", KeyIntent.BACKSPACE),
        ],
    )
    def test_named_keys(self, key, intent):
        assert key_intent(key) == Keystroke(intent)

    def test_named_keys_ignore_modifiers(self):
        assert key_intent("down", platform=True) == Keystroke(KeyIntent.MOVE_DOWN)

    @pytest.mark.parametrize("char", ["a", "Z", "7", "-", "_"])
    def test_plain_characters_type(self, char):
        assert key_intent(char) == Keystroke(KeyIntent.TYPE_CHAR, char)

    def test_space_types_a_space(self):
        assert key_intent("space") == Keystroke(KeyIntent.TYPE_CHAR, " ")

    @pytest.mark.parametrize("modifier", ["platform", "control", "alt"])
    def test_modified_characters_do_not_type(self, modifier):
        assert key_intent("c", **{modifier: True}) is None

    @pytest.mark.parametrize("key", ["tab", "left", "right", "shift", "f1", "question_mark", "!"])
    def test_non_text_keys_are_ignored(self, key):
        assert key_intent(key) is None

    def test_intents_name_dialog_methods(self):
        for intent in KeyIntent:
            if intent is KeyIntent.TYPE_CHAR:
                continue
            assert callable(getattr(ActionsDialog, intent.value))

    def test_bindings_cover_navigation_intents(self):
        actions = {binding.action for binding in COMMAND_BAR_BINDINGS}

        assert actions == {intent.value for intent in KeyIntent} - {KeyIntent.TYPE_CHAR.value}


class TestApplyKey:
    @pytest.fixture
    def dialog(self, script_actions) -> ActionsDialog:
        return ActionsDialog(script_actions, DialogConfig(section_style=SectionStyle.HEADERS))

    def test_navigate_then_submit(self, dialog):
        assert apply_key(dialog, "down") is None
        assert apply_key(dialog, "down") is None

        assert apply_key(dialog, "enter") == "copy_path"

    def test_typing_filters(self, dialog):
        for key in ["e", "d", "i", "t"]:
            apply_key(dialog, key)

        assert dialog.query == "edit"
        assert apply_key(dialog, "enter") == "edit_script"

    def test_backspace_edits_query(self, dialog):
        apply_key(dialog, "x")
        apply_key(dialog, "backspace")

        assert dialog.query == ""

    def test_escape_cancels(self, dialog):
        assert apply_key(dialog, "escape") == CANCEL_ACTION_ID

    def test_shortcut_chord_does_not_type(self, dialog):
        assert apply_key(dialog, "e", platform=True) is None
        assert dialog.query == ""

    def test_end_and_home(self, dialog):
        apply_key(dialog, "end")
        assert dialog.selected_index == 4

        apply_key(dialog, "home")
        assert dialog.selected_index == 1

    def test_enter_on_empty_results(self, dialog):
        for key in "zzz":
            apply_key(dialog, key)

        assert apply_key(dialog, "enter") is None
