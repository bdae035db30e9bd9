"""Pytest fixtures for actionbar tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from actionbar.models import Action

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="actionbar-tests-"))
os.environ["ACTIONBAR_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ["ACTIONBAR_DATA_DIR"] = str(_TEST_BASE_DIR / "data")


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def script_actions() -> list[Action]:
    """The script context menu used across the end-to-end tests."""
    return [
        Action.new("run_script", "Run Script", "Execute the focused script").with_section(
            "Primary"
        ),
        Action.new("edit_script", "Edit Script", "Open in $EDITOR")
        .with_shortcut("⌘E")
        .with_section("File"),
        Action.new("copy_path", "Copy Path", "Copy the script path")
        .with_shortcut("⌘⇧C")
        .with_section("File"),
    ]


@pytest.fixture
def sectioned_actions() -> list[Action]:
    """Eight actions across three sections, for paging and header tests."""
    layout = [
        ("Copy", ["copy_text", "copy_markdown", "copy_link"]),
        ("Export", ["export_pdf", "export_html"]),
        ("Danger", ["delete_entry", "move_to_trash", "clear_history"]),
    ]
    return [
        Action.new(action_id, action_id.replace("_", " ").title()).with_section(section)
        for section, ids in layout
        for action_id in ids
    ]
