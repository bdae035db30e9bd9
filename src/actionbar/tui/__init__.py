"""Textual integration for actionbar."""

from actionbar.tui.provider import ActionCommandProvider, ActionHost

__all__ = ["ActionCommandProvider", "ActionHost"]
