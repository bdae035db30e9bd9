"""actionbar: ranking, grouping and selection for contextual action popups."""

from actionbar.grouping import build_rows, coerce_selection
from actionbar.matching import fuzzy_match, rank_actions, score_action
from actionbar.models import (
    Action,
    ActionCategory,
    ActionIndex,
    Item,
    Row,
    SectionHeader,
    SectionStyle,
    SurvivorIndex,
)
from actionbar.shortcuts import format_shortcut_hint, parse_shortcut_keycaps

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionCategory",
    "ActionIndex",
    "Item",
    "Row",
    "SectionHeader",
    "SectionStyle",
    "SurvivorIndex",
    "build_rows",
    "coerce_selection",
    "format_shortcut_hint",
    "fuzzy_match",
    "parse_shortcut_keycaps",
    "rank_actions",
    "score_action",
]
