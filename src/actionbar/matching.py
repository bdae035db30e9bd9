"""Query matching, scoring and ranking of actions.

Every function here is pure and runs on each keystroke, so the scorer only
reads the precomputed lowercase caches of an :class:`~actionbar.models.Action`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from actionbar.models import ActionIndex

if TYPE_CHECKING:
    from collections.abc import Sequence

    from actionbar.models import Action

TITLE_PREFIX_SCORE = 100
TITLE_CONTAINS_SCORE = 50
TITLE_FUZZY_SCORE = 25
DESCRIPTION_SCORE = 15
SHORTCUT_SCORE = 10


def fuzzy_match(haystack: str, needle: str) -> bool:
    """Return True if the characters of ``needle`` appear in ``haystack`` in order.

    Both arguments are expected to be case-folded already.
    """
    if len(needle) > len(haystack):
        return False
    remaining = iter(haystack)
    # `in` consumes the iterator up to the match, so positions strictly increase.
    return all(char in remaining for char in needle)


def score_action(action: Action, query_lower: str) -> int:
    """Score ``action`` against an already lower-cased query; 0 means no match."""
    title = action.title_lower
    if title.startswith(query_lower):
        score = TITLE_PREFIX_SCORE
    elif query_lower in title:
        score = TITLE_CONTAINS_SCORE
    elif fuzzy_match(title, query_lower):
        score = TITLE_FUZZY_SCORE
    else:
        score = 0

    if action.description_lower is not None and query_lower in action.description_lower:
        score += DESCRIPTION_SCORE
    if action.shortcut_lower is not None and query_lower in action.shortcut_lower:
        score += SHORTCUT_SCORE
    return score


def rank_actions(actions: Sequence[Action], query: str) -> list[ActionIndex]:
    """Return the positions of the actions matching ``query``, best first.

    An empty query keeps every action in its original order. Otherwise actions
    scoring zero are dropped and ties keep their original relative order.
    """
    if not query:
        return [ActionIndex(index) for index in range(len(actions))]

    query_lower = query.lower()
    scored: list[tuple[ActionIndex, int]] = []
    for index, action in enumerate(actions):
        score = score_action(action, query_lower)
        if score > 0:
            scored.append((ActionIndex(index), score))

    scored.sort(key=lambda pair: pair[1], reverse=True)
    return [index for index, _ in scored]
