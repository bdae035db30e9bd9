"""Textual command palette provider backed by the actionbar ranking."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from textual.command import DiscoveryHit, Hit, Hits, Provider

from actionbar.matching import rank_actions

if TYPE_CHECKING:
    from collections.abc import Sequence

    from textual.screen import Screen

    from actionbar.models import Action


@runtime_checkable
class ActionHost(Protocol):
    """Screen that supplies context actions and dispatches the chosen one."""

    def get_context_actions(self) -> Sequence[Action]: ...

    def execute_action(self, action_id: str) -> Any: ...


def _context_actions(screen: Screen) -> Sequence[Action]:
    if not isinstance(screen, ActionHost):
        return ()
    return screen.get_context_actions()


async def run_host_action(screen: Screen, action_id: str) -> None:
    """Dispatch ``action_id`` on the host screen, awaiting async handlers."""
    if not isinstance(screen, ActionHost):
        return
    result = screen.execute_action(action_id)
    if asyncio.iscoroutine(result):
        await result


class ActionCommandProvider(Provider):
    """Command palette provider for the focused screen's context actions.

    Hits come out in actionbar rank order; the palette score is derived from
    the rank position so Textual keeps that order.
    """

    async def search(self, query: str) -> Hits:
        screen = self.screen
        actions = _context_actions(screen)
        survivors = rank_actions(actions, query)
        matcher = self.matcher(query)
        total = len(survivors)
        for position, action_index in enumerate(survivors):
            action = actions[action_index]
            yield Hit(
                (total - position) / total,
                matcher.highlight(action.title),
                partial(run_host_action, screen, action.id),
                text=action.title,
                help=action.description,
            )

    async def discover(self) -> Hits:
        screen = self.screen
        for action in _context_actions(screen):
            yield DiscoveryHit(
                action.title,
                partial(run_host_action, screen, action.id),
                text=action.title,
                help=action.description,
            )
