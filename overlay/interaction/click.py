"""
Click Controller
================

Arbitrates between transient hover and a pinned (click-locked) node.

STATES:
=======
- Idle:       click_mode=False, clicked_node=None
- Pinned(n):  click_mode=True,  clicked_node=n

TRANSITIONS:
============
- click(n)  Idle          -> Pinned(n), hover n
- click(n)  Pinned(n)     -> Idle, hover cleared
- click(m)  Pinned(n)     -> Pinned(m), hover m
- enter(n)  Idle only     -> hover n
- leave(n)  Idle only, clicked_node != n -> hover cleared

Pointer hover never fights a pin: while Pinned, enter/leave are ignored.
Double-click is not handled here; it does not touch this machine.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional

from graphdata.contracts.base import NodeId
from graphdata.core.provider import GraphDataProvider

from ..state.interaction import InteractionState
from .hover import set_hovered_node


class ClickState(Enum):
    IDLE = "idle"
    PINNED = "pinned"


class ClickController:
    """
    State machine over (clicked_node, click_mode) of a shared state.
    """

    def __init__(self, state: InteractionState, graph: GraphDataProvider):
        self._state = state
        self._graph = graph

    @property
    def mode(self) -> ClickState:
        return ClickState.PINNED if self._state.click_mode else ClickState.IDLE

    @property
    def pinned_node(self) -> Optional[NodeId]:
        return self._state.clicked_node

    # =========================================================================
    # POINTER EVENTS
    # =========================================================================

    def click(self, node: NodeId) -> bool:
        if self._state.click_mode and self._state.clicked_node == node:
            return self.release()
        return self.apply_selection(node)

    def enter(self, node: NodeId) -> bool:
        if self._state.click_mode:
            return False
        return set_hovered_node(self._state, self._graph, node)

    def leave(self, node: NodeId) -> bool:
        if self._state.click_mode or self._state.clicked_node == node:
            return False
        return set_hovered_node(self._state, self._graph, None)

    # =========================================================================
    # PIN OPERATIONS
    # =========================================================================

    def apply_selection(self, node: NodeId) -> bool:
        """
        Pin node and highlight its neighborhood.

        Shared by a click and by an exact search match. Hover is resolved
        first so an unknown node leaves the pin untouched.
        """
        changed = set_hovered_node(self._state, self._graph, node)
        changed = changed or not self._state.click_mode or self._state.clicked_node != node
        self._state.clicked_node = node
        self._state.click_mode = True
        return changed

    def release(self) -> bool:
        """Back to Idle with hover cleared."""
        changed = self._state.click_mode or self._state.hovered_node is not None
        self._state.clicked_node = None
        self._state.click_mode = False
        set_hovered_node(self._state, self._graph, None)
        return changed
