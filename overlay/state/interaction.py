"""
Interaction State Store

The single authoritative mutable structure of a session.

LIFECYCLE:
==========
Created once at session start (empty query, nothing hovered or
selected), mutated in place by the interaction layer, read by the
display reducers on every frame. Never persisted.

INVARIANTS:
===========
1. hovered_neighbors is None iff hovered_node is None
2. hovered_neighbors == neighbors(hovered_node) whenever set
3. selected_node and a non-empty suggestions set never come from
   the same query resolution
4. click_mode is True iff clicked_node is set
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Optional

from graphdata.contracts.base import NodeId


@dataclass
class InteractionState:
    """Mutable interaction state, owned by one ExplorationSession."""
    search_query: str = ""

    # Hover
    hovered_node: Optional[NodeId] = None
    hovered_neighbors: Optional[FrozenSet[NodeId]] = None

    # State derived from the query
    selected_node: Optional[NodeId] = None
    suggestions: Optional[FrozenSet[NodeId]] = None

    # Click pin
    clicked_node: Optional[NodeId] = None
    click_mode: bool = False

    def snapshot(self) -> StateSnapshot:
        """Immutable copy for audit records and API responses."""
        return StateSnapshot(
            search_query=self.search_query,
            hovered_node=self.hovered_node,
            hovered_neighbors=self.hovered_neighbors,
            selected_node=self.selected_node,
            suggestions=self.suggestions,
            clicked_node=self.clicked_node,
            click_mode=self.click_mode,
        )


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only copy of InteractionState at one point in time."""
    search_query: str
    hovered_node: Optional[NodeId]
    hovered_neighbors: Optional[FrozenSet[NodeId]]
    selected_node: Optional[NodeId]
    suggestions: Optional[FrozenSet[NodeId]]
    clicked_node: Optional[NodeId]
    click_mode: bool

    def to_dict(self) -> dict:
        return {
            "search_query": self.search_query,
            "hovered_node": self.hovered_node,
            "hovered_neighbors": _sorted_or_none(self.hovered_neighbors),
            "selected_node": self.selected_node,
            "suggestions": _sorted_or_none(self.suggestions),
            "clicked_node": self.clicked_node,
            "click_mode": self.click_mode,
        }


def _sorted_or_none(ids: Optional[FrozenSet[NodeId]]):
    return None if ids is None else sorted(ids)
