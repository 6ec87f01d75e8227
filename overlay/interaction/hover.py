"""
Hover Resolver

Neighborhood of the hovered node, and the one place that writes
hovered_node / hovered_neighbors so the pair never drifts apart.
"""

from __future__ import annotations
from typing import FrozenSet, Optional

from graphdata.contracts.base import NodeId
from graphdata.core.provider import GraphDataProvider

from ..state.interaction import InteractionState


def resolve_hover(
    node: Optional[NodeId],
    graph: GraphDataProvider
) -> Optional[FrozenSet[NodeId]]:
    """Direct neighbors of node, or None when nothing is hovered."""
    if node is None:
        return None
    return frozenset(graph.neighbors(node))


def set_hovered_node(
    state: InteractionState,
    graph: GraphDataProvider,
    node: Optional[NodeId]
) -> bool:
    """
    Store node and its neighbors on the state.

    Neighbors are resolved before anything is written, so an unknown
    node raises NodeNotFoundError with the state untouched.
    Returns whether the state changed.
    """
    neighbors = resolve_hover(node, graph)
    changed = state.hovered_node != node or state.hovered_neighbors != neighbors
    state.hovered_node = node
    state.hovered_neighbors = neighbors
    return changed
