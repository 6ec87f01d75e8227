"""
Display Reducers
================

Per-frame display overrides derived from the interaction state.

Registered with the render engine and called once per node / edge per
redraw. They hold a read-only reference to the state and the graph and
never write to either.

NODE RULES (in order):
======================
1. Hovering: nodes outside the hovered neighborhood are dimmed
2. The selected node is highlighted; otherwise, while suggestions are
   active, non-suggested nodes are dimmed
3. Suggested nodes are highlighted with their true label and color,
   undoing any dimming from rule 1

EDGE RULES:
===========
1. Hovering: edges not incident to the hovered node are hidden
2. Suggestions active: edges without both endpoints suggested are hidden
Hiding is monotonic; no rule un-hides an edge.

FAILURE MODE:
=============
A lookup failure for an entity fails closed (node dimmed, edge hidden)
and is reported to the error sink. A frame never raises.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Generic, Optional, TypeVar

from graphdata.contracts.base import (
    NodeId, EdgeId, ErrorSink, Error, ErrorCode, GraphLookupError
)
from graphdata.core.provider import GraphDataProvider

from ..config import DEFAULT_MUTED_COLOR
from ..state.interaction import InteractionState
from .graph import NodeDisplayData, EdgeDisplayData


D = TypeVar('D')


class DisplayReducer(ABC, Generic[D]):
    """Callable strategy the render engine invokes per entity per frame."""

    def __init__(
        self,
        graph: GraphDataProvider,
        state: InteractionState,
        on_error: Optional[ErrorSink] = None
    ):
        self._graph = graph
        self._state = state
        self._on_error = on_error

    @abstractmethod
    def __call__(self, entity_id: str, data: D) -> D:
        ...

    def _report(self, exc: LookupError, entity_id: str, stage: str):
        if self._on_error is None:
            return
        if isinstance(exc, GraphLookupError):
            error = exc.to_error()
        else:
            error = Error.create(ErrorCode.ATTRIBUTE_MISSING, str(exc), entity_id=entity_id)
        self._on_error(error.with_context("stage", stage))


class NodeReducer(DisplayReducer[NodeDisplayData]):

    def __init__(
        self,
        graph: GraphDataProvider,
        state: InteractionState,
        muted_color: str = DEFAULT_MUTED_COLOR,
        on_error: Optional[ErrorSink] = None
    ):
        super().__init__(graph, state, on_error)
        self._muted_color = muted_color

    def __call__(self, node: NodeId, data: NodeDisplayData) -> NodeDisplayData:
        state = self._state
        res = data

        if (
            state.hovered_neighbors is not None
            and node not in state.hovered_neighbors
            and state.hovered_node != node
        ):
            res = self._dim(res)

        if state.selected_node == node:
            res = replace(res, highlighted=True)
        elif state.suggestions is not None and node not in state.suggestions:
            res = self._dim(res)

        if state.suggestions is not None and node in state.suggestions:
            try:
                attributes = self._graph.get_node_attributes(node)
                label = str(attributes["label"])
            except LookupError as exc:
                self._report(exc, node, "node_reducer")
                return self._dim(replace(res, highlighted=False))
            color = str(attributes.get("color", data.color))
            res = replace(res, highlighted=True, label=label, color=color)

        return res

    def _dim(self, data: NodeDisplayData) -> NodeDisplayData:
        return replace(data, label="", color=self._muted_color)


class EdgeReducer(DisplayReducer[EdgeDisplayData]):

    def __call__(self, edge: EdgeId, data: EdgeDisplayData) -> EdgeDisplayData:
        if data.hidden:
            return data

        state = self._state
        graph = self._graph
        hidden = False

        try:
            if state.hovered_node is not None and not graph.has_extremity(edge, state.hovered_node):
                hidden = True

            if state.suggestions is not None and (
                graph.source(edge) not in state.suggestions
                or graph.target(edge) not in state.suggestions
            ):
                hidden = True
        except LookupError as exc:
            self._report(exc, edge, "edge_reducer")
            hidden = True

        return replace(data, hidden=True) if hidden else data
