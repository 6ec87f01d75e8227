"""
Display Reducer Tests

NODE RULES:
===========
1. Hover dims everything outside the hovered neighborhood
2. Selection highlights; suggestions dim non-members
3. Suggestion members are highlighted with their true label and color

EDGE RULES:
===========
Hover and suggestions each hide independently; hiding is monotonic.
"""

import pytest

from graphdata.contracts.base import ErrorCode
from overlay.state import InteractionState
from overlay.visualization.graph import NodeDisplayData, EdgeDisplayData
from overlay.visualization.reducers import NodeReducer, EdgeReducer

from tests.fixtures import (
    MUTED, PEOPLE, create_people_graph, VanishingNodeGraph, ErrorRecorder
)


def base_node(node_id: str) -> NodeDisplayData:
    attributes = PEOPLE[node_id]
    return NodeDisplayData(
        label=attributes["label"], color=attributes["color"],
        x=attributes["x"], y=attributes["y"], size=attributes["size"],
    )


BASE_EDGE = EdgeDisplayData(color="#cccccc")


@pytest.fixture
def graph():
    return create_people_graph()


@pytest.fixture
def state():
    return InteractionState()


def hover(state: InteractionState, node: str, neighbors):
    state.hovered_node = node
    state.hovered_neighbors = frozenset(neighbors)


class TestNodeReducer:

    def test_no_state_means_no_override(self, graph, state):
        reducer = NodeReducer(graph, state)
        for node in PEOPLE:
            assert reducer(node, base_node(node)) == base_node(node)

    def test_hover_dims_outside_neighborhood(self, graph, state):
        hover(state, "A", {"B", "C"})
        reducer = NodeReducer(graph, state)

        for node in ("A", "B", "C"):
            assert reducer(node, base_node(node)) == base_node(node)

        dimmed = reducer("D", base_node("D"))
        assert dimmed.label == ""
        assert dimmed.color == MUTED
        assert dimmed.highlighted is False

    def test_selected_node_is_highlighted(self, graph, state):
        state.selected_node = "B"
        hover(state, "B", {"A", "D"})
        reducer = NodeReducer(graph, state)

        selected = reducer("B", base_node("B"))
        assert selected.highlighted is True
        assert selected.label == "Bob"

    def test_selected_node_outside_hover_is_dimmed_but_highlighted(self, graph, state):
        state.selected_node = "D"
        hover(state, "A", {"B", "C"})
        result = NodeReducer(graph, state)("D", base_node("D"))
        assert result.highlighted is True
        assert result.label == ""

    def test_suggestions_dim_non_members(self, graph, state):
        state.suggestions = frozenset({"A", "C"})
        reducer = NodeReducer(graph, state)

        bob = reducer("B", base_node("B"))
        assert bob.label == ""
        assert bob.color == MUTED
        assert not bob.highlighted

    def test_suggestion_members_restore_true_attributes(self, graph, state):
        state.suggestions = frozenset({"A", "C"})
        # Hovering B would otherwise dim C
        hover(state, "B", {"A", "D"})
        reducer = NodeReducer(graph, state)

        alicia = reducer("C", base_node("C"))
        assert alicia.highlighted is True
        assert alicia.label == "Alicia"
        assert alicia.color == PEOPLE["C"]["color"]

    def test_empty_suggestions_dim_everything(self, graph, state):
        state.suggestions = frozenset()
        reducer = NodeReducer(graph, state)
        for node in PEOPLE:
            result = reducer(node, base_node(node))
            assert result.label == ""
            assert result.color == MUTED

    def test_empty_neighborhood_still_dims(self, graph, state):
        hover(state, "A", set())
        result = NodeReducer(graph, state)("B", base_node("B"))
        assert result.color == MUTED

    def test_custom_muted_color(self, graph, state):
        state.suggestions = frozenset()
        result = NodeReducer(graph, state, muted_color="#101010")("A", base_node("A"))
        assert result.color == "#101010"

    def test_lookup_failure_fails_closed(self, state):
        recorder = ErrorRecorder()
        state.suggestions = frozenset({"A", "C"})
        reducer = NodeReducer(VanishingNodeGraph("C"), state, on_error=recorder)

        result = reducer("C", base_node("C"))

        assert result.highlighted is False
        assert result.label == ""
        assert result.color == MUTED
        assert recorder.errors[0].code == ErrorCode.NODE_NOT_FOUND
        assert ("stage", "node_reducer") in recorder.errors[0].context

    def test_reducer_does_not_mutate_state(self, graph, state):
        state.suggestions = frozenset({"A"})
        hover(state, "B", {"A", "D"})
        before = state.snapshot()
        reducer = NodeReducer(graph, state)
        for node in PEOPLE:
            reducer(node, base_node(node))
        assert state.snapshot() == before


class TestEdgeReducer:

    def test_no_state_means_visible(self, graph, state):
        reducer = EdgeReducer(graph, state)
        assert reducer("e_ab", BASE_EDGE) == BASE_EDGE

    def test_hover_hides_non_incident_edges(self, graph, state):
        hover(state, "A", {"B", "C"})
        reducer = EdgeReducer(graph, state)
        assert not reducer("e_ab", BASE_EDGE).hidden
        assert not reducer("e_ac", BASE_EDGE).hidden
        assert reducer("e_bd", BASE_EDGE).hidden

    def test_suggestions_require_both_endpoints(self, graph, state):
        state.suggestions = frozenset({"A", "C"})
        reducer = EdgeReducer(graph, state)
        assert not reducer("e_ac", BASE_EDGE).hidden
        assert reducer("e_ab", BASE_EDGE).hidden
        assert reducer("e_bd", BASE_EDGE).hidden

    def test_filters_combine(self, graph, state):
        state.suggestions = frozenset({"A", "C"})
        hover(state, "B", {"A", "D"})
        reducer = EdgeReducer(graph, state)
        # Incident to B but B is not suggested
        assert reducer("e_ab", BASE_EDGE).hidden
        # Both suggested but not incident to B
        assert reducer("e_ac", BASE_EDGE).hidden

    def test_hiding_is_monotonic(self, graph, state):
        hidden = EdgeDisplayData(color="#cccccc", hidden=True)
        reducer = EdgeReducer(graph, state)
        assert reducer("e_ab", hidden).hidden

        state.suggestions = frozenset({"A", "B"})
        hover(state, "A", {"B", "C"})
        assert reducer("e_ab", hidden).hidden

    def test_unknown_edge_fails_closed(self, graph, state):
        recorder = ErrorRecorder()
        hover(state, "A", {"B", "C"})
        reducer = EdgeReducer(graph, state, on_error=recorder)

        assert reducer("e_ghost", BASE_EDGE).hidden
        assert recorder.errors[0].code == ErrorCode.EDGE_NOT_FOUND
