"""
Property Tests for Interaction State and Display Reducers
Verifies the state invariants under arbitrary event sequences.
"""

from hypothesis import given, assume, settings, strategies as st
from hypothesis.strategies import composite

from graphdata.core.provider import build_graph
from overlay import ExplorationSession
from overlay.interaction.search import resolve_search
from overlay.visualization.graph import EdgeDisplayData
from overlay.visualization.reducers import EdgeReducer

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

LABEL_ALPHABET = "abAB"


@composite
def graphs(draw):
    """Generates small undirected graphs with short, collision-prone labels."""
    size = draw(st.integers(min_value=1, max_value=6))
    node_ids = [f"n{i}" for i in range(size)]
    nodes = [
        (node_id, {"label": draw(st.text(alphabet=LABEL_ALPHABET, min_size=1, max_size=3))})
        for node_id in node_ids
    ]
    pairs = draw(st.lists(
        st.tuples(st.sampled_from(node_ids), st.sampled_from(node_ids)),
        max_size=10,
    ))
    # No self loops
    edges = [(u, v) for u, v in pairs if u != v]
    return build_graph(nodes=nodes, edges=edges)


@composite
def events(draw, node_ids):
    """Generates one UI event against the given nodes."""
    kind = draw(st.sampled_from(["search", "blur", "enter", "leave", "click"]))
    if kind == "search":
        return kind, draw(st.text(alphabet=LABEL_ALPHABET, max_size=3))
    if kind == "blur":
        return kind, None
    return kind, draw(st.sampled_from(node_ids))


@composite
def scenarios(draw):
    """Generates a graph plus an event sequence over its nodes."""
    graph = draw(graphs())
    node_ids = sorted(graph.nodes())
    sequence = draw(st.lists(events(node_ids), max_size=15))
    return graph, sequence


def new_session(graph) -> ExplorationSession:
    return ExplorationSession(graph, opener=lambda url: None)


def replay(session: ExplorationSession, sequence):
    for kind, arg in sequence:
        if kind == "search":
            session.set_search_query(arg)
        elif kind == "blur":
            session.blur_search()
        elif kind == "enter":
            session.pointer_enter(arg)
        elif kind == "leave":
            session.pointer_leave(arg)
        else:
            session.pointer_click(arg)


# =============================================================================
# PROPERTY TESTS
# =============================================================================

@given(scenarios())
def test_hover_fields_move_together(scenario):
    """hovered_neighbors is set exactly when hovered_node is, and matches it."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)

    state = session.state
    assert (state.hovered_node is None) == (state.hovered_neighbors is None)
    if state.hovered_node is not None:
        assert state.hovered_neighbors == graph.neighbors(state.hovered_node)


@given(scenarios())
def test_click_mode_tracks_clicked_node(scenario):
    """click_mode is True iff a node is pinned; a pinned node is also hovered."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)

    state = session.state
    assert state.click_mode == (state.clicked_node is not None)
    if state.click_mode:
        assert state.hovered_node == state.clicked_node


@given(scenarios())
def test_selection_and_suggestions_are_exclusive(scenario):
    """A selected node never coexists with a suggestion set."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)

    state = session.state
    assert state.selected_node is None or state.suggestions is None


@given(scenarios())
def test_empty_query_always_clears(scenario):
    """Whatever came before, an empty query leaves no selection or suggestions."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)

    session.set_search_query("")
    assert session.state.selected_node is None
    assert session.state.suggestions is None

    # Without clicks, every pin came from a search and must be gone
    if all(kind != "click" for kind, _ in sequence):
        assert session.state.click_mode is False
        assert session.state.clicked_node is None


@given(graphs(), st.lists(st.text(alphabet=LABEL_ALPHABET, max_size=3), max_size=10))
def test_search_only_editing_never_leaves_a_pin_behind(graph, queries):
    """Any run of edits to the search box, then clearing it, leaves nothing pinned."""
    session = new_session(graph)
    for query in queries:
        session.set_search_query(query)
    session.blur_search()

    assert session.state.click_mode is False
    assert session.state.hovered_node is None


@given(graphs(), st.text(alphabet=LABEL_ALPHABET, min_size=1, max_size=3))
def test_suggestions_are_case_insensitive_substring_matches(graph, query):
    """Suggestions are exactly the nodes whose label contains the query."""
    resolution = resolve_search(query, graph)
    expected = {
        node for node in graph.nodes()
        if query.lower() in graph.get_node_attribute(node, "label").lower()
    }
    if resolution.is_exact:
        assert expected == {resolution.selected_node}
        assert graph.get_node_attribute(resolution.selected_node, "label") == query
    else:
        assert resolution.suggestions == frozenset(expected)


@given(graphs(), st.data())
def test_unique_exact_label_selects(graph, data):
    """A query equal to a label no other label contains selects that node."""
    node = data.draw(st.sampled_from(sorted(graph.nodes())))
    label = graph.get_node_attribute(node, "label")
    assume(all(
        label.lower() not in graph.get_node_attribute(other, "label").lower()
        for other in graph.nodes() if other != node
    ))

    session = new_session(graph)
    session.set_search_query(label)

    assert session.state.selected_node == node
    assert session.state.suggestions is None
    assert session.state.clicked_node == node


@given(scenarios(), st.data())
def test_click_twice_toggles_pin(scenario, data):
    """Clicking the same node twice in a row never leaves it pinned."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)

    node = data.draw(st.sampled_from(sorted(graph.nodes())))
    was_pinned_here = session.state.clicked_node == node
    session.pointer_click(node)
    session.pointer_click(node)

    if was_pinned_here:
        assert session.state.clicked_node == node
    else:
        assert session.state.click_mode is False
        assert session.state.hovered_node is None


@given(scenarios(), st.data())
def test_pointer_hover_is_suppressed_while_pinned(scenario, data):
    """Enter and leave do not move the hover while a node is pinned."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)
    assume(session.state.click_mode)

    before = session.snapshot()
    node = data.draw(st.sampled_from(sorted(graph.nodes())))
    assert session.pointer_enter(node) is False
    assert session.pointer_leave(node) is False
    assert session.snapshot() == before


@given(scenarios())
def test_hover_is_idempotent(scenario):
    """Entering the currently hovered node changes nothing."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)
    hovered = session.state.hovered_node
    assume(hovered is not None)

    before = session.snapshot()
    assert session.pointer_enter(hovered) is False
    assert session.snapshot() == before


@given(scenarios())
def test_rendering_does_not_mutate_state(scenario):
    """Reducers only read the state."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)

    before = session.snapshot()
    session.frame
    assert session.snapshot() == before


@given(scenarios())
def test_hidden_edges_stay_hidden(scenario):
    """An edge hidden before the reducer runs is hidden after it."""
    graph, sequence = scenario
    session = new_session(graph)
    replay(session, sequence)

    reducer = EdgeReducer(graph, session.state)
    hidden = EdgeDisplayData(color="#cccccc", hidden=True)
    for edge in graph.edges():
        assert reducer(edge, hidden).hidden


@settings(max_examples=50)
@given(scenarios())
def test_frames_are_deterministic(scenario):
    """The same event sequence over the same graph yields the same frame."""
    graph, sequence = scenario
    first = new_session(graph)
    second = new_session(graph)
    replay(first, sequence)
    replay(second, sequence)

    assert first.snapshot() == second.snapshot()
    assert first.frame.to_dict()["nodes"] == second.frame.to_dict()["nodes"]
    assert first.frame.to_dict()["edges"] == second.frame.to_dict()["edges"]
