"""
Exploration Overlay Demo

Replays a scripted sequence of UI events against a graph and prints what
the overlay shows after each one:
search-as-you-type -> exact match pin -> blur -> hover -> click pin.

Runs on a GEXF file when given one, otherwise on a small built-in graph.
"""

import argparse
import sys

from graphdata.core.provider import NetworkXGraphProvider, build_graph
from overlay import ExplorationSession, SessionConfig
from overlay.interaction.contracts import ActionType, InteractionRequest


def sample_graph() -> NetworkXGraphProvider:
    people = [
        ("alice", "Alice", "#e6194b", 0.0, 0.0),
        ("bob", "Bob", "#3cb44b", 1.0, 0.5),
        ("alicia", "Alicia", "#4363d8", -1.0, 0.5),
        ("carol", "Carol", "#f58231", 0.0, 1.5),
        ("dave", "Dave", "#911eb4", 2.0, -1.0),
    ]
    return build_graph(
        nodes=[
            (node_id, {"label": label, "color": color, "x": x, "y": y, "size": 5.0})
            for node_id, label, color, x, y in people
        ],
        edges=[
            ("alice", "bob"), ("alice", "alicia"), ("bob", "carol"),
            ("alicia", "carol"), ("bob", "dave"),
        ],
    )


def print_frame(session: ExplorationSession, title: str):
    frame = session.frame
    state = session.snapshot()
    print(f"\n=== {title} ===")
    print(f"  query={state.search_query!r} selected={state.selected_node} "
          f"hovered={state.hovered_node} pinned={state.clicked_node}")
    if state.suggestions is not None:
        print(f"  suggestions={sorted(state.suggestions)}")
    for node in frame.nodes:
        d = node.display
        marker = "*" if d.highlighted else " "
        print(f"  {marker} {node.node_id:<10} label={d.label!r:<10} color={d.color}")
    visible = [e.edge_id for e in frame.visible_edges]
    print(f"  visible edges: {visible}")


def main():
    parser = argparse.ArgumentParser(
        description="Exploration Overlay Demo - scripted interaction trace",
    )
    parser.add_argument(
        '--gexf', '-g',
        default=None,
        help='GEXF file to explore (defaults to a built-in sample graph)'
    )
    parser.add_argument(
        '--query', '-q',
        default=None,
        help='Exact label to search for (defaults to the second node label)'
    )
    args = parser.parse_args()

    graph = NetworkXGraphProvider.from_gexf(args.gexf) if args.gexf else sample_graph()
    opened = []
    session = ExplorationSession(graph, config=SessionConfig.from_env(), opener=opened.append)

    if not graph.nodes():
        print("[!] Graph has no nodes.")
        return 1

    labels = session.autocomplete
    if not labels and not args.query:
        print("[!] Graph has no labelled nodes; pass --query.")
        return 1
    exact = args.query or (labels[1] if len(labels) > 1 else labels[0])
    first = graph.nodes()[0]

    script = [
        ("Typing a partial query", InteractionRequest.create(ActionType.SEARCH_INPUT, query=exact[:2])),
        ("Exact match selects and pins", InteractionRequest.create(ActionType.SEARCH_INPUT, query=exact)),
        ("Blur clears the search", InteractionRequest.create(ActionType.SEARCH_BLUR)),
        ("Hover highlights a neighborhood", InteractionRequest.create(ActionType.POINTER_ENTER, node=first)),
        ("Click pins the hovered node", InteractionRequest.create(ActionType.POINTER_CLICK, node=first)),
        ("Pointer leave is ignored while pinned", InteractionRequest.create(ActionType.POINTER_LEAVE, node=first)),
        ("Re-click releases the pin", InteractionRequest.create(ActionType.POINTER_CLICK, node=first)),
    ]

    print(f"[*] Graph: {len(graph.nodes())} nodes, {len(graph.edges())} edges")
    print(f"[*] Autocomplete: {list(labels)[:10]}")

    for title, request in script:
        session.dispatch(request)
        print_frame(session, title)

    session.dispatch(InteractionRequest.create(ActionType.POINTER_DOUBLE_CLICK, node=first))
    print(f"\n[*] Double-click would open: {opened[-1]}")

    metrics = session.observability.get_metrics()
    if metrics:
        frames = metrics.compute_aggregates("frames_rendered_total")
        print(f"[*] Frames rendered: {int(frames.get('sum', 0))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
