"""
Test Fixtures

Explicit, named graphs for deterministic testing.
No random generation here; property tests build their own graphs.
"""

from typing import List

import networkx as nx

from graphdata.contracts.base import Error, NodeNotFoundError
from graphdata.core.provider import NetworkXGraphProvider
from overlay import ExplorationSession, SessionConfig


MUTED = "#f6f6f6"


# =============================================================================
# PEOPLE GRAPH
# =============================================================================
#
#   Alicia(C) --- Alice(A) --- Bob(B) --- Dave(D)
#
# Edges: e_ab, e_ac, e_bd

PEOPLE = {
    "A": {"label": "Alice", "color": "#e6194b", "x": 0.0, "y": 0.0, "size": 4.0},
    "B": {"label": "Bob", "color": "#3cb44b", "x": 2.0, "y": 1.0, "size": 3.0},
    "C": {"label": "Alicia", "color": "#4363d8", "x": -2.0, "y": 1.0, "size": 3.0},
    "D": {"label": "Dave", "color": "#911eb4", "x": 4.0, "y": -1.0, "size": 2.0},
}

PEOPLE_EDGES = (
    ("e_ab", "A", "B"),
    ("e_ac", "A", "C"),
    ("e_bd", "B", "D"),
)


def create_people_nx() -> nx.Graph:
    graph = nx.Graph()
    for node_id, attributes in PEOPLE.items():
        graph.add_node(node_id, **attributes)
    for edge_id, source, target in PEOPLE_EDGES:
        graph.add_edge(source, target, id=edge_id)
    return graph


def create_people_graph() -> NetworkXGraphProvider:
    return NetworkXGraphProvider(create_people_nx())


def create_session(**config) -> ExplorationSession:
    """People-graph session whose double-click opener records URLs."""
    opened: List[str] = []
    session = ExplorationSession(
        create_people_graph(),
        config=SessionConfig(**config),
        opener=opened.append,
    )
    session.opened_urls = opened
    return session


# =============================================================================
# BROKEN PROVIDERS (fail-closed paths)
# =============================================================================

class UnlabelledNodeGraph(NetworkXGraphProvider):
    """People graph plus a node "X" that has no label attribute."""

    def __init__(self):
        graph = create_people_nx()
        graph.add_node("X", color="#000000")
        graph.add_edge("X", "A", id="e_xa")
        super().__init__(graph)


class VanishingNodeGraph(NetworkXGraphProvider):
    """People graph whose attribute lookup for one node always fails."""

    def __init__(self, vanished: str = "C"):
        super().__init__(create_people_nx())
        self.vanished = vanished

    def get_node_attributes(self, node):
        if node == self.vanished:
            raise NodeNotFoundError(f"Node {node!r} not in graph", node)
        return super().get_node_attributes(node)


class ErrorRecorder:
    """ErrorSink that keeps what it receives."""

    def __init__(self):
        self.errors: List[Error] = []

    def __call__(self, error: Error):
        self.errors.append(error)
