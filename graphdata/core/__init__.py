"""
Graph Data Layer

RESPONSIBILITY: Read-only access to the explored graph
OUTPUTS: Node / edge enumeration, attributes, adjacency, endpoints

WHAT THIS LAYER MUST NOT DO:
============================
- Mutate the graph during a session
- Know about interaction state or display overrides
"""

from .provider import GraphDataProvider, NetworkXGraphProvider, build_graph

__all__ = ['GraphDataProvider', 'NetworkXGraphProvider', 'build_graph']
