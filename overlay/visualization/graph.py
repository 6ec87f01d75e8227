"""
Graph Visualization Contracts

Responsibility:
Display data handed to the reducers, and the renderable frame they
produce. Reducers return new instances, never mutate.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Tuple

from graphdata.contracts.base import NodeId, EdgeId


@dataclass(frozen=True)
class Coordinates:
    x: float
    y: float


@dataclass(frozen=True)
class NodeDisplayData:
    """Per-frame display attributes of a node."""
    label: str
    color: str
    x: float = 0.0
    y: float = 0.0
    size: float = 1.0
    highlighted: bool = False
    hidden: bool = False

    @property
    def position(self) -> Coordinates:
        return Coordinates(self.x, self.y)


@dataclass(frozen=True)
class EdgeDisplayData:
    """Per-frame display attributes of an edge."""
    color: str
    size: float = 1.0
    label: Optional[str] = None
    hidden: bool = False


@dataclass(frozen=True)
class GraphNode:
    """Renderable graph node."""
    node_id: NodeId
    display: NodeDisplayData

    def to_dict(self) -> Dict[str, object]:
        d = self.display
        return {
            "id": self.node_id, "label": d.label, "color": d.color,
            "x": d.x, "y": d.y, "size": d.size,
            "highlighted": d.highlighted, "hidden": d.hidden,
        }


@dataclass(frozen=True)
class GraphEdge:
    """Renderable graph edge."""
    edge_id: EdgeId
    source_id: NodeId
    target_id: NodeId
    display: EdgeDisplayData

    def to_dict(self) -> Dict[str, object]:
        d = self.display
        return {
            "id": self.edge_id, "source": self.source_id, "target": self.target_id,
            "color": d.color, "size": d.size, "label": d.label, "hidden": d.hidden,
        }


@dataclass(frozen=True)
class NetworkGraphView:
    """
    One rendered frame.

    DETERMINISTIC:
    Same graph + same interaction state = identical nodes and edges.
    """
    view_id: str
    frame_number: int
    nodes: Tuple[GraphNode, ...]
    edges: Tuple[GraphEdge, ...]
    generated_at: datetime

    def node(self, node_id: NodeId) -> GraphNode:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        raise KeyError(node_id)

    def edge(self, edge_id: EdgeId) -> GraphEdge:
        for edge in self.edges:
            if edge.edge_id == edge_id:
                return edge
        raise KeyError(edge_id)

    @property
    def visible_edges(self) -> Tuple[GraphEdge, ...]:
        return tuple(e for e in self.edges if not e.display.hidden)

    @property
    def highlighted_nodes(self) -> Tuple[GraphNode, ...]:
        return tuple(n for n in self.nodes if n.display.highlighted)

    def to_dict(self) -> Dict[str, object]:
        return {
            "view_id": self.view_id,
            "frame_number": self.frame_number,
            "generated_at": self.generated_at.isoformat(),
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
