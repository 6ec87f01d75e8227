"""
Graph Data Provider
===================

Read-only access to the graph being explored.

READ-ONLY FENCE POST:
=====================
The overlay only ever asks the provider questions:
- Enumerate nodes and edges
- Look up node / edge attributes (label, color, position)
- Adjacency (neighbors of a node)
- Edge endpoints

It never mutates the graph and never asks for computed structure
(layout, centrality, ranking). Parsing file formats belongs to
networkx; this module only normalizes what the parser produced.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, FrozenSet, Hashable, Iterator, List, Tuple, Union
import networkx as nx

from ..contracts.base import (
    NodeId, EdgeId, GraphLookupError, NodeNotFoundError, EdgeNotFoundError
)


class GraphDataProvider(ABC):
    """
    Interface consumed by the overlay.

    Unknown ids raise NodeNotFoundError / EdgeNotFoundError and missing
    attributes raise GraphLookupError; all of them are LookupErrors.
    """

    @abstractmethod
    def nodes(self) -> Tuple[NodeId, ...]:
        """All node ids, in stable provider order."""

    @abstractmethod
    def edges(self) -> Tuple[EdgeId, ...]:
        """All edge ids, in stable provider order."""

    @abstractmethod
    def has_node(self, node: NodeId) -> bool:
        ...

    @abstractmethod
    def get_node_attributes(self, node: NodeId) -> Dict[str, Any]:
        ...

    @abstractmethod
    def get_edge_attributes(self, edge: EdgeId) -> Dict[str, Any]:
        ...

    @abstractmethod
    def neighbors(self, node: NodeId) -> FrozenSet[NodeId]:
        ...

    @abstractmethod
    def source(self, edge: EdgeId) -> NodeId:
        ...

    @abstractmethod
    def target(self, edge: EdgeId) -> NodeId:
        ...

    def get_node_attribute(self, node: NodeId, key: str) -> Any:
        attributes = self.get_node_attributes(node)
        if key not in attributes:
            raise GraphLookupError(f"Node {node!r} has no attribute {key!r}", node)
        return attributes[key]

    def has_extremity(self, edge: EdgeId, node: NodeId) -> bool:
        return node in (self.source(edge), self.target(edge))


class NetworkXGraphProvider(GraphDataProvider):
    """
    Graph Data Provider backed by a networkx graph.

    Accepts simple and multi graphs, directed or not. Edge ids come from
    the edge's "id" attribute when present (GEXF files carry one),
    otherwise they are generated from the endpoints.
    """

    def __init__(self, graph: nx.Graph):
        self._graph = graph
        self._nodes: Tuple[NodeId, ...] = tuple(str(n) for n in graph.nodes)
        self._node_keys: Dict[NodeId, Hashable] = {str(n): n for n in graph.nodes}

        # edge_id -> (source, target, attributes)
        self._edges: Dict[EdgeId, Tuple[NodeId, NodeId, Dict[str, Any]]] = {}
        for u, v, key, data in self._iter_edges():
            edge_id = self._edge_id(u, v, key, data)
            self._edges[edge_id] = (str(u), str(v), data)

    @classmethod
    def from_gexf(cls, path: Union[str, Path]) -> NetworkXGraphProvider:
        """
        Load a GEXF file through networkx.

        The viz namespace (color, position, size) is flattened into plain
        "color", "x", "y" and "size" node attributes.
        """
        graph = nx.read_gexf(str(path))
        for _, data in graph.nodes(data=True):
            _flatten_viz(data)
            data.setdefault("label", "")
        return cls(graph)

    @property
    def graph(self) -> nx.Graph:
        return self._graph

    # =========================================================================
    # ENUMERATION
    # =========================================================================

    def nodes(self) -> Tuple[NodeId, ...]:
        return self._nodes

    def edges(self) -> Tuple[EdgeId, ...]:
        return tuple(self._edges.keys())

    def has_node(self, node: NodeId) -> bool:
        return node in self._node_keys

    # =========================================================================
    # ATTRIBUTES
    # =========================================================================

    def get_node_attributes(self, node: NodeId) -> Dict[str, Any]:
        return dict(self._graph.nodes[self._node_key(node)])

    def get_edge_attributes(self, edge: EdgeId) -> Dict[str, Any]:
        return dict(self._edge(edge)[2])

    # =========================================================================
    # ADJACENCY
    # =========================================================================

    def neighbors(self, node: NodeId) -> FrozenSet[NodeId]:
        key = self._node_key(node)
        if self._graph.is_directed():
            adjacent = set(self._graph.predecessors(key)) | set(self._graph.successors(key))
        else:
            adjacent = set(self._graph.neighbors(key))
        return frozenset(str(n) for n in adjacent)

    def source(self, edge: EdgeId) -> NodeId:
        return self._edge(edge)[0]

    def target(self, edge: EdgeId) -> NodeId:
        return self._edge(edge)[1]

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _node_key(self, node: NodeId) -> Hashable:
        try:
            return self._node_keys[node]
        except KeyError:
            raise NodeNotFoundError(f"Node {node!r} not in graph", node) from None

    def _edge(self, edge: EdgeId) -> Tuple[NodeId, NodeId, Dict[str, Any]]:
        try:
            return self._edges[edge]
        except KeyError:
            raise EdgeNotFoundError(f"Edge {edge!r} not in graph", edge) from None

    def _iter_edges(self) -> Iterator[Tuple[Hashable, Hashable, Any, Dict[str, Any]]]:
        if self._graph.is_multigraph():
            yield from self._graph.edges(keys=True, data=True)
        else:
            for u, v, data in self._graph.edges(data=True):
                yield u, v, None, data

    def _edge_id(self, u: Hashable, v: Hashable, key: Any, data: Dict[str, Any]) -> EdgeId:
        explicit = data.get("id")
        if explicit is not None and str(explicit) not in self._edges:
            return str(explicit)
        edge_id = f"{u}->{v}" if key is None else f"{u}->{v}#{key}"
        # Explicit ids may already have claimed the generated form
        suffix = 1
        candidate = edge_id
        while candidate in self._edges:
            candidate = f"{edge_id}~{suffix}"
            suffix += 1
        return candidate


def _flatten_viz(data: Dict[str, Any]) -> None:
    viz = data.pop("viz", None) or {}
    color = viz.get("color")
    if color and "color" not in data:
        data["color"] = "#{:02x}{:02x}{:02x}".format(
            int(color.get("r", 0)), int(color.get("g", 0)), int(color.get("b", 0))
        )
    position = viz.get("position")
    if position:
        data.setdefault("x", float(position.get("x", 0.0)))
        data.setdefault("y", float(position.get("y", 0.0)))
    if "size" in viz:
        data.setdefault("size", float(viz["size"]))


def build_graph(
    nodes: List[Tuple[NodeId, Dict[str, Any]]],
    edges: List[Tuple[NodeId, NodeId]],
    directed: bool = False
) -> NetworkXGraphProvider:
    """
    Build a provider from explicit node and edge lists.

    Every edge endpoint must already be in the node list.
    """
    graph = nx.DiGraph() if directed else nx.Graph()
    for node_id, attributes in nodes:
        graph.add_node(node_id, **attributes)
    for source, target in edges:
        if source not in graph or target not in graph:
            missing = source if source not in graph else target
            raise NodeNotFoundError(f"Edge endpoint {missing!r} not in node list", missing)
        graph.add_edge(source, target)
    return NetworkXGraphProvider(graph)
