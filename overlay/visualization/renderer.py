"""
Render Engine Contract
======================

The surface the overlay drives: reducer registration, redraw requests,
node positions and a camera.

A real deployment plugs a browser renderer in behind RenderEngine.
HeadlessRenderer is the in-process implementation: it applies the
registered reducers to every node and edge and keeps the resulting
frame, which is what the demo, the HTTP surface and the tests read.

REDRAW MODEL:
=============
refresh() is fire-and-forget. It only marks the frame stale; the frame
is recomputed the next time it is read. Every recomputation from the
same state yields the same frame.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
import hashlib

from graphdata.contracts.base import NodeId, EdgeId
from graphdata.core.provider import GraphDataProvider

from .graph import (
    Coordinates, NodeDisplayData, EdgeDisplayData,
    GraphNode, GraphEdge, NetworkGraphView,
)


NodeReducerFn = Callable[[NodeId, NodeDisplayData], NodeDisplayData]
EdgeReducerFn = Callable[[EdgeId, EdgeDisplayData], EdgeDisplayData]

DEFAULT_NODE_COLOR = "#999999"
DEFAULT_EDGE_COLOR = "#cccccc"


# =============================================================================
# CAMERA
# =============================================================================

@dataclass(frozen=True)
class CameraState:
    x: float = 0.0
    y: float = 0.0
    ratio: float = 1.0
    angle: float = 0.0


@dataclass(frozen=True)
class CameraTransition:
    """A requested, time-bounded camera animation."""
    kind: str  # "move", "zoom", "unzoom", "reset"
    target: CameraState
    duration_ms: int
    requested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Camera:
    """
    Headless camera.

    Animations land on their target immediately; the requested
    transitions are kept so callers can see what a real renderer
    would have animated.
    """

    def __init__(
        self,
        min_ratio: float = 0.01,
        max_ratio: float = 3.0,
        zoom_ratio: float = 1.5,
        on_transition: Optional[Callable[[CameraTransition], None]] = None
    ):
        self._min_ratio = min_ratio
        self._max_ratio = max_ratio
        self._zoom_ratio = zoom_ratio
        self._state = CameraState()
        self._transitions: List[CameraTransition] = []
        self._on_transition = on_transition

    @property
    def state(self) -> CameraState:
        return self._state

    @property
    def transitions(self) -> Tuple[CameraTransition, ...]:
        return tuple(self._transitions)

    def animate_to(self, coordinates: Coordinates, duration: int) -> CameraTransition:
        target = replace(self._state, x=coordinates.x, y=coordinates.y)
        return self._transition("move", target, duration)

    def animated_zoom(self, duration: int) -> CameraTransition:
        target = replace(self._state, ratio=self._clamp(self._state.ratio / self._zoom_ratio))
        return self._transition("zoom", target, duration)

    def animated_unzoom(self, duration: int) -> CameraTransition:
        target = replace(self._state, ratio=self._clamp(self._state.ratio * self._zoom_ratio))
        return self._transition("unzoom", target, duration)

    def animated_reset(self, duration: int) -> CameraTransition:
        return self._transition("reset", CameraState(), duration)

    def _clamp(self, ratio: float) -> float:
        return min(self._max_ratio, max(self._min_ratio, ratio))

    def _transition(self, kind: str, target: CameraState, duration: int) -> CameraTransition:
        transition = CameraTransition(kind=kind, target=target, duration_ms=duration)
        self._transitions.append(transition)
        self._state = target
        if self._on_transition is not None:
            self._on_transition(transition)
        return transition


# =============================================================================
# RENDER ENGINE
# =============================================================================

class RenderEngine(ABC):
    """Rendering surface consumed by the session."""

    @abstractmethod
    def set_node_reducer(self, reducer: Optional[NodeReducerFn]) -> None:
        ...

    @abstractmethod
    def set_edge_reducer(self, reducer: Optional[EdgeReducerFn]) -> None:
        ...

    @abstractmethod
    def refresh(self) -> None:
        """Request a redraw. Timing is up to the engine."""

    @abstractmethod
    def get_node_display_position(self, node: NodeId) -> Coordinates:
        ...

    @abstractmethod
    def get_camera(self) -> Camera:
        ...


class HeadlessRenderer(RenderEngine):
    """
    In-process render engine producing NetworkGraphView frames.
    """

    def __init__(
        self,
        graph: GraphDataProvider,
        camera: Optional[Camera] = None,
        on_frame: Optional[Callable[[NetworkGraphView], None]] = None
    ):
        self._graph = graph
        self._camera = camera or Camera()
        self._on_frame = on_frame
        self._node_reducer: Optional[NodeReducerFn] = None
        self._edge_reducer: Optional[EdgeReducerFn] = None

        # Base display data, read once; the graph is immutable for the session
        self._node_data: Dict[NodeId, NodeDisplayData] = {
            node: _node_display_data(graph.get_node_attributes(node))
            for node in graph.nodes()
        }
        self._edge_data: Dict[EdgeId, EdgeDisplayData] = {
            edge: _edge_display_data(graph.get_edge_attributes(edge))
            for edge in graph.edges()
        }
        self._edge_ends: Dict[EdgeId, Tuple[NodeId, NodeId]] = {
            edge: (graph.source(edge), graph.target(edge))
            for edge in graph.edges()
        }

        self._frame: Optional[NetworkGraphView] = None
        self._frame_number = 0
        self._dirty = True
        self._refresh_requests = 0

    # =========================================================================
    # RenderEngine
    # =========================================================================

    def set_node_reducer(self, reducer: Optional[NodeReducerFn]) -> None:
        self._node_reducer = reducer
        self._dirty = True

    def set_edge_reducer(self, reducer: Optional[EdgeReducerFn]) -> None:
        self._edge_reducer = reducer
        self._dirty = True

    def refresh(self) -> None:
        self._refresh_requests += 1
        self._dirty = True

    def get_node_display_position(self, node: NodeId) -> Coordinates:
        data = self._node_data.get(node)
        if data is None:
            # Let the provider raise its own NodeNotFoundError
            return _node_display_data(self._graph.get_node_attributes(node)).position
        return data.position

    def get_camera(self) -> Camera:
        return self._camera

    # =========================================================================
    # FRAMES
    # =========================================================================

    @property
    def refresh_requests(self) -> int:
        return self._refresh_requests

    @property
    def is_stale(self) -> bool:
        return self._dirty

    @property
    def frame(self) -> NetworkGraphView:
        """Current frame, recomputed if a refresh is pending."""
        if self._dirty or self._frame is None:
            return self.render()
        return self._frame

    def render(self) -> NetworkGraphView:
        node_reducer = self._node_reducer
        edge_reducer = self._edge_reducer

        nodes = []
        for node, data in self._node_data.items():
            display = node_reducer(node, data) if node_reducer else data
            nodes.append(GraphNode(node_id=node, display=display))

        edges = []
        for edge, data in self._edge_data.items():
            display = edge_reducer(edge, data) if edge_reducer else data
            source, target = self._edge_ends[edge]
            edges.append(GraphEdge(edge_id=edge, source_id=source, target_id=target, display=display))

        self._frame_number += 1
        self._frame = NetworkGraphView(
            view_id=_view_id(nodes, edges),
            frame_number=self._frame_number,
            nodes=tuple(nodes),
            edges=tuple(edges),
            generated_at=datetime.now(timezone.utc),
        )
        self._dirty = False

        if self._on_frame is not None:
            self._on_frame(self._frame)
        return self._frame


def _node_display_data(attributes: Dict[str, Any]) -> NodeDisplayData:
    return NodeDisplayData(
        label=str(attributes.get("label", "")),
        color=str(attributes.get("color", DEFAULT_NODE_COLOR)),
        x=float(attributes.get("x", 0.0)),
        y=float(attributes.get("y", 0.0)),
        size=float(attributes.get("size", 1.0)),
        hidden=bool(attributes.get("hidden", False)),
    )


def _edge_display_data(attributes: Dict[str, Any]) -> EdgeDisplayData:
    label = attributes.get("label")
    return EdgeDisplayData(
        color=str(attributes.get("color", DEFAULT_EDGE_COLOR)),
        size=float(attributes.get("size", attributes.get("weight", 1.0))),
        label=None if label is None else str(label),
        hidden=bool(attributes.get("hidden", False)),
    )


def _view_id(nodes: List[GraphNode], edges: List[GraphEdge]) -> str:
    """Content hash of a frame; equal frames share an id."""
    digest = hashlib.sha256()
    for node in nodes:
        digest.update(repr((node.node_id, node.display)).encode())
    for edge in edges:
        digest.update(repr((edge.edge_id, edge.display)).encode())
    return f"view_{digest.hexdigest()[:16]}"
