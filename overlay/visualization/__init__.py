"""
Visualization Layer

Responsibility:
Deterministic transformation of interaction state into per-frame
display overrides, and the render engine contract that applies them.
"""

from .graph import (
    Coordinates, NodeDisplayData, EdgeDisplayData,
    GraphNode, GraphEdge, NetworkGraphView,
)
from .reducers import DisplayReducer, NodeReducer, EdgeReducer
from .renderer import (
    Camera, CameraState, CameraTransition, RenderEngine, HeadlessRenderer,
)

__all__ = [
    'Coordinates', 'NodeDisplayData', 'EdgeDisplayData',
    'GraphNode', 'GraphEdge', 'NetworkGraphView',
    'DisplayReducer', 'NodeReducer', 'EdgeReducer',
    'Camera', 'CameraState', 'CameraTransition', 'RenderEngine', 'HeadlessRenderer',
]
