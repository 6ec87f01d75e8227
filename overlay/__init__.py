"""
Graph Exploration Overlay

Derives per-frame display overrides for a node-link graph from a small
interaction state: search query, hovered node, click pin.

Layers:
- state: the single mutable interaction state
- interaction: event contracts, search / hover resolvers, click controller
- visualization: display reducers and the render engine contract
- presentation: view models for the surrounding UI
- session: orchestration of all of the above
"""

from .config import SessionConfig
from .session import ExplorationSession

__all__ = ['SessionConfig', 'ExplorationSession']
