"""
Interaction Contracts

Responsibility:
Define valid user actions and their intent.
No execution logic - just pure intent modeling.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import uuid

from graphdata.contracts.base import NodeId


class ActionType(Enum):
    """Types of user interaction."""
    # Search box
    SEARCH_INPUT = "search_input"
    SEARCH_BLUR = "search_blur"

    # Pointer over graph nodes
    POINTER_ENTER = "pointer_enter"
    POINTER_LEAVE = "pointer_leave"
    POINTER_CLICK = "pointer_click"
    POINTER_DOUBLE_CLICK = "pointer_double_click"

    # Camera buttons
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    ZOOM_RESET = "zoom_reset"

    @property
    def targets_node(self) -> bool:
        return self in _NODE_ACTIONS

    @classmethod
    def parse(cls, value: str) -> ActionType:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown action type: {value!r}") from None


_NODE_ACTIONS = frozenset({
    ActionType.POINTER_ENTER,
    ActionType.POINTER_LEAVE,
    ActionType.POINTER_CLICK,
    ActionType.POINTER_DOUBLE_CLICK,
})


@dataclass(frozen=True)
class InteractionRequest:
    """A specific user intent."""
    request_id: str
    action: ActionType
    payload: Dict[str, Any]
    timestamp: datetime
    source_component: str = "ui"

    @staticmethod
    def create(
        action: ActionType,
        source_component: str = "ui",
        **payload: Any
    ) -> InteractionRequest:
        return InteractionRequest(
            request_id=f"req_{uuid.uuid4().hex[:16]}",
            action=action,
            payload=dict(payload),
            timestamp=datetime.now(timezone.utc),
            source_component=source_component,
        )

    @property
    def node(self) -> NodeId:
        """Target node of a pointer action."""
        node = self.payload.get("node")
        if not isinstance(node, str) or not node:
            raise ValueError(f"{self.action.value} requires a 'node' string payload")
        return node

    @property
    def query(self) -> str:
        """Query text of a search input action."""
        query = self.payload.get("query", "")
        if not isinstance(query, str):
            raise ValueError(f"{self.action.value} requires a 'query' string payload")
        return query


@dataclass(frozen=True)
class DispatchOutcome:
    """What handling one request did to the session."""
    request_id: str
    action: ActionType
    state_changed: bool
    refreshed: bool
    opened_url: Optional[str] = None
    notes: Dict[str, str] = field(default_factory=dict)
