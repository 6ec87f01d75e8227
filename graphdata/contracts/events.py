"""
Observability Event Contracts

Immutable records emitted by the overlay layers and collected by
the observability layer. Collectors receive these records, never
references to live interaction state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple
from enum import Enum

from .base import Timestamp


class AuditEventType(Enum):
    """Explicit audit event types."""
    INTERACTION = "interaction"
    STATE_CHANGE = "state_change"
    RENDER = "render"
    ERROR = "error"
    SYSTEM = "system"


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit log entry."""
    entry_id: str
    event_type: AuditEventType
    timestamp: Timestamp
    layer: str  # Which layer generated this
    action: str
    entity_id: Optional[str] = None
    entity_type: Optional[str] = None
    metadata: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MetricPoint:
    """Immutable metric data point."""
    metric_name: str
    value: float
    timestamp: Timestamp
    labels: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
