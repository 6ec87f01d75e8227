"""
Contracts Layer

Immutable types shared across the graph data layer and the overlay.
"""

from .base import (
    NodeId, EdgeId, ErrorCode, Error, ErrorSink,
    GraphLookupError, NodeNotFoundError, EdgeNotFoundError,
    Timestamp, TimeRange,
)
from .events import AuditEventType, AuditLogEntry, MetricPoint

__all__ = [
    'NodeId', 'EdgeId', 'ErrorCode', 'Error', 'ErrorSink',
    'GraphLookupError', 'NodeNotFoundError', 'EdgeNotFoundError',
    'Timestamp', 'TimeRange',
    'AuditEventType', 'AuditLogEntry', 'MetricPoint',
]
