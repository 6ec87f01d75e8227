"""
Base Contracts and Shared Types

Foundational types shared by the graph data layer and the overlay.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Errors are data (Error) when recorded, exceptions when raised
- All records are frozen dataclasses for immutability guarantee
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Tuple
from enum import Enum, auto


# Node and edge identifiers are the provider's own string keys.
NodeId = str
EdgeId = str


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for deterministic error handling.
    Every failure the overlay can record is enumerated here.
    """
    # Graph lookup errors
    NODE_NOT_FOUND = auto()
    EDGE_NOT_FOUND = auto()
    ATTRIBUTE_MISSING = auto()

    # Interaction errors
    UNKNOWN_ACTION = auto()
    INVALID_PAYLOAD = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data, not exceptions - they can be stored and queried.
    """
    code: ErrorCode
    message: str
    timestamp: datetime
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @staticmethod
    def create(code: ErrorCode, message: str, **context: str) -> Error:
        return Error(
            code=code,
            message=message,
            timestamp=datetime.now(timezone.utc),
            context=tuple(sorted((k, str(v)) for k, v in context.items()))
        )

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            timestamp=self.timestamp,
            context=self.context + ((key, value),)
        )


# Receives errors that were handled by failing closed.
ErrorSink = Callable[[Error], None]


# =============================================================================
# LOOKUP EXCEPTIONS
# =============================================================================

class GraphLookupError(LookupError):
    """Raised by a graph provider for an id or attribute it does not hold."""

    code = ErrorCode.ATTRIBUTE_MISSING

    def __init__(self, message: str, entity_id: str):
        super().__init__(message)
        self.entity_id = entity_id

    def to_error(self) -> Error:
        return Error.create(self.code, str(self), entity_id=self.entity_id)


class NodeNotFoundError(GraphLookupError):
    code = ErrorCode.NODE_NOT_FOUND


class EdgeNotFoundError(GraphLookupError):
    code = ErrorCode.EDGE_NOT_FOUND


# =============================================================================
# TEMPORAL TYPES (Immutable, explicit semantics)
# =============================================================================

@dataclass(frozen=True)
class Timestamp:
    """
    Immutable timestamp with explicit semantics.
    All timestamps are UTC, never local time.
    """
    value: datetime

    def __post_init__(self):
        # Ensure UTC timezone
        if self.value.tzinfo is None:
            object.__setattr__(self, 'value', self.value.replace(tzinfo=timezone.utc))

    @staticmethod
    def now() -> Timestamp:
        return Timestamp(value=datetime.now(timezone.utc))


@dataclass(frozen=True)
class TimeRange:
    """Immutable time range for log queries."""
    start: Timestamp
    end: Timestamp

    def __post_init__(self):
        if self.start.value > self.end.value:
            raise ValueError("TimeRange start must be before or equal to end")

    def contains(self, timestamp: Timestamp) -> bool:
        return self.start.value <= timestamp.value <= self.end.value
