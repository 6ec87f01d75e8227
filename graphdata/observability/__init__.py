"""
Observability & Audit Layer

RESPONSIBILITY: Audit logging and metrics for the exploration overlay
ALLOWED INPUTS: Audit entries and metric points from any layer
OUTPUTS: Per-layer audit logs, unified log, metric series

WHAT THIS LAYER MUST NOT DO:
============================
- Modify interaction state or display overrides
- Filter or interpret events (only record them)
- Make decisions based on logged data
- Raise into the caller's event handler or render loop

BOUNDARY ENFORCEMENT:
=====================
- Receives immutable records (not references to live state)
- Provides read-only access to logs and metrics
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum
import hashlib
import itertools

from ..contracts.base import Timestamp, TimeRange, Error
from ..contracts.events import AuditLogEntry, AuditEventType, MetricPoint


LAYERS = ('session', 'search', 'hover', 'click', 'render')


# =============================================================================
# LOG COLLECTORS (One per layer)
# =============================================================================

class LogCollector:
    """
    Append-only collector of audit entries for one layer.
    """

    def __init__(self, layer_name: str, max_entries: Optional[int] = None):
        self._layer_name = layer_name
        self._max_entries = max_entries
        self._entries: List[AuditLogEntry] = []
        self._sequence: int = 0

    def collect(self, entry: AuditLogEntry):
        """Collect an audit entry (append-only)."""
        self._entries.append(entry)
        self._sequence += 1
        if self._max_entries is not None and len(self._entries) > self._max_entries:
            del self._entries[:len(self._entries) - self._max_entries]

    def get_entries(
        self,
        time_range: Optional[TimeRange] = None,
        event_type: Optional[AuditEventType] = None
    ) -> List[AuditLogEntry]:
        """Get entries, optionally filtered."""
        entries = self._entries

        if time_range:
            entries = [e for e in entries if time_range.contains(e.timestamp)]

        if event_type:
            entries = [e for e in entries if e.event_type == event_type]

        return list(entries)

    @property
    def layer_name(self) -> str:
        return self._layer_name

    @property
    def entry_count(self) -> int:
        """Total entries collected, including any rotated out."""
        return self._sequence


# =============================================================================
# METRICS COLLECTOR
# =============================================================================

class MetricType(Enum):
    """Types of metrics collected."""
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"


@dataclass
class MetricDefinition:
    """Definition of a metric to collect."""
    name: str
    metric_type: MetricType
    description: str
    labels: Tuple[str, ...] = field(default_factory=tuple)


class MetricsCollector:
    """
    Collect metric data points as append-only series.
    """

    def __init__(self):
        self._metrics: Dict[str, List[MetricPoint]] = {}
        self._definitions: Dict[str, MetricDefinition] = {}
        self._register_default_metrics()

    def _register_default_metrics(self):
        defaults = [
            MetricDefinition(
                name="interaction_events_total",
                metric_type=MetricType.COUNTER,
                description="UI input events dispatched to the session",
                labels=("action",)
            ),
            MetricDefinition(
                name="search_match_count",
                metric_type=MetricType.HISTOGRAM,
                description="Number of nodes matching each non-empty query"
            ),
            MetricDefinition(
                name="reducer_failures_total",
                metric_type=MetricType.COUNTER,
                description="Lookups that failed closed inside a reducer or search",
                labels=("code",)
            ),
            MetricDefinition(
                name="rejected_events_total",
                metric_type=MetricType.COUNTER,
                description="UI input events refused before reaching a handler",
                labels=("code",)
            ),
            MetricDefinition(
                name="frames_rendered_total",
                metric_type=MetricType.COUNTER,
                description="Frames recomputed by the renderer"
            ),
            MetricDefinition(
                name="camera_transitions_total",
                metric_type=MetricType.COUNTER,
                description="Camera transitions requested by the overlay",
                labels=("kind",)
            ),
        ]

        for definition in defaults:
            self.register_metric(definition)

    def register_metric(self, definition: MetricDefinition):
        """Register a new metric definition."""
        self._definitions[definition.name] = definition
        if definition.name not in self._metrics:
            self._metrics[definition.name] = []

    def record(
        self,
        metric_name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ):
        """Record a metric data point."""
        if metric_name not in self._metrics:
            self._metrics[metric_name] = []

        label_tuple = tuple(sorted(labels.items())) if labels else ()

        self._metrics[metric_name].append(MetricPoint(
            metric_name=metric_name,
            value=value,
            timestamp=Timestamp.now(),
            labels=label_tuple
        ))

    def get_metric(
        self,
        metric_name: str,
        time_range: Optional[TimeRange] = None
    ) -> List[MetricPoint]:
        points = self._metrics.get(metric_name, [])

        if time_range:
            points = [p for p in points if time_range.contains(p.timestamp)]

        return list(points)

    def get_latest(self, metric_name: str) -> Optional[MetricPoint]:
        points = self._metrics.get(metric_name, [])
        return points[-1] if points else None

    def get_definition(self, metric_name: str) -> Optional[MetricDefinition]:
        return self._definitions.get(metric_name)

    def compute_aggregates(
        self,
        metric_name: str,
        time_range: Optional[TimeRange] = None
    ) -> Dict[str, float]:
        """Compute aggregate statistics for a metric."""
        points = self.get_metric(metric_name, time_range)

        if not points:
            return {}

        values = [p.value for p in points]

        return {
            'count': len(values),
            'sum': sum(values),
            'min': min(values),
            'max': max(values),
            'avg': sum(values) / len(values),
        }


# =============================================================================
# OBSERVABILITY ENGINE
# =============================================================================

@dataclass
class ObservabilityConfig:
    """Configuration for observability engine."""
    enable_audit: bool = True
    enable_metrics: bool = True
    max_entries_per_layer: Optional[int] = 10_000


class ObservabilityEngine:
    """
    Central Observability Engine.

    BOUNDARY ENFORCEMENT:
    - ONLY observes, never modifies
    - Provides read-only access to collected data
    """

    def __init__(self, config: Optional[ObservabilityConfig] = None):
        self._config = config or ObservabilityConfig()
        self._collectors: Dict[str, LogCollector] = {
            layer: LogCollector(layer, self._config.max_entries_per_layer)
            for layer in LAYERS
        }
        self._metrics = MetricsCollector() if self._config.enable_metrics else None
        self._entry_counter = itertools.count(1)

    def collect_audit(self, entry: AuditLogEntry):
        """Collect an audit log entry from any layer."""
        if not self._config.enable_audit:
            return
        collector = self._collectors.get(entry.layer)
        if collector:
            collector.collect(entry)

    def log_audit(
        self,
        action: str,
        layer: str = "session",
        entity_id: Optional[str] = None,
        entity_type: Optional[str] = None,
        event_type: AuditEventType = AuditEventType.INTERACTION,
        metadata: Optional[Dict[str, str]] = None
    ) -> AuditLogEntry:
        """Build and collect an audit entry."""
        timestamp = Timestamp.now()
        seq = next(self._entry_counter)
        entry_id = hashlib.sha256(
            f"{layer}_{action}|{seq}|{timestamp.value.timestamp()}".encode()
        ).hexdigest()[:16]

        entry = AuditLogEntry(
            entry_id=f"audit_{entry_id}",
            event_type=event_type,
            timestamp=timestamp,
            layer=layer,
            action=action,
            entity_id=entity_id,
            entity_type=entity_type,
            metadata=tuple(sorted((k, str(v)) for k, v in (metadata or {}).items()))
        )
        self.collect_audit(entry)
        return entry

    def record_error(self, error: Error, layer: str = "render"):
        """Record a failed-closed lookup as an ERROR audit entry and a metric."""
        context = dict(error.context)
        self.log_audit(
            action="lookup_failed",
            layer=layer,
            entity_id=context.pop("entity_id", None),
            event_type=AuditEventType.ERROR,
            metadata={"code": error.code.name, "message": error.message, **context}
        )
        self.collect_metric("reducer_failures_total", 1, {"code": error.code.name})

    def record_rejection(self, error: Error, layer: str = "session"):
        """Record a refused UI event as an ERROR audit entry and a metric."""
        context = dict(error.context)
        self.log_audit(
            action="event_rejected",
            layer=layer,
            event_type=AuditEventType.ERROR,
            metadata={"code": error.code.name, "message": error.message, **context}
        )
        self.collect_metric("rejected_events_total", 1, {"code": error.code.name})

    def collect_metric(
        self,
        metric_name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ):
        """Collect a metric data point."""
        if self._metrics:
            self._metrics.record(metric_name, value, labels)

    def get_unified_log(
        self,
        time_range: Optional[TimeRange] = None,
        layers: Optional[List[str]] = None
    ) -> List[AuditLogEntry]:
        """Get unified log from all or specified layers."""
        target_layers = layers or list(self._collectors.keys())

        all_entries = []
        for layer_name in target_layers:
            collector = self._collectors.get(layer_name)
            if collector:
                all_entries.extend(collector.get_entries(time_range=time_range))

        # Sort by timestamp
        all_entries.sort(key=lambda e: e.timestamp.value)

        return all_entries

    def get_layer_log(
        self,
        layer_name: str,
        time_range: Optional[TimeRange] = None,
        event_type: Optional[AuditEventType] = None
    ) -> List[AuditLogEntry]:
        """Get log for a specific layer."""
        collector = self._collectors.get(layer_name)
        if not collector:
            return []
        return collector.get_entries(time_range=time_range, event_type=event_type)

    def get_metrics(self) -> Optional[MetricsCollector]:
        """Get metrics collector (read-only access)."""
        return self._metrics
