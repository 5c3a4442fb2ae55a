"""
Critical path models.

Candidate paths proposed by a discovery strategy, aggregated path
metrics, and the assembled CriticalPath records handed to dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Priority(Enum):
    """Business priority of a critical path."""

    CRITICAL = "critical"  # Revenue-impacting, customer-facing, high volume
    HIGH = "high"  # Important features, moderate volume
    MEDIUM = "medium"  # Supporting features, internal services
    LOW = "low"  # Background jobs, administrative functions


class DiscoveryMethod(Enum):
    """Strategy that produced a set of paths."""

    LLM = "llm"
    STATISTICAL = "statistical"


@dataclass(frozen=True)
class CandidatePath:
    """A path proposed by a discovery strategy, before metrics are attached."""

    name: str
    description: str
    services: tuple[str, ...]
    priority: Priority | None = None  # None: derive from metrics
    severity: float = 0.5  # 0.0 - 1.0


@dataclass(frozen=True)
class PathMetrics:
    """Metrics aggregated along a path."""

    request_count: float = 0
    avg_latency: float = 0.0  # sum of per-hop averages, ms
    error_rate: float = 0.0  # worst hop, 0.0 - 1.0
    p99_latency: float = 0.0  # sum of per-hop p99, ms

    def to_dict(self) -> dict[str, Any]:
        return {
            "requestCount": self.request_count,
            "avgLatency": self.avg_latency,
            "errorRate": self.error_rate,
            "p99Latency": self.p99_latency,
        }


@dataclass(frozen=True)
class PathEdge:
    """A hop between two consecutive services of a path."""

    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target}


@dataclass(frozen=True)
class CriticalPath:
    """An assembled, ranked end-to-end request flow."""

    id: str
    name: str
    description: str
    services: tuple[str, ...]
    start_service: str
    end_service: str
    edges: tuple[PathEdge, ...]
    metrics: PathMetrics
    priority: Priority
    severity: float
    last_updated: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def discovered_by(self) -> str | None:
        return self.metadata.get("discoveredBy")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the dashboard wire format."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "services": list(self.services),
            "startService": self.start_service,
            "endService": self.end_service,
            "edges": [e.to_dict() for e in self.edges],
            "metrics": self.metrics.to_dict(),
            "priority": self.priority.value,
            "severity": self.severity,
            "lastUpdated": self.last_updated.isoformat(),
            "metadata": self.metadata,
        }
