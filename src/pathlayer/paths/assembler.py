"""
Assembly of final CriticalPath records.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from pathlayer.paths.models import (
    CandidatePath,
    CriticalPath,
    DiscoveryMethod,
    PathEdge,
    PathMetrics,
    Priority,
)
from pathlayer.topology.models import TimeRange

CUSTOM_PATH_ID = "custom"
UNKNOWN_SERVICE = "unknown"


def build_edges(services: Sequence[str]) -> tuple[PathEdge, ...]:
    """Pair up consecutive services; one edge fewer than services."""
    return tuple(
        PathEdge(source=source, target=target)
        for source, target in zip(services[:-1], services[1:], strict=True)
    )


def discovered_path_id(index: int) -> str:
    """Identifier for the path at zero-based position ``index``."""
    return f"path-{index + 1}"


def assemble_path(
    candidate: CandidatePath,
    *,
    path_id: str,
    metrics: PathMetrics,
    priority: Priority,
    severity: float,
    discovered_by: DiscoveryMethod | None = None,
    time_range: TimeRange | None = None,
    model: str | None = None,
) -> CriticalPath:
    """
    Build the output record for a candidate.

    Args:
        candidate: Candidate carrying name, description and services
        path_id: ``path-N`` for discovered paths, ``custom`` for ad hoc ones
        metrics: Aggregated path metrics
        priority: Final priority
        severity: Final severity, clamped to [0, 1]
        discovered_by: Strategy that produced the candidate
        time_range: Window echoed into metadata
        model: Generator model, for generated paths

    Returns:
        CriticalPath stamped with the current time
    """
    services = tuple(candidate.services)

    metadata: dict[str, Any] = {}
    if discovered_by is not None:
        metadata["discoveredBy"] = discovered_by.value
    if time_range is not None:
        metadata["timeRange"] = time_range.to_dict()
    if model is not None:
        metadata["model"] = model

    return CriticalPath(
        id=path_id,
        name=candidate.name,
        description=candidate.description,
        services=services,
        start_service=services[0] if services else UNKNOWN_SERVICE,
        end_service=services[-1] if services else UNKNOWN_SERVICE,
        edges=build_edges(services),
        metrics=metrics,
        priority=priority,
        severity=max(0.0, min(1.0, severity)),
        last_updated=datetime.now(timezone.utc),
        metadata=metadata,
    )
