"""
Statistical path discovery.

Deterministic fallback used whenever generated paths are unavailable.
Walks the highest-traffic dependency chain from each entry point of the
topology and classifies the result with fixed thresholds. No generation
involved, no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from pathlayer.paths.models import CandidatePath, Priority
from pathlayer.topology.models import ServiceMetrics, index_topology

logger = structlog.get_logger()

MAX_ENTRY_POINTS = 5
MAX_PATH_LENGTH = 10


def build_dependency_graph(topology: Sequence[ServiceMetrics]) -> dict[str, list[str]]:
    """Map each service to its direct dependency targets, first-seen order, no repeats."""
    graph: dict[str, list[str]] = {}
    for service in topology:
        graph[service.service_name] = list(dict.fromkeys(service.dependency_names))
    return graph


def find_entry_points(
    topology: Sequence[ServiceMetrics],
    limit: int = MAX_ENTRY_POINTS,
) -> list[ServiceMetrics]:
    """
    Find services nothing else calls, busiest first.

    A service listed as any dependency target is never an entry point,
    whatever its own metrics say.
    """
    targets = {name for service in topology for name in service.dependency_names}
    entries = [s for s in topology if s.service_name not in targets]
    entries.sort(key=lambda s: s.call_count, reverse=True)
    return entries[:limit]


def trace_highest_traffic_path(
    entry: str,
    graph: dict[str, list[str]],
    index: dict[str, ServiceMetrics],
    max_length: int = MAX_PATH_LENGTH,
) -> list[str]:
    """
    Greedily follow the busiest unvisited dependency from ``entry``.

    Ties go to the dependency listed first; dependencies missing from the
    topology rank below every known service. The walk stops at a leaf, when
    every neighbour was already visited, or at ``max_length`` services.
    """
    path = [entry]
    visited = {entry}
    current = entry

    while len(path) < max_length:
        candidates = [s for s in graph.get(current, []) if s not in visited]
        if not candidates:
            break

        next_service = candidates[0]
        for service in candidates[1:]:
            if _traffic(service, index) > _traffic(next_service, index):
                next_service = service

        path.append(next_service)
        visited.add(next_service)
        current = next_service

    return path


def _traffic(service: str, index: dict[str, ServiceMetrics]) -> float:
    metrics = index.get(service)
    return metrics.call_count if metrics is not None else float("-inf")


def classify_statistical_path(
    total_calls: float,
    avg_error_rate: float,
    avg_latency: float,
) -> tuple[Priority, float]:
    """
    Classify a traced path by fixed thresholds, first match wins.

    - critical (0.9): >10k calls and >1% average errors
    - high (0.7): >5k calls or >5% average errors
    - medium (0.6): >1s average latency
    - low (0.3): everything else
    """
    if total_calls > 10000 and avg_error_rate > 0.01:
        return Priority.CRITICAL, 0.9
    if total_calls > 5000 or avg_error_rate > 0.05:
        return Priority.HIGH, 0.7
    if avg_latency > 1000:
        return Priority.MEDIUM, 0.6
    return Priority.LOW, 0.3


def statistical_path_discovery(topology: Sequence[ServiceMetrics]) -> list[CandidatePath]:
    """
    Discover candidate paths from topology statistics alone.

    Args:
        topology: Topology snapshot

    Returns:
        One candidate per entry point (at most five), each at most ten
        services long. Empty when the topology has no entry points.
    """
    graph = build_dependency_graph(topology)
    index = index_topology(topology)
    entry_points = find_entry_points(topology)

    paths: list[CandidatePath] = []
    for ordinal, entry in enumerate(entry_points, start=1):
        services = trace_highest_traffic_path(entry.service_name, graph, index)

        resolved = [index.get(name) for name in services]
        total_calls = sum(s.call_count for s in resolved if s is not None)
        avg_error_rate = sum(s.error_rate for s in resolved if s is not None) / len(services)
        avg_latency = sum(s.avg_latency for s in resolved if s is not None) / len(services)

        priority, severity = classify_statistical_path(total_calls, avg_error_rate, avg_latency)

        paths.append(
            CandidatePath(
                name=f"Path {ordinal} ({entry.service_name})",
                description=f"High-traffic path starting from {entry.service_name}",
                services=tuple(services),
                priority=priority,
                severity=severity,
            )
        )

    logger.info(
        "statistical_discovery_completed",
        services=len(topology),
        entry_points=len(entry_points),
        paths=len(paths),
    )
    return paths
