"""
Path metric aggregation.

Combines per-service statistics along a path into path-level metrics.
"""

from __future__ import annotations

from collections.abc import Sequence

from pathlayer.paths.models import PathMetrics
from pathlayer.topology.models import ServiceMetrics, index_topology


def calculate_path_metrics(
    services: Sequence[str],
    topology: Sequence[ServiceMetrics],
) -> PathMetrics:
    """
    Calculate metrics for a path from topology data.

    Service names are resolved by exact match. Unresolved names stay in
    the path but do not contribute to any metric.

    - request_count: call count of the first resolved service (entry demand)
    - avg_latency: sum of resolved average latencies (cumulative hop cost)
    - error_rate: highest resolved error rate (one failing hop fails the path)
    - p99_latency: sum of resolved p99 latencies (cumulative tail)

    Args:
        services: Ordered service names
        topology: Topology snapshot

    Returns:
        PathMetrics, all zero if no service resolves
    """
    index = index_topology(topology)
    resolved = [index[name] for name in services if name in index]

    if not resolved:
        return PathMetrics()

    return PathMetrics(
        request_count=resolved[0].call_count,
        avg_latency=sum(s.avg_latency for s in resolved),
        error_rate=max(s.error_rate for s in resolved),
        p99_latency=sum(s.p99_latency for s in resolved),
    )
