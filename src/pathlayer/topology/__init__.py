"""
Topology snapshots consumed by critical path discovery.

Models for per-service call statistics, snapshot loading (JSON/YAML,
including topology-analyzer records), and pluggable topology sources.
"""

from pathlayer.topology.demo import create_demo_topology
from pathlayer.topology.loader import (
    load_topology,
    parse_topology,
    service_metrics_from_topology,
)
from pathlayer.topology.models import (
    ServiceDependency,
    ServiceMetrics,
    TimeRange,
    index_topology,
)
from pathlayer.topology.source import (
    FileTopologySource,
    StaticTopologySource,
    TopologySource,
)

__all__ = [
    # Models
    "ServiceDependency",
    "ServiceMetrics",
    "TimeRange",
    "index_topology",
    # Loading
    "load_topology",
    "parse_topology",
    "service_metrics_from_topology",
    "create_demo_topology",
    # Sources
    "TopologySource",
    "StaticTopologySource",
    "FileTopologySource",
]
