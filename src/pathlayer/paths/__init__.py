"""
Critical path discovery.

Identifies business-significant request flows in a topology snapshot,
using text generation when available and a deterministic statistical
walk otherwise, then scores each path from aggregated metrics.
"""

from pathlayer.paths.analyzer import CriticalPathAnalyzer, create_analyzer
from pathlayer.paths.assembler import assemble_path, build_edges
from pathlayer.paths.interpreter import extract_json_payload, interpret_response
from pathlayer.paths.metrics import calculate_path_metrics
from pathlayer.paths.models import (
    CandidatePath,
    CriticalPath,
    DiscoveryMethod,
    PathEdge,
    PathMetrics,
    Priority,
)
from pathlayer.paths.prompts import (
    build_critical_path_prompt,
    build_prompt,
    build_simplified_prompt,
)
from pathlayer.paths.severity import classify_priority, classify_severity
from pathlayer.paths.statistical import statistical_path_discovery

__all__ = [
    # Models
    "Priority",
    "DiscoveryMethod",
    "CandidatePath",
    "PathMetrics",
    "PathEdge",
    "CriticalPath",
    # Scoring
    "calculate_path_metrics",
    "classify_severity",
    "classify_priority",
    # Strategies
    "statistical_path_discovery",
    "build_prompt",
    "build_critical_path_prompt",
    "build_simplified_prompt",
    "extract_json_payload",
    "interpret_response",
    # Assembly
    "build_edges",
    "assemble_path",
    "CriticalPathAnalyzer",
    "create_analyzer",
]
