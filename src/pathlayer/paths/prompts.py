"""
Prompts for critical path identification.

Topology is projected to a compact form before serialization: only the
fields a model needs to reason about traffic, errors and call structure.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from pathlayer.topology.models import ServiceMetrics

SIMPLIFIED_TOP_SERVICES = 20
DEFAULT_SIMPLIFIED_THRESHOLD = 50


def simplify_topology(topology: Sequence[ServiceMetrics]) -> list[dict[str, Any]]:
    """Project each service to name, traffic, errors, latency and dependency names."""
    return [
        {
            "name": service.service_name,
            "calls": service.call_count,
            "errors": service.error_rate,
            "latency": service.avg_latency,
            "deps": service.dependency_names,
        }
        for service in topology
    ]


def build_critical_path_prompt(topology: Sequence[ServiceMetrics]) -> str:
    """
    Build the full critical path identification prompt.

    Asks for 5-10 diverse, business-oriented paths returned as a bare JSON
    object with a ``paths`` array.
    """
    simplified = json.dumps(simplify_topology(topology), indent=2)

    return f"""
You are an expert SRE analyzing a distributed system's service topology to identify critical request paths.

# Service Topology
{simplified}

# Task
Identify the 5-10 most critical request paths through this system. Each path should:
1. Represent a distinct business capability (e.g., "User Checkout", "Search Results", "Order Processing")
2. Flow from user-facing services to backend/data services
3. Have different characteristics (high traffic, error-prone, latency-sensitive, etc.)
4. Be actionable for diagnostics and monitoring

# Critical Instructions
- **Diverse Paths**: Don't just identify variations of the same flow - find truly different business capabilities
- **Business Names**: Use clear, business-oriented names (NOT technical like "frontend-api-db")
- **End-to-End**: Each path should show the complete request flow from entry to exit
- **Realistic**: Base paths on actual service dependencies in the topology
- **Prioritization**: Assign priority based on business impact + technical severity

# Priority Levels
- **critical**: Revenue-impacting, customer-facing, high volume
- **high**: Important features, moderate volume, business-critical
- **medium**: Supporting features, internal services
- **low**: Background jobs, administrative functions

# Severity Scoring (0-1)
Calculate severity based on:
- Traffic volume (higher = more severe)
- Error rate (higher = more severe)
- Latency (higher = more severe)
- Business impact (customer-facing = more severe)

# Output Format
Return a JSON object with a "paths" array. Each path must have:
{{
  "paths": [
    {{
      "name": "User Checkout Flow",
      "description": "Complete purchase transaction from cart to payment confirmation",
      "services": ["frontend", "api-gateway", "cart-service", "payment-service", "order-service", "database"],
      "priority": "critical",
      "severity": 0.95
    }},
    {{
      "name": "Product Search",
      "description": "Search product catalog and return filtered results",
      "services": ["frontend", "api-gateway", "search-service", "catalog-service", "elasticsearch"],
      "priority": "high",
      "severity": 0.75
    }}
  ]
}}

# Important
- Return ONLY valid JSON, no explanations
- Include exactly 5-10 paths
- Ensure all services in paths exist in the topology
- Make paths distinct from each other
- Focus on observable, diagnosable flows
""".strip()


def build_simplified_prompt(topology: Sequence[ServiceMetrics]) -> str:
    """
    Build a shorter prompt covering only the busiest services.

    Used for large topologies: keeps the top 20 services by call count and
    asks for 5-7 paths.
    """
    top_services = sorted(topology, key=lambda s: s.call_count, reverse=True)
    projected = [
        {
            "name": s.service_name,
            "calls": s.call_count,
            "errors": s.error_rate,
            "to": ",".join(s.dependency_names),
        }
        for s in top_services[:SIMPLIFIED_TOP_SERVICES]
    ]

    return f"""
Analyze this distributed system and identify 5-7 critical request paths.

Services (top {SIMPLIFIED_TOP_SERVICES} by volume):
{json.dumps(projected, indent=2)}

Return ONLY JSON:
{{
  "paths": [
    {{
      "name": "Business Capability Name",
      "description": "What this path does",
      "services": ["service1", "service2", "service3"],
      "priority": "critical|high|medium|low",
      "severity": 0.0-1.0
    }}
  ]
}}

Requirements:
- 5-7 distinct paths
- Business-oriented names
- Real services from topology
- End-to-end flows
- Diverse priorities
""".strip()


def build_prompt(
    topology: Sequence[ServiceMetrics],
    simplified_threshold: int = DEFAULT_SIMPLIFIED_THRESHOLD,
) -> str:
    """Pick the full prompt, or the simplified one when the topology is large."""
    if len(topology) > simplified_threshold:
        return build_simplified_prompt(topology)
    return build_critical_path_prompt(topology)
