"""
Critical path serializers: JSON and Mermaid output formats.

Pure functions that convert CriticalPath lists to string output.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlayer.paths.models import CriticalPath


def serialize_json(
    paths: Sequence[CriticalPath],
    metadata: dict[str, Any] | None = None,
) -> str:
    """Serialize paths as the dashboard JSON document."""
    document: dict[str, Any] = {"paths": [p.to_dict() for p in paths]}
    if metadata is not None:
        document["metadata"] = metadata
    return json.dumps(document, indent=2)


def serialize_mermaid(paths: Sequence[CriticalPath]) -> str:
    """
    Serialize paths as a Mermaid flowchart.

    One subgraph per path, nodes scoped by path id so shared services
    render once per flow, Nord-themed classDef styles per priority.
    """
    lines: list[str] = ["graph LR"]

    for path in paths:
        path_node = _mermaid_id(path.id)
        lines.append(f'    subgraph {path_node}["{path.name} ({path.severity:.2f})"]')
        for service in path.services:
            lines.append(f"        {path_node}_{_mermaid_id(service)}[{service}]")
        for edge in path.edges:
            src = f"{path_node}_{_mermaid_id(edge.source)}"
            tgt = f"{path_node}_{_mermaid_id(edge.target)}"
            lines.append(f"        {src} --> {tgt}")
        lines.append("    end")

    lines.append("")

    lines.append("    classDef critical fill:#BF616A,stroke:#2E3440,color:#ECEFF4")
    lines.append("    classDef high fill:#D08770,stroke:#2E3440,color:#ECEFF4")
    lines.append("    classDef medium fill:#5E81AC,stroke:#2E3440,color:#ECEFF4")
    lines.append("    classDef low fill:#A3BE8C,stroke:#2E3440,color:#ECEFF4")

    for path in paths:
        lines.append(f"    class {_mermaid_id(path.id)} {path.priority.value}")

    return "\n".join(lines)


def _mermaid_id(name: str) -> str:
    """Convert a name to a valid Mermaid node ID."""
    return re.sub(r"[^a-zA-Z0-9_]", "_", name)
