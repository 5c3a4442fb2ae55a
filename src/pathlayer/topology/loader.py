"""
Topology snapshot loading.

Reads JSON or YAML snapshots holding either ServiceMetrics wire records
(``serviceName``, ``callCount``, ...) or raw topology-analyzer records
(``service``, ``metadata``, ``dependencies``), and converts analyzer
records into ServiceMetrics.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml
from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from pathlayer.core.errors import TopologyLoadError
from pathlayer.topology.models import ServiceDependency, ServiceMetrics, WireNumber

logger = structlog.get_logger()


class AnalyzerDependency(BaseModel):
    """Dependency entry of a topology-analyzer record."""

    service: str
    call_count: WireNumber = Field(default=None, alias="callCount")
    error_rate: WireNumber = Field(default=None, alias="errorRate")
    avg_latency_ms: WireNumber = Field(default=None, alias="avgLatencyMs")


class AnalyzerMetadata(BaseModel):
    total_spans: WireNumber = Field(default=None, alias="totalSpans")
    error_rate: WireNumber = Field(default=None, alias="errorRate")
    avg_latency_ms: WireNumber = Field(default=None, alias="avgLatencyMs")
    p95_latency_ms: WireNumber = Field(default=None, alias="p95LatencyMs")


class AnalyzerRecord(BaseModel):
    """
    Topology-analyzer service record.

    Validated in lax mode: analyzer exports may quote numbers
    (``"totalSpans": "1200"``), which are accepted; non-numeric text is not.
    """

    service: str
    metadata: Optional[AnalyzerMetadata] = None
    dependencies: Optional[list[AnalyzerDependency]] = None


_ANALYZER_RECORDS = TypeAdapter(list[AnalyzerRecord])


def service_metrics_from_topology(records: list[dict[str, Any]]) -> list[ServiceMetrics]:
    """
    Convert topology-analyzer service records to ServiceMetrics.

    The analyzer reports p95 latency only; it is used as the p99 proxy.
    Missing or null numbers become zero.

    Args:
        records: Records shaped like ``{"service", "metadata", "dependencies"}``

    Returns:
        ServiceMetrics in input order

    Raises:
        pydantic.ValidationError: If a record is missing fields or has non-numeric metrics
    """
    services: list[ServiceMetrics] = []
    for record in _ANALYZER_RECORDS.validate_python(records):
        metadata = record.metadata or AnalyzerMetadata()
        services.append(
            ServiceMetrics(
                service_name=record.service,
                call_count=metadata.total_spans or 0,
                error_rate=metadata.error_rate or 0,
                avg_latency=metadata.avg_latency_ms or 0,
                p99_latency=metadata.p95_latency_ms or 0,
                dependencies=tuple(
                    ServiceDependency(
                        target_service=dep.service,
                        call_count=dep.call_count or 0,
                        error_rate=dep.error_rate or 0,
                        avg_latency=dep.avg_latency_ms or 0,
                    )
                    for dep in record.dependencies or []
                ),
            )
        )
    return services


def parse_topology(data: Any) -> list[ServiceMetrics]:
    """
    Parse decoded snapshot data into ServiceMetrics.

    Accepts a list of records or a mapping with a ``services`` list.

    Raises:
        TopologyLoadError: If the data is not a recognised snapshot shape
    """
    if isinstance(data, dict):
        data = data.get("services")
    if not isinstance(data, list):
        raise TopologyLoadError("Topology snapshot must be a list of service records")

    if not data:
        return []

    try:
        if all(isinstance(r, dict) and "serviceName" in r for r in data):
            return [ServiceMetrics.from_dict(r) for r in data]
        if all(isinstance(r, dict) and "service" in r for r in data):
            return service_metrics_from_topology(data)
    except SchemaValidationError as e:
        raise TopologyLoadError(
            f"Malformed service record: {e.error_count()} validation error(s)",
            details={"field": ".".join(str(part) for part in e.errors()[0]["loc"])},
        ) from e

    raise TopologyLoadError(
        "Unrecognised service records (expected 'serviceName' or 'service' keys)"
    )


def load_topology(path: str | Path) -> list[ServiceMetrics]:
    """
    Load a topology snapshot from a JSON or YAML file.

    Args:
        path: Snapshot file; ``.yaml``/``.yml`` are read as YAML, anything else as JSON

    Returns:
        List of ServiceMetrics

    Raises:
        TopologyLoadError: If the file is missing or malformed
    """
    path = Path(path)
    if not path.exists():
        raise TopologyLoadError("Topology file not found", details={"path": str(path)})

    try:
        with open(path) as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TopologyLoadError(f"Invalid topology file: {e}", details={"path": str(path)}) from e

    services = parse_topology(data)
    logger.debug("loaded_topology", path=str(path), services=len(services))
    return services
