from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from pathlayer.api.deps import get_analyzer, get_topology_source
from pathlayer.core.errors import CriticalPathDiscoveryError, TopologyLoadError
from pathlayer.paths import CriticalPathAnalyzer, DiscoveryMethod
from pathlayer.topology import TimeRange, TopologySource, parse_topology

router = APIRouter()
logger = structlog.get_logger()

_timestamp = TypeAdapter(datetime)


class CriticalPathsRequest(BaseModel):
    start_time: str | None = Field(default=None, alias="startTime")
    end_time: str | None = Field(default=None, alias="endTime")
    topology: list[dict[str, Any]] | None = None


class AnalyzePathRequest(BaseModel):
    services: list[str]


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = _timestamp.validate_python(value)
    except SchemaValidationError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _bad_request(error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": error, "message": message},
    )


@router.post("/ai-insights/critical-paths")
async def discover_critical_paths(
    payload: CriticalPathsRequest,
    analyzer: CriticalPathAnalyzer = Depends(get_analyzer),  # noqa: B008
    source: TopologySource | None = Depends(get_topology_source),  # noqa: B008
) -> JSONResponse:
    """Discover critical paths for a time window."""
    started = time.monotonic()

    if not payload.start_time or not payload.end_time:
        return _bad_request(
            "Missing required parameters", "Both startTime and endTime are required"
        )

    start_time = _parse_timestamp(payload.start_time)
    end_time = _parse_timestamp(payload.end_time)
    if start_time is None or end_time is None:
        return _bad_request(
            "Invalid time range", "startTime and endTime must be valid ISO 8601 timestamps"
        )
    if start_time >= end_time:
        return _bad_request("Invalid time range", "startTime must be before endTime")

    time_range = TimeRange(start_time=start_time, end_time=end_time)

    try:
        if payload.topology is not None:
            topology = parse_topology(payload.topology)
        elif source is not None:
            topology = await source.get_service_metrics(time_range)
        else:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "error": "Topology unavailable",
                    "message": "No topology in request and no topology source configured",
                },
            )
    except TopologyLoadError as e:
        logger.warning("topology_load_failed", error=e.message, **e.details)
        if payload.topology is not None:
            return _bad_request("Invalid topology", e.message)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": "Topology unavailable", "message": e.message},
        )

    try:
        paths = await analyzer.discover_critical_paths(topology, time_range)
    except CriticalPathDiscoveryError as e:
        logger.error("critical_path_discovery_error", error=e.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Critical path discovery failed",
                "message": e.message,
                "cause": None if e.cause is None else str(e.cause),
            },
        )

    execution_time_ms = round((time.monotonic() - started) * 1000)
    first = paths[0] if paths else None

    return JSONResponse(
        content={
            "paths": [p.to_dict() for p in paths],
            "metadata": {
                "discoveredBy": (
                    first.discovered_by if first else DiscoveryMethod.STATISTICAL.value
                ),
                "model": first.metadata.get("model", "unknown") if first else "unknown",
                "executionTimeMs": execution_time_ms,
                "topologyServicesCount": len(topology),
                "pathsDiscovered": len(paths),
            },
        }
    )


@router.post("/ai-insights/critical-paths/analyze")
async def analyze_path(
    payload: AnalyzePathRequest,
    analyzer: CriticalPathAnalyzer = Depends(get_analyzer),  # noqa: B008
) -> dict[str, Any]:
    """Build a single ad hoc path from a service list."""
    return analyzer.analyze_path(payload.services).to_dict()


@router.get("/ai-insights/health")
async def ai_insights_health() -> dict[str, str]:
    """Health check for the critical path service."""
    return {
        "status": "ok",
        "service": "ai-insights",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
