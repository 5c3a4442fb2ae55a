"""
Topology snapshot models.

Per-service call statistics for a time window, as supplied by the
topology collaborator. Snapshots are read-only inside PathLayer, so the
dataclasses are frozen. Wire records are type-checked with pydantic
before they become dataclasses.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# JSON numbers; ints stay ints so snapshots round-trip unchanged
WireNumber = Optional[Union[int, float]]


class DependencyRecord(BaseModel):
    """camelCase dependency edge as it arrives on the wire."""

    model_config = ConfigDict(strict=True)

    target_service: str = Field(alias="targetService")
    call_count: WireNumber = Field(default=None, alias="callCount")
    error_rate: WireNumber = Field(default=None, alias="errorRate")
    avg_latency: WireNumber = Field(default=None, alias="avgLatency")


class ServiceRecord(BaseModel):
    """camelCase service record as it arrives on the wire."""

    model_config = ConfigDict(strict=True)

    service_name: str = Field(alias="serviceName")
    call_count: WireNumber = Field(default=None, alias="callCount")
    error_rate: WireNumber = Field(default=None, alias="errorRate")
    avg_latency: WireNumber = Field(default=None, alias="avgLatency")
    p99_latency: WireNumber = Field(default=None, alias="p99Latency")
    dependencies: Optional[list[DependencyRecord]] = None


@dataclass(frozen=True)
class ServiceDependency:
    """A call edge from a service to one of its dependencies."""

    target_service: str
    call_count: float = 0
    error_rate: float = 0.0
    avg_latency: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceDependency:
        """
        Build from the camelCase wire format.

        Raises:
            pydantic.ValidationError: If a field is missing or has the wrong type
        """
        return cls.from_record(DependencyRecord.model_validate(data))

    @classmethod
    def from_record(cls, record: DependencyRecord) -> ServiceDependency:
        return cls(
            target_service=record.target_service,
            call_count=record.call_count or 0,
            error_rate=record.error_rate or 0.0,
            avg_latency=record.avg_latency or 0.0,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire format."""
        return {
            "targetService": self.target_service,
            "callCount": self.call_count,
            "errorRate": self.error_rate,
            "avgLatency": self.avg_latency,
        }


@dataclass(frozen=True)
class ServiceMetrics:
    """Aggregated call statistics for one service."""

    service_name: str
    call_count: float = 0
    error_rate: float = 0.0  # 0.0 - 1.0
    avg_latency: float = 0.0  # ms
    p99_latency: float = 0.0  # ms
    dependencies: tuple[ServiceDependency, ...] = field(default_factory=tuple)

    @property
    def dependency_names(self) -> list[str]:
        """Target service names, in declaration order."""
        return [dep.target_service for dep in self.dependencies]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServiceMetrics:
        """
        Build from the camelCase wire format.

        Missing or null numbers become zero.

        Raises:
            pydantic.ValidationError: If a field is missing or has the wrong type
        """
        record = ServiceRecord.model_validate(data)
        return cls(
            service_name=record.service_name,
            call_count=record.call_count or 0,
            error_rate=record.error_rate or 0.0,
            avg_latency=record.avg_latency or 0.0,
            p99_latency=record.p99_latency or 0.0,
            dependencies=tuple(
                ServiceDependency.from_record(dep) for dep in record.dependencies or []
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire format."""
        return {
            "serviceName": self.service_name,
            "callCount": self.call_count,
            "errorRate": self.error_rate,
            "avgLatency": self.avg_latency,
            "p99Latency": self.p99_latency,
            "dependencies": [dep.to_dict() for dep in self.dependencies],
        }


@dataclass(frozen=True)
class TimeRange:
    """Observation window of a topology snapshot (start_time < end_time)."""

    start_time: datetime
    end_time: datetime

    def to_dict(self) -> dict[str, str]:
        return {
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
        }


def index_topology(topology: Sequence[ServiceMetrics]) -> dict[str, ServiceMetrics]:
    """Map service name to metrics; the first entry wins on duplicate names."""
    index: dict[str, ServiceMetrics] = {}
    for service in topology:
        index.setdefault(service.service_name, service)
    return index
