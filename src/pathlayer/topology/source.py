"""
Topology sources.

The topology collaborator is consumed only through ``TopologySource``:
it hands back a read-only ServiceMetrics list for a time window.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

from pathlayer.topology.loader import load_topology
from pathlayer.topology.models import ServiceMetrics, TimeRange


class TopologySource(ABC):
    """Abstract supplier of topology snapshots."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name for identification."""

    @abstractmethod
    async def get_service_metrics(self, time_range: TimeRange) -> list[ServiceMetrics]:
        """
        Fetch per-service statistics for a time window.

        Args:
            time_range: Observation window

        Returns:
            List of ServiceMetrics
        """


class StaticTopologySource(TopologySource):
    """Serves a fixed in-memory snapshot regardless of the window."""

    def __init__(self, services: list[ServiceMetrics]):
        self._services = list(services)

    @property
    def name(self) -> str:
        return "static"

    async def get_service_metrics(self, time_range: TimeRange) -> list[ServiceMetrics]:
        return list(self._services)


class FileTopologySource(TopologySource):
    """Reads a snapshot file on every request, so edits are picked up."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return f"file:{self.path}"

    async def get_service_metrics(self, time_range: TimeRange) -> list[ServiceMetrics]:
        return await asyncio.to_thread(load_topology, self.path)
