from __future__ import annotations

from fastapi import Depends

from pathlayer.config import Settings, get_settings
from pathlayer.paths import CriticalPathAnalyzer, create_analyzer
from pathlayer.topology import FileTopologySource, TopologySource


def get_analyzer(settings: Settings = Depends(get_settings)) -> CriticalPathAnalyzer:  # noqa: B008
    return create_analyzer(settings)


def get_topology_source(
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> TopologySource | None:
    if settings.topology_file:
        return FileTopologySource(settings.topology_file)
    return None
