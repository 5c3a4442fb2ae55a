"""
Critical path analyzer.

Generation-backed critical path discovery with a statistical fallback.
Each call makes at most one generation attempt under an explicit
deadline; if generation is unavailable, fails, or returns something
unusable, the statistical result is used instead. Callers always get a
well-formed list.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from pathlayer.config import Settings
from pathlayer.core.errors import CriticalPathDiscoveryError
from pathlayer.llm.base import (
    BaseGenerator,
    GenerationPreferences,
    GenerationRequest,
)
from pathlayer.llm.client import create_generator
from pathlayer.logging import bind_context
from pathlayer.paths.assembler import CUSTOM_PATH_ID, assemble_path, discovered_path_id
from pathlayer.paths.interpreter import interpret_response
from pathlayer.paths.metrics import calculate_path_metrics
from pathlayer.paths.models import (
    CandidatePath,
    CriticalPath,
    DiscoveryMethod,
    PathMetrics,
    Priority,
)
from pathlayer.paths.prompts import DEFAULT_SIMPLIFIED_THRESHOLD, build_prompt
from pathlayer.paths.severity import classify_priority, classify_severity
from pathlayer.paths.statistical import statistical_path_discovery
from pathlayer.topology.models import ServiceMetrics, TimeRange

logger = structlog.get_logger()


class CriticalPathAnalyzer:
    """
    Discover critical paths from a topology snapshot.

    The generator is injected; pass None to run statistical discovery only.
    The analyzer keeps no state between calls.
    """

    def __init__(
        self,
        generator: BaseGenerator | None = None,
        *,
        task_type: str = "general",
        preferences: GenerationPreferences | None = None,
        generation_timeout: float | None = 30.0,
        simplified_threshold: int = DEFAULT_SIMPLIFIED_THRESHOLD,
    ) -> None:
        self.generator = generator
        self.task_type = task_type
        self.preferences = preferences or GenerationPreferences()
        self.generation_timeout = generation_timeout
        self.simplified_threshold = simplified_threshold

    async def discover_critical_paths(
        self,
        topology: Sequence[ServiceMetrics],
        time_range: TimeRange,
    ) -> list[CriticalPath]:
        """
        Discover and rank critical paths.

        Args:
            topology: Topology snapshot for the window
            time_range: Window echoed into path metadata

        Returns:
            Assembled paths, possibly empty when the topology has no entry points

        Raises:
            CriticalPathDiscoveryError: If topology is not a sequence of ServiceMetrics
        """
        _validate_topology(topology)

        log = bind_context(services=len(topology))
        log.info("critical_path_discovery_started")

        method = DiscoveryMethod.LLM
        candidates, model = await self._generate_candidates(topology)
        if candidates is None:
            method = DiscoveryMethod.STATISTICAL
            candidates = statistical_path_discovery(topology)

        paths = [
            self._assemble(index, candidate, topology, method, time_range, model)
            for index, candidate in enumerate(candidates)
        ]

        log.info("critical_path_discovery_completed", discovered_by=method.value, paths=len(paths))
        return paths

    def analyze_path(self, services: Sequence[str]) -> CriticalPath:
        """
        Build an ad hoc path from a service list.

        No topology is consulted, so metrics are all zero and the
        priority/severity are fixed at medium/0.5.
        """
        candidate = CandidatePath(
            name="Custom Path",
            description="User-defined critical path",
            services=tuple(services),
            priority=Priority.MEDIUM,
            severity=0.5,
        )
        return assemble_path(
            candidate,
            path_id=CUSTOM_PATH_ID,
            metrics=PathMetrics(),
            priority=Priority.MEDIUM,
            severity=0.5,
        )

    async def _generate_candidates(
        self,
        topology: Sequence[ServiceMetrics],
    ) -> tuple[list[CandidatePath] | None, str | None]:
        """Run the single generation attempt; (None, None) means use the fallback."""
        if self.generator is None:
            logger.info("llm_generation_unavailable", fallback="statistical")
            return None, None

        request = GenerationRequest(
            prompt=build_prompt(topology, self.simplified_threshold),
            task_type=self.task_type,
            preferences=self.preferences,
        )

        try:
            response = await asyncio.wait_for(
                self.generator.generate(request),
                timeout=self.generation_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "llm_generation_timeout",
                generator=self.generator.name,
                timeout=self.generation_timeout,
                fallback="statistical",
            )
            return None, None
        except Exception as e:
            logger.warning(
                "llm_generation_failed",
                generator=self.generator.name,
                error_type=type(e).__name__,
                error=str(e),
                fallback="statistical",
            )
            return None, None

        candidates = interpret_response(response.content)
        if candidates is None:
            logger.warning("llm_response_unusable", model=response.model, fallback="statistical")
            return None, None
        return candidates, response.model

    def _assemble(
        self,
        index: int,
        candidate: CandidatePath,
        topology: Sequence[ServiceMetrics],
        method: DiscoveryMethod,
        time_range: TimeRange,
        model: str | None,
    ) -> CriticalPath:
        metrics = calculate_path_metrics(candidate.services, topology)
        priority = candidate.priority or classify_priority(metrics)
        severity = classify_severity(metrics, priority)

        return assemble_path(
            candidate,
            path_id=discovered_path_id(index),
            metrics=metrics,
            priority=priority,
            severity=severity,
            discovered_by=method,
            time_range=time_range,
            model=model,
        )


def _validate_topology(topology: object) -> None:
    if isinstance(topology, (str, bytes)) or not isinstance(topology, Sequence):
        raise CriticalPathDiscoveryError(
            "Topology must be a sequence of ServiceMetrics",
            cause=type(topology).__name__,
        )
    for position, service in enumerate(topology):
        if not isinstance(service, ServiceMetrics):
            raise CriticalPathDiscoveryError(
                "Topology entries must be ServiceMetrics",
                cause=type(service).__name__,
                details={"position": position},
            )


def create_analyzer(settings: Settings, generator: BaseGenerator | None = None) -> CriticalPathAnalyzer:
    """Build an analyzer from settings, creating the configured generator if none is given."""
    return CriticalPathAnalyzer(
        generator if generator is not None else create_generator(settings),
        task_type=settings.llm_task_type,
        preferences=GenerationPreferences(
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        ),
        generation_timeout=settings.llm_timeout,
        simplified_threshold=settings.simplified_prompt_threshold,
    )
