"""
Generation capability interface.

The analyzer depends only on ``BaseGenerator``; concrete generators are
injected at composition time. A generator signals failure by raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class GenerationPreferences:
    """Sampling preferences for a generation request."""

    max_tokens: int = 2000
    temperature: float = 0.1


@dataclass(frozen=True)
class GenerationRequest:
    """A single prompt to generate against."""

    prompt: str
    task_type: str = "general"
    preferences: GenerationPreferences = field(default_factory=GenerationPreferences)


@dataclass(frozen=True)
class GenerationResponse:
    """Generated text plus the model that produced it."""

    content: str
    model: str = "unknown"


class BaseGenerator(ABC):
    """
    Abstract text generation capability.

    Implementations should raise (any exception) on timeout, auth failure
    or transport errors; callers treat every failure the same way.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Generator name for identification."""

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """
        Generate text for a prompt.

        Args:
            request: Prompt, task type and preferences

        Returns:
            GenerationResponse with the generated content
        """
