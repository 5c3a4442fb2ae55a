"""
Text generation capability used by critical path discovery.
"""

from pathlayer.llm.base import (
    BaseGenerator,
    GenerationPreferences,
    GenerationRequest,
    GenerationResponse,
)
from pathlayer.llm.client import ChatCompletionsGenerator, create_generator

__all__ = [
    "BaseGenerator",
    "GenerationPreferences",
    "GenerationRequest",
    "GenerationResponse",
    "ChatCompletionsGenerator",
    "create_generator",
]
