"""
Core utilities shared across PathLayer.
"""

from pathlayer.core.errors import (
    ConfigurationError,
    CriticalPathDiscoveryError,
    ExitCode,
    GenerationError,
    PathLayerError,
    ProviderError,
    TopologyLoadError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "PathLayerError",
    "ConfigurationError",
    "ProviderError",
    "GenerationError",
    "ValidationError",
    "TopologyLoadError",
    "CriticalPathDiscoveryError",
    "format_error_message",
    "main_with_error_handling",
]
