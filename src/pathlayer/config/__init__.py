"""
PathLayer configuration.

Pydantic-based settings loaded from environment variables
(``PATHLAYER_`` prefix) and ``.env`` files.
"""

from pathlayer.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
