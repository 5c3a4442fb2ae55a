"""
CLI commands for PathLayer.
"""

from pathlayer.cli.paths import analyze_command, discover_command

__all__ = [
    "discover_command",
    "analyze_command",
]
