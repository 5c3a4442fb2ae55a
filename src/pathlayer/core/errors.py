"""
Unified error handling for PathLayer.

Discovery itself degrades gracefully: generation and interpretation
failures are recovered inside the analyzer and never reach callers.
The exceptions here cover what remains (structurally invalid input,
unreadable topology snapshots, misconfiguration) and map each onto a
CLI exit code.

Exit Codes:
- 0: Success
- 10: Configuration error
- 11: Provider error (generation backend, topology source)
- 12: Validation error (invalid topology or time range)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    PROVIDER_ERROR = 11
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127


class PathLayerError(Exception):
    """Base exception for PathLayer errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PathLayerError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class ProviderError(PathLayerError):
    """Raised when an external collaborator (generation backend, topology source) fails."""

    exit_code = ExitCode.PROVIDER_ERROR


class GenerationError(ProviderError):
    """Raised by generators when text generation fails."""


class ValidationError(PathLayerError):
    """Raised for validation failures."""

    exit_code = ExitCode.VALIDATION_ERROR


class TopologyLoadError(ValidationError):
    """Raised when a topology snapshot cannot be read or parsed."""


class CriticalPathDiscoveryError(ValidationError):
    """Raised when discovery input is structurally invalid.

    This is the only error ``discover_critical_paths`` surfaces; it is
    raised before any processing starts.
    """

    def __init__(
        self,
        message: str,
        cause: object | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.cause = cause


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI command functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - PathLayerError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except PathLayerError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                _print_error(format_error_message(e))
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130  # Standard exit code for SIGINT
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                _print_error(f"Unexpected error: {e}")
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: PathLayerError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg


def _print_error(message: str) -> None:
    from pathlayer.cli.ux import error as print_error

    print_error(message)
