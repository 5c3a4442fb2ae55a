"""
Interpretation of generated critical path responses.

Generated text is untrusted: the JSON payload is pulled out of an
optional ```json fence, decoded, and validated against a strict schema.
Any failure yields ``None`` so the caller can switch to statistical
discovery.
"""

from __future__ import annotations

import json
import re
from typing import Any, Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaValidationError

from pathlayer.paths.models import CandidatePath, Priority

logger = structlog.get_logger()

JSON_FENCE_PATTERN = re.compile(r"```json\s*([\s\S]*?)\s*```")


class GeneratedPath(BaseModel):
    """One path as proposed by the generator."""

    model_config = ConfigDict(strict=True)

    name: str
    description: str
    services: list[str] = Field(min_length=1)
    priority: Literal["critical", "high", "medium", "low"] | None = None
    severity: float = Field(ge=0, le=1)


class GeneratedPathsResponse(BaseModel):
    """Top-level ``{"paths": [...]}`` object."""

    model_config = ConfigDict(strict=True)

    paths: list[GeneratedPath] = Field(min_length=1)


def extract_json_payload(content: str) -> str:
    """Return the contents of the first ```json fence, or the raw text."""
    match = JSON_FENCE_PATTERN.search(content)
    if match:
        return match.group(1)
    return content


def parse_generated_paths(content: str) -> GeneratedPathsResponse:
    """
    Decode and validate generated text.

    Raises:
        ValueError: If the payload is not JSON or does not match the schema
    """
    payload = extract_json_payload(content)
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"Generated content is not valid JSON: {e.msg}") from e
    except RecursionError as e:
        raise ValueError("Generated content is not valid JSON: nesting too deep") from e

    try:
        return GeneratedPathsResponse.model_validate(data)
    except SchemaValidationError as e:
        raise ValueError(f"Generated paths failed validation: {e.error_count()} error(s)") from e


def interpret_response(content: str) -> list[CandidatePath] | None:
    """
    Turn generated text into candidate paths.

    Args:
        content: Raw generated text

    Returns:
        Candidate paths, or None when the text cannot be used
    """
    try:
        response = parse_generated_paths(content)
    except ValueError as e:
        logger.warning("generated_paths_rejected", reason=str(e), content_length=len(content))
        return None

    return [
        CandidatePath(
            name=path.name,
            description=path.description,
            services=tuple(path.services),
            priority=Priority(path.priority) if path.priority is not None else None,
            severity=path.severity,
        )
        for path in response.paths
    ]
