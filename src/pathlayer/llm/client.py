"""
HTTP generator for OpenAI-compatible chat completion endpoints.
"""

from __future__ import annotations

from typing import Any

import structlog

from pathlayer.clients.base import BaseHTTPClient, PermanentHTTPError, RetryableHTTPError
from pathlayer.config import Settings
from pathlayer.core.errors import GenerationError
from pathlayer.llm.base import BaseGenerator, GenerationRequest, GenerationResponse

logger = structlog.get_logger()


class ChatCompletionsGenerator(BaseHTTPClient, BaseGenerator):
    """Generates text through ``POST /chat/completions``."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str | None = None,
        *,
        timeout: float = 30.0,
        max_retries: int = 1,
        backoff_factor: float = 0.5,
    ) -> None:
        super().__init__(
            base_url,
            timeout=timeout,
            max_retries=max_retries,
            backoff_factor=backoff_factor,
        )
        self._model = model
        self._api_key = api_key

    @property
    def name(self) -> str:
        return f"chat-completions:{self._model}"

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": request.prompt}],
            "max_tokens": request.preferences.max_tokens,
            "temperature": request.preferences.temperature,
        }

        try:
            data = await self.post("/chat/completions", json=payload)
        except (RetryableHTTPError, PermanentHTTPError) as e:
            raise GenerationError(
                f"Generation request failed: {e}", details={"model": self._model}
            ) from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationError(
                "Generation response missing message content", details={"model": self._model}
            ) from e

        if not isinstance(content, str):
            raise GenerationError("Generation response content is not text")

        logger.debug(
            "generation_completed",
            model=data.get("model", self._model),
            task_type=request.task_type,
            content_length=len(content),
        )
        return GenerationResponse(content=content, model=data.get("model") or self._model)


def create_generator(settings: Settings) -> BaseGenerator | None:
    """
    Build the configured generator.

    Returns:
        A generator, or None when no generation endpoint is configured
    """
    if not settings.llm_base_url:
        return None

    return ChatCompletionsGenerator(
        settings.llm_base_url,
        settings.llm_model,
        api_key=settings.llm_api_key,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
        backoff_factor=settings.http_retry_backoff_factor,
    )
