"""
Application settings using Pydantic.

Provides environment-based configuration loading with PATHLAYER_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Debug
    debug: bool = False

    # Environment
    environment: str = "development"

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = []

    # Topology snapshot served by the API when a request carries none
    topology_file: str | None = None

    # Generation backend (OpenAI-compatible chat completions endpoint)
    llm_base_url: str | None = None
    llm_api_key: str | None = None
    llm_model: str = "gpt-4o-mini"
    llm_task_type: str = "general"

    # Generation preferences: low temperature and a bounded token budget
    llm_max_tokens: int = 2000
    llm_temperature: float = 0.1

    # Deadline for the single generation attempt, in seconds
    llm_timeout: float = 30.0

    # Topologies larger than this are sent with the top-20 simplified prompt
    simplified_prompt_threshold: int = 50

    # HTTP client settings
    http_timeout: int = 30
    http_max_retries: int = 1
    http_retry_backoff_factor: float = 0.5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "PATHLAYER_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
