"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from eulens.core.exceptions import ConfigurationMissing


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"), env_file_encoding="utf-8", extra="ignore")

    openai_api_key: str
    qdrant_url: str = "http://localhost:6333"
    qdrant_api_key: Optional[str] = None
    qdrant_collection_name: str = "eu-lens"
    service_name: str = "eu-lens"
    log_level: str = "INFO"

    embedding_model: str = "text-embedding-ada-002"
    embedding_dimensions: int = 1536
    llm_model: str = "gpt-4-turbo-preview"

    chunk_size: int = 1000
    top_k: int = 3
    relevance_threshold: float = 0.7

    registry_path: str = "data/document-registry.json"
    fetch_timeout_seconds: float = 30.0


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.

    Returns:
        Cached settings instance.

    Raises:
        ConfigurationMissing: If a required environment value is absent or invalid.
    """
    try:
        return Settings()
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]).upper() for error in e.errors()
        )
        raise ConfigurationMissing(
            f"Missing or invalid configuration: {fields}") from e
