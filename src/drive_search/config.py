"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embedding
    openai_api_key: str = Field(default="", description="OpenAI API key used by the embedding client")
    embedding_provider: str = Field(
        default="openai",
        description="Embedding backend: 'openai' (hosted) or 'huggingface' (local sentence-transformers)",
    )
    embedding_model: str = "text-embedding-ada-002"
    embedding_dimension: int = Field(
        default=1536,
        description="Vector size produced by the embedding model; every vector in the index must match it.",
    )
    embedding_timeout: float = 30.0

    # Vector index
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    index_name: str = "drive_documents"
    distance_metric: str = "cosine"

    # Remote file store
    drive_api_base_url: str = "https://www.googleapis.com/drive/v3"
    drive_mime_types: list[str] = Field(default_factory=lambda: ["text/plain", "text/markdown"])
    drive_page_size: int = Field(default=10, ge=1)
    drive_max_documents: int = Field(default=100, ge=1)
    request_timeout: float = 30.0

    # Pipeline
    ingest_max_workers: int = 4
    default_top_k: int = 5

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
