"""Embedding client — single place to swap embedding providers.

Supports two backends, selected with ``EMBEDDING_PROVIDER``:

1. **openai** (default) — hosted ``OpenAIEmbeddings``; set ``OPENAI_API_KEY``.
   ``text-embedding-ada-002`` produces 1536-dimensional vectors.
2. **huggingface** — local sentence-transformers model via
   ``HuggingFaceEmbeddings``; set ``EMBEDDING_MODEL`` and
   ``EMBEDDING_DIMENSION`` to match (e.g. 384 for ``all-MiniLM-L6-v2``).

Whatever goes wrong inside the provider is surfaced as a single
:class:`~drive_search.errors.EmbeddingError`.  Nothing is retried or cached
here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from drive_search.config import Settings, settings
from drive_search.errors import ConfigurationError, EmbeddingError
from drive_search.models import EmbeddingVector

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def get_embeddings(config: Settings = settings) -> Embeddings:
    """Return the configured LangChain embedding model.

    Provider libraries are imported lazily so only the selected one needs
    to be installed and importable.
    """
    if not config.embedding_model:
        raise ConfigurationError("EMBEDDING_MODEL is not configured")

    provider = config.embedding_provider.lower()
    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs: dict = {
            "model": config.embedding_model,
            "timeout": config.embedding_timeout,
            # No retries at this layer.
            "max_retries": 0,
        }
        if config.openai_api_key:
            kwargs["api_key"] = config.openai_api_key

        logger.info("Using OpenAI embeddings: %s", config.embedding_model)
        return OpenAIEmbeddings(**kwargs)
    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        logger.info("Using HuggingFace embeddings: %s", config.embedding_model)
        return HuggingFaceEmbeddings(model_name=config.embedding_model)

    raise ConfigurationError(f"Unsupported embedding provider: {config.embedding_provider!r}")


class EmbeddingClient:
    """Map text to an :class:`EmbeddingVector` through a LangChain ``Embeddings``.

    Parameters
    ----------
    embeddings:
        Any LangChain embedding model.  When *None*, :func:`get_embeddings`
        builds one from the global settings.
    """

    def __init__(self, embeddings: Embeddings | None = None) -> None:
        self._embeddings = embeddings if embeddings is not None else get_embeddings()

    def embed(self, text: str, owner_id: str = "") -> EmbeddingVector:
        """Embed a document body.

        Raises
        ------
        EmbeddingError
            On blank input, provider failure, or an empty response.
        """
        self._require_text(text)
        try:
            vectors = self._embeddings.embed_documents([text])
        except Exception as exc:
            raise EmbeddingError(f"Embedding request failed: {exc}") from exc
        if not vectors:
            raise EmbeddingError("Embedding service returned no vector")
        return self._to_vector(vectors[0], owner_id)

    def embed_query(self, text: str) -> EmbeddingVector:
        """Embed a search query (some models embed queries differently)."""
        self._require_text(text)
        try:
            values = self._embeddings.embed_query(text)
        except Exception as exc:
            raise EmbeddingError(f"Embedding request failed: {exc}") from exc
        return self._to_vector(values, "")

    # -- internals ------------------------------------------------------------

    @staticmethod
    def _require_text(text: str) -> None:
        if not text or not text.strip():
            raise EmbeddingError("Cannot embed empty text")

    @staticmethod
    def _to_vector(values: list[float] | None, owner_id: str) -> EmbeddingVector:
        try:
            return EmbeddingVector(owner_id=owner_id, values=list(values or []))
        except (TypeError, ValidationError) as exc:
            raise EmbeddingError(f"Embedding service returned no usable vector: {exc}") from exc
