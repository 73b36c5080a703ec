"""Embedding — text to fixed-length vectors via a pluggable LangChain model."""

from drive_search.embedding.client import EmbeddingClient, get_embeddings

__all__ = ["EmbeddingClient", "get_embeddings"]
