"""Error taxonomy for the ingestion and retrieval pipeline.

Every failure that crosses a component boundary is one of these types.
Client wrappers translate library exceptions into them with
``raise ... from exc`` so the original cause stays attached.
"""

from __future__ import annotations


class DriveSearchError(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthError(DriveSearchError):
    """The caller credential is missing or was rejected downstream."""


class InvalidQueryError(DriveSearchError):
    """The search query is empty or otherwise unusable."""


class EmbeddingError(DriveSearchError):
    """The embedding service failed or returned no usable vector."""


class VectorIndexError(DriveSearchError):
    """The vector index rejected an upsert or query."""


class DocumentSourceError(DriveSearchError):
    """The remote file store could not list or return a document."""


class ConfigurationError(DriveSearchError):
    """Missing configuration or a vector dimension mismatch."""
