"""Abstract base class for vector-index backends.

Adding a new backend (Pinecone, Weaviate, Qdrant …) only requires
subclassing :class:`VectorIndexBase` and implementing ``_upsert``,
``_query`` and ``health_check``.  The dimension guard lives here so every
backend enforces it the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from drive_search.errors import ConfigurationError
from drive_search.models import DocumentMetadata, EmbeddingVector, IndexMatch


class VectorIndexBase(ABC):
    """Backend-agnostic vector-index interface.

    Parameters
    ----------
    index_name:
        Logical name of the collection / index / namespace.
    dimension:
        Vector size every stored and queried vector must have.
    """

    def __init__(self, index_name: str, dimension: int) -> None:
        if not index_name or not index_name.strip():
            raise ConfigurationError("Vector index name is not configured")
        if dimension < 1:
            raise ConfigurationError(f"Invalid vector dimension: {dimension}")
        self.index_name = index_name
        self.dimension = dimension

    # -- public API -----------------------------------------------------------

    def upsert(self, doc_id: str, vector: EmbeddingVector, metadata: DocumentMetadata) -> None:
        """Insert or replace the entry stored under *doc_id*.

        Raises
        ------
        ConfigurationError
            If *vector* does not have the index dimension.  Nothing is written.
        VectorIndexError
            If the backend rejects the write.
        """
        self._check_dimension(vector)
        self._upsert(doc_id, vector.values, metadata)

    def query(self, vector: EmbeddingVector, top_k: int = 5) -> list[IndexMatch]:
        """Return up to *top_k* entries ordered by descending similarity.

        The backend may return fewer than *top_k* matches.
        """
        self._check_dimension(vector)
        return self._query(vector.values, top_k)

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def _upsert(self, doc_id: str, values: list[float], metadata: DocumentMetadata) -> None:
        ...

    @abstractmethod
    def _query(self, values: list[float], top_k: int) -> list[IndexMatch]:
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- internals ------------------------------------------------------------

    def _check_dimension(self, vector: EmbeddingVector) -> None:
        if vector.dimension != self.dimension:
            raise ConfigurationError(
                f"Vector dimension {vector.dimension} does not match index "
                f"{self.index_name!r} dimension {self.dimension}"
            )
