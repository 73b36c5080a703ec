"""Chroma implementation of the vector-index abstraction."""

from __future__ import annotations

import logging
from typing import Any

import chromadb

from drive_search.config import settings
from drive_search.errors import ConfigurationError, VectorIndexError
from drive_search.index.base import VectorIndexBase
from drive_search.models import DocumentMetadata, IndexMatch

logger = logging.getLogger(__name__)

# Metrics whose distance maps to a bounded score.
_DISTANCE_METRICS = ("cosine", "l2")


def _distance_to_score(distance: float, metric: str) -> float:
    """Convert a Chroma distance to a similarity score (higher = more similar)."""
    if metric == "cosine":
        # Cosine distance lies in [0, 2], so the score lies in [-1, 1].
        return 1.0 - distance
    # L2 distances are unbounded; map to (0, 1].
    return 1.0 / (1.0 + distance)


class ChromaVectorIndex(VectorIndexBase):
    """Chroma-backed vector index.

    Parameters
    ----------
    index_name:
        Name of the Chroma collection.
    dimension:
        Expected embedding dimension.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    distance_metric:
        ``cosine`` | ``l2``; only applied when the collection is created.
    client:
        Pre-built Chroma client.  When *None*, an ``HttpClient`` is created.
    """

    def __init__(
        self,
        index_name: str = settings.index_name,
        dimension: int = settings.embedding_dimension,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        distance_metric: str = settings.distance_metric,
        client: Any = None,
    ) -> None:
        super().__init__(index_name, dimension)
        if distance_metric not in _DISTANCE_METRICS:
            raise ConfigurationError(f"Unsupported distance metric: {distance_metric!r}")
        self._distance_metric = distance_metric
        try:
            self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
            self._collection = self._client.get_or_create_collection(
                name=index_name,
                metadata={"hnsw:space": distance_metric},
            )
        except Exception as exc:
            raise VectorIndexError(f"Could not open Chroma collection {index_name!r}: {exc}") from exc

    # -- VectorIndexBase overrides --------------------------------------------

    def _upsert(self, doc_id: str, values: list[float], metadata: DocumentMetadata) -> None:
        try:
            self._collection.upsert(
                ids=[doc_id],
                embeddings=[values],
                metadatas=[metadata.model_dump()],
            )
        except Exception as exc:
            raise VectorIndexError(f"Upsert of {doc_id!r} failed: {exc}") from exc
        logger.debug("Upserted %s into %s", doc_id, self.index_name)

    def _query(self, values: list[float], top_k: int) -> list[IndexMatch]:
        try:
            results = self._collection.query(
                query_embeddings=[values],
                n_results=top_k,
                include=["metadatas", "distances"],
            )
        except Exception as exc:
            raise VectorIndexError(f"Query against {self.index_name!r} failed: {exc}") from exc

        ids = (results.get("ids") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0] or [{}] * len(ids)
        distances = (results.get("distances") or [[]])[0]

        matches: list[IndexMatch] = []
        for doc_id, meta, dist in zip(ids, metas, distances):
            matches.append(
                IndexMatch(
                    id=doc_id,
                    score=_distance_to_score(dist, self._distance_metric),
                    metadata=dict(meta or {}),
                )
            )
        return matches

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
