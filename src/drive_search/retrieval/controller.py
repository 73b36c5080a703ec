"""Retrieval controller — natural-language query to ranked documents.

Usage::

    from drive_search.retrieval import RetrievalController

    controller = RetrievalController(EmbeddingClient(), ChromaVectorIndex())
    for match in controller.search("quarterly planning notes", top_k=3):
        print(match.score, match.title, match.link)

An empty list is the "no results" answer; failures are raised.
"""

from __future__ import annotations

import logging

from drive_search.config import settings
from drive_search.embedding.client import EmbeddingClient
from drive_search.errors import InvalidQueryError
from drive_search.index.base import VectorIndexBase
from drive_search.models import SearchMatch

logger = logging.getLogger(__name__)


class RetrievalController:
    """Embed a query and return the closest indexed documents.

    Parameters
    ----------
    embedder:
        Client used to embed the query text.
    index:
        Vector index to search.
    default_top_k:
        Number of results requested when :meth:`search` gets no ``top_k``.
    """

    def __init__(
        self,
        embedder: EmbeddingClient,
        index: VectorIndexBase,
        *,
        default_top_k: int = settings.default_top_k,
    ) -> None:
        self._embedder = embedder
        self._index = index
        self.default_top_k = default_top_k

    def search(self, query_text: str | None, top_k: int | None = None) -> list[SearchMatch]:
        """Run a semantic search.

        Parameters
        ----------
        query_text:
            Natural-language query; must contain non-whitespace text.
        top_k:
            Upper bound on the number of results (defaults to
            ``self.default_top_k``).  The index may return fewer.

        Returns
        -------
        list[SearchMatch]
            Matches in the order the index ranked them; empty when nothing
            matched.

        Raises
        ------
        InvalidQueryError
            On an empty query or a non-positive ``top_k``.
        EmbeddingError, VectorIndexError, ConfigurationError
            Propagated from the embedding and index clients.
        """
        if query_text is None or not query_text.strip():
            raise InvalidQueryError("Query text must not be empty")
        k = self.default_top_k if top_k is None else top_k
        if k < 1:
            raise InvalidQueryError(f"top_k must be at least 1, got {k}")

        vector = self._embedder.embed_query(query_text)
        matches = self._index.query(vector, k)
        if not matches:
            logger.info("No matches for query (%d chars)", len(query_text))
            return []

        logger.info("Search returned %d matches", len(matches))
        logger.debug("Query text: %r", query_text)
        return [SearchMatch.from_index_match(m) for m in matches]
