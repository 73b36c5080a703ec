"""Shared pytest configuration and fixtures.

The fakes below subclass the real abstractions so the controllers and the
HTTP layer can be exercised without Google Drive, OpenAI, or Chroma.
"""

from __future__ import annotations

from typing import Any

import pytest
from langchain_core.embeddings import Embeddings

from drive_search.embedding.client import EmbeddingClient
from drive_search.errors import DocumentSourceError, VectorIndexError
from drive_search.index.base import VectorIndexBase
from drive_search.models import (
    Credential,
    DocumentMetadata,
    DocumentRef,
    EmbeddingVector,
    IndexedEntry,
    IndexMatch,
)
from drive_search.sources.base import DocumentSourceBase

DIM = 4


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────


class FakeEmbeddings(Embeddings):
    """Deterministic embeddings; texts listed in ``fail_on`` raise."""

    def __init__(self, dimension: int = DIM, fail_on: set[str] | None = None) -> None:
        self.dimension = dimension
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.fail_on:
            raise RuntimeError("rate limit exceeded")
        return [float(len(text) % 7 + i) for i in range(self.dimension)]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)


class FakeVectorIndex(VectorIndexBase):
    """In-memory index keyed by document id; returns canned query matches."""

    def __init__(
        self,
        dimension: int = DIM,
        matches: list[IndexMatch] | None = None,
        fail_ids: set[str] | None = None,
    ) -> None:
        super().__init__("test-index", dimension)
        self.entries: dict[str, IndexedEntry] = {}
        self.matches = matches or []
        self.fail_ids = fail_ids or set()
        self.upsert_calls = 0
        self.query_calls: list[int] = []

    def _upsert(self, doc_id: str, values: list[float], metadata: DocumentMetadata) -> None:
        self.upsert_calls += 1
        if doc_id in self.fail_ids:
            raise VectorIndexError(f"upsert of {doc_id} rejected")
        self.entries[doc_id] = IndexedEntry(
            id=doc_id,
            vector=EmbeddingVector(owner_id=doc_id, values=values),
            metadata=metadata,
        )

    def _query(self, values: list[float], top_k: int) -> list[IndexMatch]:
        self.query_calls.append(top_k)
        return self.matches[:top_k]

    def health_check(self) -> bool:
        return True


class FakeSource(DocumentSourceBase):
    """Source serving ``{id: (title, content)}``; ids in ``fail_ids`` raise on fetch."""

    def __init__(
        self,
        documents: dict[str, tuple[str, str]] | None = None,
        fail_ids: set[str] | None = None,
    ) -> None:
        self.documents = documents or {}
        self.fail_ids = fail_ids or set()
        self.list_calls = 0
        self.fetched: list[str] = []

    def list_documents(self, credential: Credential) -> list[DocumentRef]:
        self.list_calls += 1
        return [
            DocumentRef(id=doc_id, title=title, link=f"https://example.com/{doc_id}")
            for doc_id, (title, _) in self.documents.items()
        ]

    def fetch_content(self, credential: Credential, document_id: str) -> str:
        self.fetched.append(document_id)
        if document_id in self.fail_ids:
            raise DocumentSourceError(f"download of {document_id} failed")
        return self.documents[document_id][1]


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def credential() -> Credential:
    return Credential(token="test-token")


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def embedder(fake_embeddings: FakeEmbeddings) -> EmbeddingClient:
    return EmbeddingClient(fake_embeddings)


@pytest.fixture()
def fake_index() -> FakeVectorIndex:
    return FakeVectorIndex()


@pytest.fixture()
def make_source() -> Any:
    return FakeSource


@pytest.fixture()
def make_index() -> Any:
    return FakeVectorIndex


@pytest.fixture()
def make_embeddings() -> Any:
    return FakeEmbeddings
