"""Unit tests for the serving layer.

Controllers are injected through ``app.dependency_overrides`` so the
lifespan (which connects to Chroma and OpenAI) never runs.
"""

from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from drive_search.embedding.client import EmbeddingClient
from drive_search.ingestion.controller import IngestionController
from drive_search.models import IndexMatch
from drive_search.retrieval.controller import RetrievalController
from drive_search.serving.app import (
    app,
    get_ingestion_controller,
    get_retrieval_controller,
    get_source,
)

AUTH = {"Authorization": "Bearer test-token"}


@pytest.fixture()
def source(make_source: Any) -> Any:
    return make_source(
        {
            "doc-1": ("notes.txt", "Meeting notes about the launch."),
            "doc-2": ("empty.md", "  "),
        }
    )


@pytest.fixture()
def index(make_index: Any) -> Any:
    return make_index(
        matches=[
            IndexMatch(id="doc-1", score=0.91, metadata={"title": "notes.txt", "link": "https://example.com/doc-1"}),
            IndexMatch(id="doc-3", score=0.42, metadata={"title": "old.md", "link": "https://example.com/doc-3"}),
        ]
    )


@pytest.fixture()
def client(source: Any, index: Any, embedder: EmbeddingClient) -> Iterator[TestClient]:
    app.dependency_overrides[get_source] = lambda: source
    app.dependency_overrides[get_ingestion_controller] = lambda: IngestionController(
        source, embedder, index, max_workers=1
    )
    app.dependency_overrides[get_retrieval_controller] = lambda: RetrievalController(embedder, index)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_endpoint() -> None:
    """GET /health should return 200 with status ok."""
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestDocuments:
    def test_lists_documents(self, client: TestClient) -> None:
        response = client.get("/documents", headers=AUTH)
        assert response.status_code == 200
        assert response.json() == [
            {"id": "doc-1", "title": "notes.txt", "link": "https://example.com/doc-1"},
            {"id": "doc-2", "title": "empty.md", "link": "https://example.com/doc-2"},
        ]

    def test_requires_credential(self, client: TestClient) -> None:
        response = client.get("/documents")
        assert response.status_code == 401
        assert "error" in response.json()


class TestIngest:
    def test_returns_report(self, client: TestClient, index: Any) -> None:
        response = client.post("/ingest", headers=AUTH)
        assert response.status_code == 200
        assert response.json() == {"processed": 1, "skipped": 1, "failed": []}
        assert list(index.entries) == ["doc-1"]

    def test_missing_credential_is_401(self, client: TestClient, source: Any) -> None:
        response = client.post("/ingest")
        assert response.status_code == 401
        assert source.list_calls == 0

    def test_failures_reported_in_body(self, client: TestClient, source: Any) -> None:
        source.fail_ids.add("doc-1")
        response = client.post("/ingest", headers=AUTH)
        assert response.status_code == 200
        body = response.json()
        assert body["processed"] == 0
        assert body["failed"][0]["id"] == "doc-1"


class TestSearch:
    def test_returns_ranked_results(self, client: TestClient) -> None:
        response = client.post("/search", json={"query": "launch"})
        assert response.status_code == 200
        assert response.json() == {
            "results": [
                {"id": "doc-1", "title": "notes.txt", "link": "https://example.com/doc-1", "score": 0.91},
                {"id": "doc-3", "title": "old.md", "link": "https://example.com/doc-3", "score": 0.42},
            ]
        }

    def test_top_k_forwarded(self, client: TestClient, index: Any) -> None:
        response = client.post("/search", json={"query": "launch", "top_k": 1})
        assert len(response.json()["results"]) == 1
        assert index.query_calls == [1]

    def test_no_results_message(self, client: TestClient, index: Any) -> None:
        index.matches = []
        response = client.post("/search", json={"query": "nothing"})
        assert response.status_code == 200
        assert response.json() == {"message": "no results"}

    @pytest.mark.parametrize("body", [{}, {"query": ""}, {"query": None}])
    def test_empty_query_is_400(self, client: TestClient, body: dict) -> None:
        response = client.post("/search", json=body)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_embedding_failure_is_502(self, client: TestClient, fake_embeddings: Any) -> None:
        fake_embeddings.fail_on.add("explode")
        response = client.post("/search", json={"query": "explode"})
        assert response.status_code == 502
