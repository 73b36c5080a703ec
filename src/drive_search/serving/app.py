"""FastAPI application exposing ingestion and search as a REST API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from drive_search.config import settings
from drive_search.embedding.client import EmbeddingClient
from drive_search.errors import (
    AuthError,
    ConfigurationError,
    DocumentSourceError,
    DriveSearchError,
    EmbeddingError,
    InvalidQueryError,
    VectorIndexError,
)
from drive_search.ingestion.controller import IngestionController
from drive_search.logging_setup import configure_logging
from drive_search.models import Credential, IngestionReport, SearchMatch
from drive_search.retrieval.controller import RetrievalController
from drive_search.sources.base import DocumentSourceBase

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[DriveSearchError], int] = {
    AuthError: 401,
    InvalidQueryError: 400,
    EmbeddingError: 502,
    VectorIndexError: 502,
    DocumentSourceError: 502,
    ConfigurationError: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the clients once and share them through ``app.state``."""
    from drive_search.index.chroma_index import ChromaVectorIndex
    from drive_search.sources.google_drive import GoogleDriveSource

    configure_logging(settings.log_level)
    embedder = EmbeddingClient()
    index = ChromaVectorIndex()
    source = GoogleDriveSource()

    app.state.source = source
    app.state.ingestion_controller = IngestionController(source, embedder, index)
    app.state.retrieval_controller = RetrievalController(embedder, index)
    logger.info("Drive search API ready (index=%s)", index.index_name)
    yield


app = FastAPI(
    title="Drive Search API",
    version="0.1.0",
    description="Index remote text documents and search them semantically.",
    lifespan=lifespan,
)


# ── Request / Response schemas ────────────────────────────────────────
class SearchRequest(BaseModel):
    """Incoming search query."""

    query: str | None = None
    top_k: int | None = None


class SearchResponse(BaseModel):
    """Ranked matches for a query."""

    results: list[SearchMatch]


class NoResultsResponse(BaseModel):
    """Returned when the index holds nothing similar to the query."""

    message: str = "no results"


class DocumentListing(BaseModel):
    """One candidate document visible to the caller."""

    id: str
    title: str
    link: str


# ── Dependencies ──────────────────────────────────────────────────────
def get_credential(authorization: str | None = Header(default=None)) -> Credential | None:
    """Read the bearer credential from the ``Authorization`` header."""
    return Credential.from_header(authorization)


def get_source(request: Request) -> DocumentSourceBase:
    return request.app.state.source


def get_ingestion_controller(request: Request) -> IngestionController:
    return request.app.state.ingestion_controller


def get_retrieval_controller(request: Request) -> RetrievalController:
    return request.app.state.retrieval_controller


# ── Error mapping ─────────────────────────────────────────────────────
@app.exception_handler(DriveSearchError)
async def pipeline_error_handler(request: Request, exc: DriveSearchError) -> JSONResponse:
    status = _STATUS_BY_ERROR.get(type(exc), 500)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"error": exc.message})


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/documents", response_model=list[DocumentListing])
def list_documents(
    credential: Credential | None = Depends(get_credential),
    source: DocumentSourceBase = Depends(get_source),
) -> list[DocumentListing]:
    """List the documents that an ingestion run would pick up."""
    if credential is None:
        raise AuthError("Unauthorized. Please sign in first.")
    refs = source.list_documents(credential)
    return [DocumentListing(id=r.id, title=r.title, link=r.link) for r in refs]


@app.post("/ingest", response_model=IngestionReport)
def ingest(
    credential: Credential | None = Depends(get_credential),
    controller: IngestionController = Depends(get_ingestion_controller),
) -> IngestionReport:
    """Fetch, embed and index every candidate document."""
    return controller.ingest(credential)


@app.post("/search", response_model=None)
def search(
    request: SearchRequest,
    controller: RetrievalController = Depends(get_retrieval_controller),
) -> SearchResponse | NoResultsResponse:
    """Return the documents most similar to the query."""
    matches = controller.search(request.query, request.top_k)
    if not matches:
        return NoResultsResponse()
    return SearchResponse(results=matches)
