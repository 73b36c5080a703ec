"""Ingestion controller — remote documents into the vector index.

For one caller credential the controller lists candidate documents,
then for every document independently::

    fetch → (skip if blank) → embed → upsert

A failure while handling one document is recorded in the
:class:`~drive_search.models.IngestionReport` and never stops the others.
Only errors that make the whole run meaningless propagate: a rejected
credential (:class:`AuthError`) and misconfiguration
(:class:`ConfigurationError`).

Usage::

    controller = IngestionController(GoogleDriveSource(), EmbeddingClient(), ChromaVectorIndex())
    report = controller.ingest(Credential(token="ya29..."))
"""

from __future__ import annotations

import enum
import logging
from concurrent.futures import ThreadPoolExecutor

from drive_search.config import settings
from drive_search.embedding.client import EmbeddingClient
from drive_search.errors import AuthError, ConfigurationError
from drive_search.index.base import VectorIndexBase
from drive_search.models import (
    Credential,
    DocumentMetadata,
    DocumentRef,
    FailedDocument,
    IngestionReport,
)
from drive_search.sources.base import DocumentSourceBase

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


class IngestionController:
    """Drive one ingestion run over every document the source lists.

    Parameters
    ----------
    source:
        Remote file store adapter.
    embedder:
        Client that turns document text into vectors.
    index:
        Vector index receiving the upserts.
    max_workers:
        Documents processed concurrently.  ``1`` processes them in order.
    """

    def __init__(
        self,
        source: DocumentSourceBase,
        embedder: EmbeddingClient,
        index: VectorIndexBase,
        *,
        max_workers: int = settings.ingest_max_workers,
    ) -> None:
        self._source = source
        self._embedder = embedder
        self._index = index
        self.max_workers = max(1, max_workers)

    # -- public API -----------------------------------------------------------

    def ingest(self, credential: Credential | None) -> IngestionReport:
        """Index every candidate document visible to *credential*.

        Raises
        ------
        AuthError
            If *credential* is missing, or the file store rejects it.
        DocumentSourceError
            If the candidate list cannot be retrieved.
        ConfigurationError
            On a vector dimension mismatch or missing index configuration.
        """
        if credential is None:
            raise AuthError("A credential is required to ingest documents")

        refs = self._source.list_documents(credential)
        if not refs:
            logger.info("No candidate documents to ingest")
            return IngestionReport()

        logger.info("Ingesting %d documents with %d workers", len(refs), self.max_workers)
        if self.max_workers == 1:
            outcomes = [self._process(credential, ref) for ref in refs]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="ingest") as pool:
                outcomes = list(pool.map(lambda ref: self._process(credential, ref), refs))

        report = self._aggregate(outcomes)
        logger.info(
            "Ingestion finished: processed=%d skipped=%d failed=%d",
            report.processed,
            report.skipped,
            len(report.failed),
        )
        return report

    # -- internals ------------------------------------------------------------

    def _process(self, credential: Credential, ref: DocumentRef) -> tuple[Outcome, str, str]:
        """Handle one document; returns ``(outcome, document id, reason)``."""
        try:
            document = self._source.fetch_document(credential, ref)
            if document.is_blank:
                logger.info("Skipping %s (%s): empty content", ref.id, ref.title)
                return Outcome.SKIPPED, ref.id, ""

            vector = self._embedder.embed(document.raw_content, owner_id=document.id)
            self._index.upsert(
                document.id,
                vector,
                DocumentMetadata(title=document.title, link=document.link),
            )
        except (AuthError, ConfigurationError):
            raise
        except Exception as exc:
            logger.warning("Failed to ingest %s (%s): %s", ref.id, ref.title, exc)
            return Outcome.FAILED, ref.id, str(exc) or type(exc).__name__

        logger.debug("Indexed %s (%s)", ref.id, ref.title)
        return Outcome.PROCESSED, ref.id, ""

    @staticmethod
    def _aggregate(outcomes: list[tuple[Outcome, str, str]]) -> IngestionReport:
        report = IngestionReport()
        for outcome, doc_id, reason in outcomes:
            if outcome is Outcome.PROCESSED:
                report.processed += 1
            elif outcome is Outcome.SKIPPED:
                report.skipped += 1
            else:
                report.failed.append(FailedDocument(id=doc_id, reason=reason))
        report.failed.sort(key=lambda f: f.id)
        return report
