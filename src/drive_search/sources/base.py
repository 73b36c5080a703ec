"""Abstract base class for remote document sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from drive_search.models import Credential, DocumentRef, SourceDocument


class DocumentSourceBase(ABC):
    """Remote file store that lists candidate documents and returns their text.

    Every call carries the caller's :class:`Credential`; the source never
    stores it between calls.
    """

    @abstractmethod
    def list_documents(self, credential: Credential) -> list[DocumentRef]:
        """Return the candidate documents visible to *credential*.

        Only plain-text / markdown content types are returned.
        """
        ...

    @abstractmethod
    def fetch_content(self, credential: Credential, document_id: str) -> str:
        """Return the raw text body of one document."""
        ...

    def fetch_document(self, credential: Credential, ref: DocumentRef) -> SourceDocument:
        """Fetch the body of *ref* and combine it with the listed metadata."""
        content = self.fetch_content(credential, ref.id)
        return SourceDocument(id=ref.id, title=ref.title, raw_content=content, link=ref.link)
