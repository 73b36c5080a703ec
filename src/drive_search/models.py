"""Domain models shared by the source, embedding, index and controller layers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class Credential(BaseModel):
    """Opaque bearer token issued by the identity provider.

    The pipeline never inspects or refreshes the token; it only attaches
    it to calls against the remote file store.
    """

    model_config = ConfigDict(frozen=True)

    token: SecretStr

    @field_validator("token")
    @classmethod
    def _token_present(cls, token: SecretStr) -> SecretStr:
        if not token.get_secret_value().strip():
            raise ValueError("credential token must not be blank")
        return token

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token.get_secret_value()}"}

    @classmethod
    def from_header(cls, value: str | None) -> Credential | None:
        """Build a credential from an ``Authorization`` header value.

        Accepts either ``"Bearer <token>"`` or a bare token.  Returns
        ``None`` when no usable token is present.
        """
        if not value:
            return None
        scheme, _, rest = value.strip().partition(" ")
        token = rest.strip() if scheme.lower() == "bearer" else value.strip()
        return cls(token=token) if token else None


class DocumentRef(BaseModel):
    """One candidate document as listed by the remote file store."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str = ""
    link: str = ""
    mime_type: str = ""


class SourceDocument(BaseModel):
    """A fetched document, immutable for the rest of the ingestion run.

    Attributes
    ----------
    id:
        Identifier in the source system; the primary key in the index.
    title:
        Human-readable file name.
    raw_content:
        The text body exactly as returned by the file store.
    link:
        Stable external URL for the document.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str = ""
    raw_content: str = ""
    link: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.raw_content.strip()


class EmbeddingVector(BaseModel):
    """Dense vector produced by the embedding service for one piece of text."""

    model_config = ConfigDict(frozen=True)

    owner_id: str = ""
    values: list[float]

    @field_validator("values")
    @classmethod
    def _not_empty(cls, values: list[float]) -> list[float]:
        if not values:
            raise ValueError("embedding vector must not be empty")
        return values

    @property
    def dimension(self) -> int:
        return len(self.values)


class DocumentMetadata(BaseModel):
    """Metadata stored next to each vector in the index."""

    title: str = ""
    link: str = ""


class IndexedEntry(BaseModel):
    """A vector stored in the index, keyed by the source document id."""

    id: str = Field(min_length=1)
    vector: EmbeddingVector
    metadata: DocumentMetadata


class IndexMatch(BaseModel):
    """Raw hit returned by a top-k index query."""

    id: str
    score: float
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchMatch(BaseModel):
    """A ranked search result handed back to the caller."""

    id: str
    title: str
    link: str
    score: float

    @classmethod
    def from_index_match(cls, match: IndexMatch) -> SearchMatch:
        meta = match.metadata or {}
        return cls(
            id=match.id,
            title=str(meta.get("title", "")),
            link=str(meta.get("link", "")),
            score=match.score,
        )


class FailedDocument(BaseModel):
    """A document the ingestion run could not index."""

    id: str
    reason: str


class IngestionReport(BaseModel):
    """Aggregate outcome of one ingestion run.

    Attributes
    ----------
    processed:
        Documents embedded and upserted successfully.
    skipped:
        Documents whose content was empty or whitespace-only.
    failed:
        Documents that failed at fetch, embed or upsert, with the reason.
    """

    processed: int = 0
    skipped: int = 0
    failed: list[FailedDocument] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.processed + self.skipped + len(self.failed)
