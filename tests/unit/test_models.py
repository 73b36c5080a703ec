"""Unit tests for the domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from drive_search.models import (
    Credential,
    EmbeddingVector,
    FailedDocument,
    IndexMatch,
    IngestionReport,
    SearchMatch,
    SourceDocument,
)


class TestCredential:
    @pytest.mark.parametrize("header", ["Bearer abc123", "bearer abc123", "abc123", "  Bearer   abc123 "])
    def test_from_header(self, header: str) -> None:
        credential = Credential.from_header(header)
        assert credential is not None
        assert credential.token.get_secret_value() == "abc123"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   "])
    def test_from_header_without_token(self, header: str | None) -> None:
        assert Credential.from_header(header) is None

    def test_blank_token_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Credential(token="   ")

    def test_token_not_exposed_in_repr(self) -> None:
        credential = Credential(token="super-secret")
        assert "super-secret" not in repr(credential)
        assert "super-secret" not in str(credential)

    def test_authorization_header(self) -> None:
        assert Credential(token="t").authorization_header == {"Authorization": "Bearer t"}


class TestSourceDocument:
    @pytest.mark.parametrize("content,blank", [("", True), (" \n\t", True), ("text", False)])
    def test_is_blank(self, content: str, blank: bool) -> None:
        assert SourceDocument(id="d", raw_content=content).is_blank is blank

    def test_frozen(self) -> None:
        doc = SourceDocument(id="d", raw_content="x")
        with pytest.raises(ValidationError):
            doc.raw_content = "y"  # type: ignore[misc]


class TestEmbeddingVector:
    def test_dimension(self) -> None:
        assert EmbeddingVector(values=[0.1] * 1536).dimension == 1536

    def test_empty_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EmbeddingVector(values=[])


class TestSearchMatch:
    def test_from_index_match(self) -> None:
        match = IndexMatch(id="a", score=0.8, metadata={"title": "T", "link": "L", "extra": 1})
        assert SearchMatch.from_index_match(match) == SearchMatch(id="a", title="T", link="L", score=0.8)


class TestIngestionReport:
    def test_defaults(self) -> None:
        report = IngestionReport()
        assert report.model_dump() == {"processed": 0, "skipped": 0, "failed": []}

    def test_total(self) -> None:
        report = IngestionReport(processed=2, skipped=1, failed=[FailedDocument(id="x", reason="boom")])
        assert report.total == 4
