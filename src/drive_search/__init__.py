"""
Drive Search — index remote text documents and query them semantically.

Public API
----------
- :class:`IngestionController` — list → fetch → embed → upsert, per document.
- :class:`RetrievalController` — query → embed → top-k → ranked matches.
"""

from drive_search.ingestion.controller import IngestionController
from drive_search.models import Credential, IngestionReport, SearchMatch
from drive_search.retrieval.controller import RetrievalController

__all__ = [
    "Credential",
    "IngestionController",
    "IngestionReport",
    "RetrievalController",
    "SearchMatch",
]
