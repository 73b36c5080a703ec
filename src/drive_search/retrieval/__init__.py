"""Retrieval — query embedding and ranked, metadata-enriched search results."""

from drive_search.retrieval.controller import RetrievalController

__all__ = ["RetrievalController"]
