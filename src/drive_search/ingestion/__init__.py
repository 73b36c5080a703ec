"""
Ingestion — remote documents fetched, embedded and upserted into the index.

Each document is handled independently so that one failure never aborts
the run; the caller receives an aggregate report.
"""

from drive_search.ingestion.controller import IngestionController

__all__ = ["IngestionController"]
