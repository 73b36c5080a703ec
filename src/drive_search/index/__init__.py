"""
Index — idempotent upsert and top-k similarity query over stored vectors.

Public surface
--------------
- :class:`VectorIndexBase` — abstract backend with the dimension guard.
- :class:`ChromaVectorIndex` — default Chroma backend.
"""

from drive_search.index.base import VectorIndexBase

__all__ = [
    "ChromaVectorIndex",
    "VectorIndexBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorIndex to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorIndex":
        from drive_search.index.chroma_index import ChromaVectorIndex

        return ChromaVectorIndex
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
