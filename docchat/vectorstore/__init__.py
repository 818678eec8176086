"""Vector store module."""

from docchat.vectorstore.models import IndexedPoint, SearchResult
from docchat.vectorstore.service import QdrantVectorStore, VectorStore

__all__ = [
    "IndexedPoint",
    "QdrantVectorStore",
    "SearchResult",
    "VectorStore",
]
