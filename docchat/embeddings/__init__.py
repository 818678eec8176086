"""Embedding service module."""

from docchat.embeddings.models import EmbeddingResult
from docchat.embeddings.service import EmbeddingService, GeminiEmbeddingService

__all__ = [
    "EmbeddingResult",
    "EmbeddingService",
    "GeminiEmbeddingService",
]
