"""Retrieval module."""

from docchat.retrieval.models import CONTEXT_SEPARATOR, RetrievedContext
from docchat.retrieval.retriever import SemanticRetriever

__all__ = [
    "CONTEXT_SEPARATOR",
    "RetrievedContext",
    "SemanticRetriever",
]
