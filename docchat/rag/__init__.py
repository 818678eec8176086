"""RAG pipeline module."""

from docchat.rag.models import ConversationTurn, IndexingReport
from docchat.rag.pipeline import RAGPipeline

__all__ = [
    "ConversationTurn",
    "IndexingReport",
    "RAGPipeline",
]
