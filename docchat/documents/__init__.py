"""Document loading and chunking module."""

from docchat.documents.chunker import CharacterChunker, chunk_text
from docchat.documents.loader import TextFileLoader
from docchat.documents.models import Chunk, Document, DocumentMetadata

__all__ = [
    "CharacterChunker",
    "Chunk",
    "Document",
    "DocumentMetadata",
    "TextFileLoader",
    "chunk_text",
]
