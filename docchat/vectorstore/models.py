"""Vector store data models."""

from typing import Any

from pydantic import BaseModel, Field

from docchat.documents.models import Chunk


class IndexedPoint(BaseModel):
    """A point to store in the vector database.

    Attributes:
        id: Unique point identifier within the collection.
        vector: The embedding vector.
        payload: Stored metadata; always carries the chunk `text`.
    """

    id: int = Field(description="Unique point identifier")
    vector: list[float] = Field(description="Embedding vector")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Metadata payload",
    )

    @classmethod
    def from_chunk(cls, chunk: Chunk, vector: list[float]) -> "IndexedPoint":
        """Build the point for an embedded chunk."""
        return cls(id=chunk.id, vector=vector, payload={"text": chunk.text})


class SearchResult(BaseModel):
    """Result from a vector similarity search.

    Attributes:
        id: Point identifier.
        score: Similarity score (higher is more similar).
        text: Stored chunk text.
    """

    id: int | str = Field(description="Point identifier")
    score: float = Field(description="Similarity score")
    text: str = Field(description="Stored chunk text")
