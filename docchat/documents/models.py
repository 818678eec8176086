"""Document data models."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentMetadata(BaseModel):
    """Metadata associated with a document.

    Attributes:
        source: Original source path.
        created_at: When the document was loaded.
        extra: Additional metadata fields (file name, size).
    """

    source: str = Field(description="Original source path")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the document was loaded",
    )
    extra: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata fields",
    )


class Document(BaseModel):
    """A document with content and metadata.

    Attributes:
        content: The text content of the document.
        metadata: Associated metadata.
    """

    content: str = Field(description="Text content of the document")
    metadata: DocumentMetadata = Field(description="Document metadata")

    @classmethod
    def from_text(cls, content: str, source: str, **extra: Any) -> "Document":
        """Create a document from text content.

        Args:
            content: The text content.
            source: Source identifier.
            **extra: Additional metadata.

        Returns:
            New Document instance.
        """
        metadata = DocumentMetadata(source=source, extra=extra)
        return cls(content=content, metadata=metadata)


class Chunk(BaseModel):
    """A fixed-width slice of a document.

    Attributes:
        id: 1-based position of the chunk in the chunking sequence.
        text: The chunk text, untrimmed.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, description="1-based position in the sequence")
    text: str = Field(description="Chunk text")
