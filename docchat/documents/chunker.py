"""Fixed-width text chunking."""

from docchat.documents.models import Chunk, Document
from docchat.exceptions import ValidationError

DEFAULT_CHUNK_SIZE = 500


def chunk_text(text: str, size: int = DEFAULT_CHUNK_SIZE) -> list[str]:
    """Split text into consecutive slices of `size` characters.

    No trimming and no boundary detection: slices may cut words or
    sentences. Joining the result reproduces `text` exactly.

    Args:
        text: Text to split.
        size: Characters per slice. The last slice may be shorter.

    Returns:
        Ordered list of slices; empty for empty text.

    Raises:
        ValidationError: If size is not positive.
    """
    if size <= 0:
        raise ValidationError(
            f"Chunk size must be positive, got {size}",
            details={"size": size},
        )
    return [text[start : start + size] for start in range(0, len(text), size)]


class CharacterChunker:
    """Chunk documents into fixed-width character windows."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValidationError(
                f"Chunk size must be positive, got {chunk_size}",
                details={"size": chunk_size},
            )
        self.chunk_size = chunk_size

    def chunk(self, document: Document) -> list[Chunk]:
        """Split a document into chunks with ids starting at 1.

        Args:
            document: Document to chunk.

        Returns:
            List of chunks in document order.
        """
        return [
            Chunk(id=position, text=text)
            for position, text in enumerate(
                chunk_text(document.content, self.chunk_size), start=1
            )
        ]
