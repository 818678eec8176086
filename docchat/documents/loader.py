"""Plain-text document loader."""

from pathlib import Path

from docchat.documents.models import Document
from docchat.exceptions import DocumentError, ErrorCode


class TextFileLoader:
    """Loader for plain text files."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the text file loader.

        Args:
            encoding: Text encoding to use when reading files.
        """
        self.encoding = encoding

    def load(self, source: str | Path) -> Document:
        """Load a text file as a document.

        Args:
            source: Path to the text file.

        Returns:
            Document with file content.

        Raises:
            DocumentError: If file cannot be read.
        """
        path = Path(source) if isinstance(source, str) else source

        if not path.exists():
            raise DocumentError(
                f"File not found: {path}",
                code=ErrorCode.DOCUMENT_NOT_FOUND,
                details={"path": str(path)},
            )

        if not path.is_file():
            raise DocumentError(
                f"Not a file: {path}",
                code=ErrorCode.DOCUMENT_READ_ERROR,
                details={"path": str(path)},
            )

        try:
            # newline="" keeps CRLF line endings as they are on disk.
            with path.open(encoding=self.encoding, newline="") as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise DocumentError(
                f"Failed to decode file: {path}",
                code=ErrorCode.DOCUMENT_READ_ERROR,
                details={"path": str(path), "encoding": self.encoding, "error": str(e)},
            ) from e
        except OSError as e:
            raise DocumentError(
                f"Failed to read file: {path}",
                code=ErrorCode.DOCUMENT_READ_ERROR,
                details={"path": str(path), "error": str(e)},
            ) from e

        return Document.from_text(
            content=content,
            source=str(path),
            file_name=path.name,
            file_size=path.stat().st_size,
        )
