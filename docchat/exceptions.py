"""Application exception hierarchy.

All custom exceptions inherit from DocChatError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "RAG-1000"
    CONFIGURATION_ERROR = "RAG-1001"
    VALIDATION_ERROR = "RAG-1002"

    # Document errors (2xxx)
    DOCUMENT_NOT_FOUND = "RAG-2000"
    DOCUMENT_READ_ERROR = "RAG-2001"

    # Embedding errors (3xxx)
    EMBEDDING_SERVICE_ERROR = "RAG-3000"
    EMBEDDING_PROTOCOL_ERROR = "RAG-3001"
    EMBEDDING_DIMENSION_MISMATCH = "RAG-3002"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "RAG-4000"
    VECTOR_STORE_PROTOCOL_ERROR = "RAG-4001"

    # Generation errors (5xxx)
    GENERATION_SERVICE_ERROR = "RAG-5000"
    GENERATION_TIMEOUT = "RAG-5001"
    GENERATION_RATE_LIMIT = "RAG-5002"
    GENERATION_PROTOCOL_ERROR = "RAG-5003"

    # Retrieval errors (6xxx)
    RETRIEVAL_ERROR = "RAG-6000"


# Malformed or unexpected responses from a provider.
PROTOCOL_ERROR_CODES = frozenset(
    {
        ErrorCode.EMBEDDING_PROTOCOL_ERROR,
        ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
        ErrorCode.VECTOR_STORE_PROTOCOL_ERROR,
        ErrorCode.GENERATION_PROTOCOL_ERROR,
    }
)


class DocChatError(Exception):
    """Base exception for all docchat errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def is_protocol_error(self) -> bool:
        """Whether the provider answered with a malformed response."""
        return self.code in PROTOCOL_ERROR_CODES


class ConfigurationError(DocChatError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(DocChatError):
    """Input validation error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class DocumentError(DocChatError):
    """Document loading error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.DOCUMENT_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmbeddingError(DocChatError):
    """Embedding service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class VectorStoreError(DocChatError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class GenerationError(DocChatError):
    """Answer generation service error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GENERATION_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class RetrievalError(DocChatError):
    """Retrieval operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RETRIEVAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
