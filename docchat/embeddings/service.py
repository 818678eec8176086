"""Embedding service interface and Gemini implementation."""

from abc import ABC, abstractmethod

import httpx
from pydantic import ValidationError as PydanticValidationError

from docchat.config import GeminiSettings
from docchat.embeddings.models import EmbedContentResponse, EmbeddingResult
from docchat.exceptions import EmbeddingError, ErrorCode
from docchat.logging_config import get_logger

logger = get_logger(__name__)


class EmbeddingService(ABC):
    """Abstract base class for embedding services.

    Defines the interface for generating text embeddings.
    """

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[EmbeddingResult]:
        """Generate embeddings for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of EmbeddingResult objects, in input order.

        Raises:
            EmbeddingError: If any embedding fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name used for embeddings."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Get the embedding dimensions."""
        ...

    async def close(self) -> None:
        """Release any held resources."""


class GeminiEmbeddingService(EmbeddingService):
    """Embedding service using the Gemini embedContent endpoint.

    Issues one request per text, in input order.
    """

    def __init__(
        self,
        settings: GeminiSettings,
        dimensions: int = 768,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini embedding service.

        Args:
            settings: Gemini configuration.
            dimensions: Expected vector dimensions.
            client: HTTP client. Creates new one if not provided.
        """
        self._settings = settings
        self._dimensions = dimensions
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.embedding_model

    @property
    def dimensions(self) -> int:
        """Get embedding dimensions."""
        return self._dimensions

    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If embedding fails.
        """
        client = await self._get_client()
        return await self._embed_request(client, text, index=0)

    async def embed_batch(self, texts: list[str]) -> list[EmbeddingResult]:
        """Generate embeddings for multiple texts, one request each.

        The first failure aborts the whole call; no partial results are
        returned and nothing is retried.

        Args:
            texts: List of texts to embed.

        Returns:
            List of EmbeddingResult objects, in input order.

        Raises:
            EmbeddingError: If any request fails.
        """
        if not texts:
            return []

        client = await self._get_client()
        results: list[EmbeddingResult] = []
        for index, text in enumerate(texts):
            results.append(await self._embed_request(client, text, index=index))

        logger.debug(
            f"Embedded {len(results)} texts",
            extra={"model": self.model_name},
        )
        return results

    async def _embed_request(
        self,
        client: httpx.AsyncClient,
        text: str,
        index: int,
    ) -> EmbeddingResult:
        """Make one embedContent request.

        Args:
            client: HTTP client.
            text: Text to embed.
            index: Position of the text in the caller's batch.

        Returns:
            EmbeddingResult for the text.

        Raises:
            EmbeddingError: If the request fails or the response is malformed.
        """
        model = self._settings.embedding_model
        url = f"{self._settings.base_url}/models/{model}:embedContent"
        payload = {
            "model": f"models/{model}",
            "content": {"parts": [{"text": text}]},
        }
        headers = {"x-goog-api-key": self._settings.api_key.get_secret_value()}

        try:
            response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Embedding request failed: {e.response.status_code}",
                extra={"status": e.response.status_code, "index": index},
            )
            raise EmbeddingError(
                f"Embedding service returned {e.response.status_code}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"status_code": e.response.status_code, "index": index},
            ) from e
        except httpx.RequestError as e:
            logger.error(
                f"Embedding request error: {e!r}",
                extra={"index": index},
            )
            raise EmbeddingError(
                f"Failed to connect to embedding service: {e!r}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"index": index},
            ) from e

        try:
            parsed = EmbedContentResponse.model_validate(response.json())
        except (PydanticValidationError, ValueError) as e:
            raise EmbeddingError(
                "Invalid response from embedding service: missing embedding values",
                code=ErrorCode.EMBEDDING_PROTOCOL_ERROR,
                details={"index": index, "error": str(e)},
            ) from e

        values = parsed.embedding.values
        if len(values) != self._dimensions:
            raise EmbeddingError(
                f"Embedding has {len(values)} dimensions, expected {self._dimensions}",
                code=ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
                details={"index": index, "dimensions": len(values)},
            )

        return EmbeddingResult(
            text=text,
            embedding=values,
            model=model,
            dimensions=len(values),
        )
