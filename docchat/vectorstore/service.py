"""Vector store interface and Qdrant implementation."""

from abc import ABC, abstractmethod

from pydantic import ValidationError as PydanticValidationError
from qdrant_client import AsyncQdrantClient
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse
from qdrant_client.models import Distance, PointStruct, VectorParams

from docchat.config import QdrantSettings
from docchat.exceptions import ErrorCode, VectorStoreError
from docchat.logging_config import get_logger
from docchat.vectorstore.models import IndexedPoint, SearchResult

logger = get_logger(__name__)

HTTP_CONFLICT = 409


class VectorStore(ABC):
    """Abstract base class for vector stores.

    Defines the interface for storing and searching vectors.
    """

    @abstractmethod
    async def ensure_collection(
        self,
        name: str,
        dimensions: int,
        distance: Distance = Distance.COSINE,
    ) -> None:
        """Create a collection unless it already exists.

        Args:
            name: Collection name.
            dimensions: Vector dimensions.
            distance: Similarity metric.

        Raises:
            VectorStoreError: If creation fails for any reason other than
                the collection already existing.
        """
        ...

    @abstractmethod
    async def collection_exists(self, name: str) -> bool:
        """Check if a collection exists.

        Args:
            name: Collection name.

        Returns:
            True if collection exists.
        """
        ...

    @abstractmethod
    async def upsert(
        self,
        collection: str,
        points: list[IndexedPoint],
    ) -> int:
        """Insert or overwrite points in one bulk call.

        Args:
            collection: Collection name.
            points: Points to upsert.

        Returns:
            Number of points upserted.

        Raises:
            VectorStoreError: If upsert fails.
        """
        ...

    @abstractmethod
    async def search(
        self,
        collection: str,
        vector: list[float],
        top_k: int = 3,
    ) -> list[SearchResult]:
        """Search for the nearest points.

        Args:
            collection: Collection name.
            vector: Query vector.
            top_k: Maximum results to return.

        Returns:
            Results in descending similarity order. May be empty.

        Raises:
            VectorStoreError: If search fails.
        """
        ...

    async def close(self) -> None:
        """Release any held resources."""


class QdrantVectorStore(VectorStore):
    """Qdrant vector store implementation."""

    def __init__(
        self,
        settings: QdrantSettings,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize Qdrant vector store.

        Args:
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            self._client = AsyncQdrantClient(
                url=self._settings.host,
                api_key=self._settings.api_key.get_secret_value(),
                timeout=self._settings.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def ensure_collection(
        self,
        name: str,
        dimensions: int,
        distance: Distance = Distance.COSINE,
    ) -> None:
        """Create a Qdrant collection unless it already exists."""
        if await self.collection_exists(name):
            logger.info(f"Collection already exists: {name}")
            return

        client = await self._get_client()
        try:
            await client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(size=dimensions, distance=distance),
            )
            logger.info(f"Created collection: {name}", extra={"dimensions": dimensions})

        except UnexpectedResponse as e:
            # Created by someone else between the check and the create.
            if e.status_code == HTTP_CONFLICT:
                logger.info(f"Collection already exists: {name}")
                return
            raise VectorStoreError(
                f"Failed to create collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "status_code": e.status_code},
            ) from e
        except Exception as e:
            raise VectorStoreError(
                f"Failed to create collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def collection_exists(self, name: str) -> bool:
        """Check if collection exists."""
        client = await self._get_client()
        try:
            return await client.collection_exists(name)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to check collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": name, "error": str(e)},
            ) from e

    async def upsert(
        self,
        collection: str,
        points: list[IndexedPoint],
    ) -> int:
        """Upsert points into collection."""
        if not points:
            return 0

        client = await self._get_client()
        structs = [
            PointStruct(id=point.id, vector=point.vector, payload=point.payload)
            for point in points
        ]

        try:
            await client.upsert(
                collection_name=collection,
                points=structs,
                wait=True,
            )
        except UnexpectedResponse as e:
            raise VectorStoreError(
                f"Failed to upsert {len(structs)} points: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={
                    "collection": collection,
                    "points_count": len(structs),
                    "status_code": e.status_code,
                },
            ) from e
        except Exception as e:
            raise VectorStoreError(
                f"Failed to upsert {len(structs)} points: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={
                    "collection": collection,
                    "points_count": len(structs),
                    "error": str(e),
                },
            ) from e

        logger.info(
            f"Upserted {len(structs)} points",
            extra={"collection": collection},
        )
        return len(structs)

    async def search(
        self,
        collection: str,
        vector: list[float],
        top_k: int = 3,
    ) -> list[SearchResult]:
        """Search for similar vectors, returning payload text only."""
        client = await self._get_client()

        try:
            response = await client.query_points(
                collection_name=collection,
                query=vector,
                limit=top_k,
                with_payload=True,
                with_vectors=False,
            )
        except UnexpectedResponse as e:
            raise VectorStoreError(
                f"Failed to search: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "status_code": e.status_code},
            ) from e
        except ResponseHandlingException as e:
            # Wraps both transport failures and unparseable responses.
            if isinstance(e.source, ValueError):
                raise VectorStoreError(
                    f"Invalid search response from vector store: {e.source}",
                    code=ErrorCode.VECTOR_STORE_PROTOCOL_ERROR,
                    details={"collection": collection, "error": str(e.source)},
                ) from e
            raise VectorStoreError(
                f"Failed to reach vector store: {e.source!r}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e.source)},
            ) from e
        except PydanticValidationError as e:
            raise VectorStoreError(
                f"Invalid search response from vector store: {e}",
                code=ErrorCode.VECTOR_STORE_PROTOCOL_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e
        except Exception as e:
            raise VectorStoreError(
                f"Failed to search: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": collection, "error": str(e)},
            ) from e

        points = getattr(response, "points", None)
        if points is None:
            raise VectorStoreError(
                "Invalid search response from vector store: missing result",
                code=ErrorCode.VECTOR_STORE_PROTOCOL_ERROR,
                details={"collection": collection},
            )

        results: list[SearchResult] = []
        for point in points:
            payload = point.payload if isinstance(point.payload, dict) else {}
            text = payload.get("text")
            if not isinstance(text, str) or not text:
                continue
            results.append(
                SearchResult(
                    id=point.id,
                    score=point.score if point.score is not None else 0.0,
                    text=text,
                )
            )

        return results
