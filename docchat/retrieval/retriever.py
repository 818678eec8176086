"""Semantic retriever over the indexed document."""

from docchat.embeddings.service import EmbeddingService
from docchat.exceptions import (
    EmbeddingError,
    ErrorCode,
    RetrievalError,
    VectorStoreError,
)
from docchat.logging_config import get_logger
from docchat.retrieval.models import RetrievedContext
from docchat.vectorstore.service import VectorStore

logger = get_logger(__name__)


class SemanticRetriever:
    """Semantic search retriever using embeddings and vector store.

    Embeds the query and finds similar vectors in the store.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        collection: str,
        top_k: int = 3,
    ) -> None:
        """Initialize the semantic retriever.

        Args:
            embedding_service: Service for generating embeddings.
            vector_store: Vector database for similarity search.
            collection: Name of the collection to search.
            top_k: Number of chunks to retrieve per query.
        """
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self._collection = collection
        self._top_k = top_k

    async def retrieve(self, query: str) -> RetrievedContext:
        """Retrieve the chunks most similar to a query.

        Args:
            query: The search query.

        Returns:
            Retrieved context; empty when nothing matches.

        Raises:
            RetrievalError: If embedding the query or searching fails.
        """
        if not query.strip():
            return RetrievedContext(query=query)

        try:
            embedding_result = await self._embedding_service.embed(query)
            search_results = await self._vector_store.search(
                collection=self._collection,
                vector=embedding_result.embedding,
                top_k=self._top_k,
            )
        except (EmbeddingError, VectorStoreError) as e:
            logger.error(
                f"Retrieval failed: {e.message}",
                extra={"error_code": e.code.value},
            )
            raise RetrievalError(
                f"Failed to retrieve context: {e.message}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"query": query[:100], "cause": e.code.value},
            ) from e

        logger.debug(
            f"Retrieved {len(search_results)} chunks for query",
            extra={"query_length": len(query), "top_k": self._top_k},
        )
        return RetrievedContext(query=query, results=search_results)
