"""RAG pipeline orchestrator."""

from pathlib import Path

from docchat.documents.chunker import CharacterChunker
from docchat.documents.loader import TextFileLoader
from docchat.embeddings.service import EmbeddingService
from docchat.llm.client import LLMClient
from docchat.llm.generator import AnswerGenerator
from docchat.logging_config import get_logger
from docchat.rag.models import ConversationTurn, IndexingReport
from docchat.retrieval.retriever import SemanticRetriever
from docchat.vectorstore.models import IndexedPoint
from docchat.vectorstore.service import VectorStore

logger = get_logger(__name__)


class RAGPipeline:
    """Orchestrates indexing and question answering.

    Startup indexes the document: chunk, ensure the collection, embed every
    chunk, upsert. Each question then retrieves context and generates an
    answer.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        llm_client: LLMClient,
        collection: str,
        dimensions: int,
        top_k: int = 3,
        loader: TextFileLoader | None = None,
        chunker: CharacterChunker | None = None,
        answer_generator: AnswerGenerator | None = None,
    ) -> None:
        """Initialize the RAG pipeline.

        Args:
            embedding_service: Embedding provider client.
            vector_store: Vector store client.
            llm_client: Generation provider client.
            collection: Collection holding the document chunks.
            dimensions: Vector dimensions of the collection.
            top_k: Chunks retrieved per question.
            loader: Document loader.
            chunker: Document chunker.
            answer_generator: Answer generator (built from llm_client if omitted).
        """
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self._llm_client = llm_client
        self._collection = collection
        self._dimensions = dimensions
        self._loader = loader or TextFileLoader()
        self._chunker = chunker or CharacterChunker()
        self._retriever = SemanticRetriever(
            embedding_service=embedding_service,
            vector_store=vector_store,
            collection=collection,
            top_k=top_k,
        )
        self._answer_generator = answer_generator or AnswerGenerator(llm_client)

    async def check_connectivity(self) -> None:
        """Verify the generation provider is reachable.

        Raises:
            GenerationError: If the provider cannot be reached.
        """
        logger.info("Testing generation service connection")
        models = await self._llm_client.list_models()
        logger.debug(f"Generation service lists {len(models)} models")

    async def index_document(self, path: str | Path) -> IndexingReport:
        """Index a document into the collection.

        Re-embeds and re-upserts every chunk on every call.

        Args:
            path: Path to the plain-text document.

        Returns:
            IndexingReport for the run.

        Raises:
            DocChatError: If any step fails. Nothing is rolled back.
        """
        document = self._loader.load(path)
        chunks = self._chunker.chunk(document)
        logger.info(f"Processing {len(chunks)} chunks", extra={"source": str(path)})

        await self._vector_store.ensure_collection(self._collection, self._dimensions)

        embeddings = await self._embedding_service.embed_batch(
            [chunk.text for chunk in chunks]
        )
        points = [
            IndexedPoint.from_chunk(chunk, result.embedding)
            for chunk, result in zip(chunks, embeddings, strict=True)
        ]
        upserted = await self._vector_store.upsert(self._collection, points)

        logger.info(
            f"{upserted} embeddings uploaded",
            extra={"collection": self._collection},
        )
        return IndexingReport(
            source=document.metadata.source,
            collection=self._collection,
            chunk_count=len(chunks),
            points_upserted=upserted,
        )

    async def startup(self, path: str | Path) -> IndexingReport:
        """Run the startup sequence: connectivity check, then indexing."""
        await self.check_connectivity()
        return await self.index_document(path)

    async def answer(self, question: str) -> ConversationTurn:
        """Answer one question.

        Args:
            question: The user's question.

        Returns:
            ConversationTurn with the retrieved context and answer outcome.

        Raises:
            RetrievalError: If embedding the question or searching fails.
                Generation failures are returned in the outcome instead.
        """
        context = await self._retriever.retrieve(question)
        outcome = await self._answer_generator.generate(question, context.text)
        return ConversationTurn(question=question, context=context, outcome=outcome)

    async def close(self) -> None:
        """Close all provider clients."""
        await self._embedding_service.close()
        await self._vector_store.close()
        await self._llm_client.close()
