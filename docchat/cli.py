"""Interactive terminal chat over the indexed document.

Usage:
    docchat            (or: python -m docchat)

Configuration comes from the environment or a local .env file; see
docchat.config. Exits 0 after "exit", non-zero if startup fails.
"""

import asyncio
import sys
from collections.abc import Callable

from docchat.config import Environment, Settings, get_settings
from docchat.documents.chunker import CharacterChunker
from docchat.embeddings.service import GeminiEmbeddingService
from docchat.exceptions import ConfigurationError, DocChatError
from docchat.llm.client import GeminiClient
from docchat.llm.generator import FALLBACK_ANSWER
from docchat.logging_config import get_logger, setup_logging
from docchat.rag.pipeline import RAGPipeline
from docchat.vectorstore.service import QdrantVectorStore

logger = get_logger(__name__)

PROMPT = "You: "
EXIT_COMMAND = "exit"
ASSISTANT_LABEL = "Gemini"
EXIT_INTERRUPTED = 130


class ChatSession:
    """Line-oriented question/answer loop.

    One question is answered at a time. Blank lines re-prompt, "exit" (any
    case) or end of input ends the session. Retrieval errors are reported
    and the loop continues.
    """

    def __init__(
        self,
        pipeline: RAGPipeline,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._pipeline = pipeline
        self._read_line = read_line
        self._write = write

    async def run(self) -> int:
        """Run the loop until the user leaves.

        Returns:
            Process exit code (always 0).
        """
        self._write(
            f"You can now chat with your document. Type '{EXIT_COMMAND}' to quit."
        )

        while True:
            try:
                line = self._read_line(PROMPT)
            except EOFError:
                break

            question = line.strip()
            if not question:
                continue
            if question.lower() == EXIT_COMMAND:
                break

            await self._answer(question)

        self._write("Goodbye!")
        return 0

    async def _answer(self, question: str) -> None:
        try:
            turn = await self._pipeline.answer(question)
        except DocChatError as e:
            self._write(f"Error: {e.message}")
            return

        self._write(f"{ASSISTANT_LABEL}: {turn.outcome.display_text(FALLBACK_ANSWER)}")


def build_pipeline(settings: Settings) -> RAGPipeline:
    """Wire the provider clients from settings."""
    return RAGPipeline(
        embedding_service=GeminiEmbeddingService(
            settings=settings.gemini,
            dimensions=settings.qdrant.dimensions,
        ),
        vector_store=QdrantVectorStore(settings=settings.qdrant),
        llm_client=GeminiClient(settings=settings.gemini),
        collection=settings.qdrant.collection_name,
        dimensions=settings.qdrant.dimensions,
        top_k=settings.pipeline.top_k,
        chunker=CharacterChunker(settings.pipeline.chunk_size),
    )


async def run(
    settings: Settings | None = None,
    session_factory: Callable[[RAGPipeline], ChatSession] = ChatSession,
) -> int:
    """Index the document, then chat until the user exits.

    Args:
        settings: Settings to use; loaded from the environment if omitted.
        session_factory: Builds the chat session for the pipeline.

    Returns:
        Process exit code.
    """
    if settings is None:
        try:
            settings = get_settings()
        except ConfigurationError as e:
            setup_logging()
            logger.error(e.message, extra={"error_code": e.code.value})
            return 1

    setup_logging(
        level=settings.log_level,
        json_output=settings.environment != Environment.DEVELOPMENT,
    )

    pipeline = build_pipeline(settings)
    try:
        try:
            await pipeline.startup(settings.pipeline.document_path)
        except DocChatError as e:
            logger.error(
                f"Fatal error: {e.message}",
                extra={"error_code": e.code.value, "details": e.details},
            )
            return 1

        return await session_factory(pipeline).run()
    finally:
        await pipeline.close()


def main() -> None:
    """Main entry point."""
    try:
        exit_code = asyncio.run(run())
    except KeyboardInterrupt:
        exit_code = EXIT_INTERRUPTED
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
