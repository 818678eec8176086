"""RAG pipeline data models."""

from pydantic import BaseModel, Field

from docchat.llm.models import AnswerOutcome
from docchat.retrieval.models import RetrievedContext


class IndexingReport(BaseModel):
    """Summary of one indexing run.

    Attributes:
        source: Path of the indexed document.
        collection: Collection the points were written to.
        chunk_count: Number of chunks produced.
        points_upserted: Number of points written.
    """

    source: str = Field(description="Indexed document path")
    collection: str = Field(description="Target collection")
    chunk_count: int = Field(description="Chunks produced")
    points_upserted: int = Field(description="Points written")


class ConversationTurn(BaseModel):
    """One question and its answer. Not persisted.

    Attributes:
        question: The user's question.
        context: Context retrieved for the question.
        outcome: Generated answer or generation failure.
    """

    question: str = Field(description="User question")
    context: RetrievedContext = Field(description="Retrieved context")
    outcome: AnswerOutcome = Field(description="Answer outcome")
