"""Retrieval data models."""

from pydantic import BaseModel, Field

from docchat.vectorstore.models import SearchResult

CONTEXT_SEPARATOR = "\n\n---\n\n"


class RetrievedContext(BaseModel):
    """Chunks retrieved for a query, most similar first.

    Attributes:
        query: The query the chunks were retrieved for.
        results: Search results in descending similarity order.
    """

    query: str = Field(description="Query text")
    results: list[SearchResult] = Field(
        default_factory=list,
        description="Search results, most similar first",
    )

    @property
    def texts(self) -> list[str]:
        return [result.text for result in self.results]

    @property
    def text(self) -> str:
        """Result texts joined into a single context string."""
        return CONTEXT_SEPARATOR.join(self.texts)
