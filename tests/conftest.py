"""Pytest configuration and shared fixtures."""

import math

import pytest
from qdrant_client.models import Distance

from docchat.config import GeminiSettings, PipelineSettings, QdrantSettings, Settings
from docchat.embeddings.models import EmbeddingResult
from docchat.embeddings.service import EmbeddingService
from docchat.exceptions import GenerationError
from docchat.llm.client import LLMClient
from docchat.llm.models import GenerationResult, Message
from docchat.vectorstore.models import IndexedPoint, SearchResult
from docchat.vectorstore.service import VectorStore


class FakeEmbeddingService(EmbeddingService):
    """Deterministic embeddings computed from the text itself."""

    def __init__(self, dimensions: int = 4) -> None:
        self.calls: list[str] = []
        self._dimensions = dimensions

    @property
    def model_name(self) -> str:
        return "fake-embedding"

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def vector_for(self, text: str) -> list[float]:
        codes = [ord(c) for c in text] or [0]
        base = [1.0, float(len(text)), float(sum(codes) % 101), float(codes[0])]
        return (base * self._dimensions)[: self._dimensions]

    async def embed(self, text: str) -> EmbeddingResult:
        self.calls.append(text)
        vector = self.vector_for(text)
        return EmbeddingResult(
            text=text,
            embedding=vector,
            model=self.model_name,
            dimensions=len(vector),
        )

    async def embed_batch(self, texts: list[str]) -> list[EmbeddingResult]:
        return [await self.embed(text) for text in texts]


class InMemoryVectorStore(VectorStore):
    """Exact cosine-similarity search over points kept in a dict."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[int, IndexedPoint]] = {}
        self.dimensions: dict[str, int] = {}
        self.search_calls = 0
        self.closed = False

    async def ensure_collection(
        self,
        name: str,
        dimensions: int,
        distance: Distance = Distance.COSINE,
    ) -> None:
        if name not in self.collections:
            self.collections[name] = {}
            self.dimensions[name] = dimensions

    async def collection_exists(self, name: str) -> bool:
        return name in self.collections

    async def upsert(self, collection: str, points: list[IndexedPoint]) -> int:
        for point in points:
            self.collections[collection][point.id] = point
        return len(points)

    async def search(
        self,
        collection: str,
        vector: list[float],
        top_k: int = 3,
    ) -> list[SearchResult]:
        self.search_calls += 1
        scored = [
            SearchResult(
                id=point.id,
                score=_cosine(vector, point.vector),
                text=point.payload["text"],
            )
            for point in self.collections.get(collection, {}).values()
        ]
        scored.sort(key=lambda result: result.score, reverse=True)
        return scored[:top_k]

    async def close(self) -> None:
        self.closed = True


class FakeLLMClient(LLMClient):
    """Echoes a fixed answer and records prompts; can be told to fail."""

    def __init__(self, answer: str = "It is about letters.") -> None:
        self.answer = answer
        self.failure: GenerationError | None = None
        self.prompts: list[list[Message]] = []
        self.list_calls = 0

    @property
    def model_name(self) -> str:
        return "fake-llm"

    async def generate(
        self,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> GenerationResult:
        self.prompts.append(messages)
        if self.failure is not None:
            raise self.failure
        return GenerationResult(content=self.answer, model=self.model_name)

    async def list_models(self) -> list[str]:
        self.list_calls += 1
        return ["models/fake-llm"]


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


@pytest.fixture
def settings() -> Settings:
    """Fully specified settings that ignore the process environment."""
    return Settings(
        gemini=GeminiSettings(api_key="gemini-test-key"),
        qdrant=QdrantSettings(
            host="http://qdrant.test:6333",
            api_key="qdrant-test-key",
            collection_name="test_docs",
            dimensions=4,
        ),
        pipeline=PipelineSettings(document_path="text.txt", chunk_size=4, top_k=3),
    )


@pytest.fixture
def embedding_service() -> FakeEmbeddingService:
    return FakeEmbeddingService()


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def llm_client() -> FakeLLMClient:
    return FakeLLMClient()
