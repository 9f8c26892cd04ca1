"""Shared fixtures and in-memory stand-ins for the external providers."""

from typing import Iterable, List, Optional

import pytest

from eulens.core.config import Settings
from eulens.core.exceptions import (
    CompletionError,
    EmbeddingError,
    FetchError,
    VectorIndexError,
)
from eulens.models.document import IndexedVector, VectorMatch
from eulens.services.chunking import ChunkingService
from eulens.services.ingestion import IngestionPipeline
from eulens.services.registry import DocumentRegistry


class FakeEmbeddingService:
    """Returns a tiny deterministic vector; fails on the given 1-based call numbers."""

    def __init__(self, fail_on_calls: Iterable[int] = ()) -> None:
        self.calls: List[str] = []
        self.fail_on_calls = set(fail_on_calls)

    async def generate_embedding(self, text: str) -> List[float]:
        self.calls.append(text)
        if len(self.calls) in self.fail_on_calls:
            raise EmbeddingError("Failed to generate embedding: provider unavailable")
        return [float(len(text)), 1.0, 0.0]


class FakeVectorDB:
    """Keeps upserted vectors in a dict and serves canned matches."""

    def __init__(self, matches: Optional[List[VectorMatch]] = None, fail_ids: Iterable[str] = ()) -> None:
        self.vectors = {}
        self.matches = matches or []
        self.fail_ids = set(fail_ids)
        self.queries = []

    async def upsert_vector(self, vector: IndexedVector) -> None:
        if vector.id in self.fail_ids:
            raise VectorIndexError(f"Failed to upsert vector {vector.id}: timeout")
        self.vectors[vector.id] = vector

    async def search(self, query_embedding: List[float], top_k: int = 3) -> List[VectorMatch]:
        self.queries.append((query_embedding, top_k))
        return self.matches[:top_k]


class FailingVectorDB(FakeVectorDB):
    async def search(self, query_embedding: List[float], top_k: int = 3) -> List[VectorMatch]:
        raise VectorIndexError("Failed to query vectors: connection refused")


class FakeLLMService:
    """Records prompts and returns a fixed answer, or raises CompletionError."""

    def __init__(self, response: str = "GDPR is the General Data Protection Regulation.", fail: bool = False) -> None:
        self.response = response
        self.fail = fail
        self.calls = []

    async def generate_response(self, system_prompt: str, question: str) -> str:
        self.calls.append({"system_prompt": system_prompt, "question": question})
        if self.fail:
            raise CompletionError("Failed to generate response: rate limited")
        return self.response


class FakeFetcher:
    def __init__(self, content: str = "", unreachable: bool = False) -> None:
        self.content = content
        self.unreachable = unreachable
        self.urls = []

    async def fetch(self, url: str) -> str:
        self.urls.append(url)
        if self.unreachable:
            raise FetchError(f"Failed to fetch document from {url}: connection refused")
        return self.content


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        registry_path=str(tmp_path / "data" / "document-registry.json"),
    )


@pytest.fixture
def registry(tmp_path) -> DocumentRegistry:
    return DocumentRegistry(str(tmp_path / "data" / "document-registry.json"))


@pytest.fixture
def make_pipeline(registry):
    def _make(
        content: str,
        chunk_size: int = 1000,
        embedding_service: Optional[FakeEmbeddingService] = None,
        vector_db: Optional[FakeVectorDB] = None,
        unreachable: bool = False,
    ) -> IngestionPipeline:
        return IngestionPipeline(
            fetcher=FakeFetcher(content, unreachable=unreachable),
            chunking_service=ChunkingService(chunk_size),
            embedding_service=embedding_service or FakeEmbeddingService(),
            vector_db=vector_db if vector_db is not None else FakeVectorDB(),
            registry=registry,
        )

    return _make
