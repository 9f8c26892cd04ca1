"""Dependency injection for services."""

import asyncio
from typing import Optional

from eulens.core.config import Settings, get_settings
from eulens.services.chunking import ChunkingService
from eulens.services.embedding import EmbeddingService
from eulens.services.fetcher import DocumentFetcher
from eulens.services.ingestion import IngestionPipeline
from eulens.services.llm import LLMService
from eulens.services.query_processor import QueryProcessor
from eulens.services.registry import DocumentRegistry
from eulens.services.vector_db import VectorDBService


class ServiceContainer:
    """Container for service instances."""

    def __init__(self, settings: Settings) -> None:
        """
        Initialize service container.

        Args:
            settings: Application settings shared by every service.
        """
        self.settings = settings
        self.vector_db = VectorDBService(settings)
        self.embedding_service = EmbeddingService(settings)
        self.llm_service = LLMService(settings)
        self.chunking_service = ChunkingService(settings.chunk_size)
        self.fetcher = DocumentFetcher(timeout=settings.fetch_timeout_seconds)
        self.registry = DocumentRegistry(settings.registry_path)

    @property
    def query_processor(self) -> QueryProcessor:
        """Query pipeline wired to this container's clients."""
        return QueryProcessor(
            vector_db=self.vector_db,
            embedding_service=self.embedding_service,
            llm_service=self.llm_service,
            top_k=self.settings.top_k,
            relevance_threshold=self.settings.relevance_threshold,
        )

    @property
    def ingestion_pipeline(self) -> IngestionPipeline:
        """Ingestion pipeline wired to this container's clients."""
        return IngestionPipeline(
            fetcher=self.fetcher,
            chunking_service=self.chunking_service,
            embedding_service=self.embedding_service,
            vector_db=self.vector_db,
            registry=self.registry,
        )

    async def initialize(self) -> None:
        """Initialize all services."""
        await self.vector_db.connect()

    async def shutdown(self) -> None:
        """Shutdown all services."""
        await self.vector_db.disconnect()
        await self.embedding_service.close()
        await self.llm_service.close()


_services: Optional[ServiceContainer] = None
_services_lock = asyncio.Lock()


async def get_services() -> ServiceContainer:
    """
    Return the process-wide service container, creating it on first use.

    A container whose initialization fails is shut down and discarded, so
    the next call starts from scratch.

    Raises:
        ConfigurationMissing: If required settings are absent.
        VectorIndexError: If the vector index cannot be reached.
    """
    global _services
    async with _services_lock:
        if _services is None:
            container = ServiceContainer(get_settings())
            try:
                await container.initialize()
            except Exception:
                await container.shutdown()
                raise
            _services = container
    return _services


async def shutdown_services() -> None:
    """Shut down the service container if it was created."""
    global _services
    if _services is not None:
        await _services.shutdown()
        _services = None
