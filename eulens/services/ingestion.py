"""Ingestion pipeline: fetch, chunk, embed and index a source document."""

import logging
import time

from eulens.core.exceptions import EmbeddingError, VectorIndexError
from eulens.models.document import IndexedVector, IngestionReport
from eulens.monitoring.metrics import (
    failed_chunks_total,
    ingested_chunks_total,
    ingestion_duration_seconds,
)
from eulens.services.chunking import ChunkingService
from eulens.services.embedding import EmbeddingService
from eulens.services.fetcher import DocumentFetcher
from eulens.services.registry import DocumentRegistry
from eulens.services.vector_db import VectorDBService

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Ingests documents into the vector index one chunk at a time."""

    def __init__(
        self,
        fetcher: DocumentFetcher,
        chunking_service: ChunkingService,
        embedding_service: EmbeddingService,
        vector_db: VectorDBService,
        registry: DocumentRegistry,
    ) -> None:
        """
        Initialize the ingestion pipeline.

        Args:
            fetcher: Source document fetcher.
            chunking_service: Document chunking service.
            embedding_service: Embedding generation service.
            vector_db: Vector index service.
            registry: Registry of ingested documents.
        """
        self.fetcher = fetcher
        self.chunking_service = chunking_service
        self.embedding_service = embedding_service
        self.vector_db = vector_db
        self.registry = registry

    async def ingest(self, url: str, name: str, force: bool = False) -> IngestionReport:
        """
        Ingest the document at url under the given name.

        A chunk whose embedding or upsert fails is logged and skipped; the
        remaining chunks are still processed and the registry is updated.
        The document is always re-ingested, whether or not force is set.

        Args:
            url: Document URL.
            name: Document name, used as the vector id prefix.
            force: Accepted for CLI compatibility.

        Returns:
            Report of upserted and skipped chunk indexes.

        Raises:
            FetchError: If the document cannot be fetched. Nothing is indexed.
        """
        logger.info(f"Starting ingestion of document: {name}")
        if force:
            logger.info("Force flag set; documents are always re-ingested")
        start_time = time.time()

        content = await self.fetcher.fetch(url)

        chunks = self.chunking_service.chunk_document(content, name, url)
        logger.info(f"Created {len(chunks)} chunks from document")
        report = IngestionReport(name=name, url=url, total_chunks=len(chunks))

        for chunk in chunks:
            logger.info(
                f"Processing chunk {chunk.chunk_index + 1}/{chunk.total_chunks}")
            try:
                embedding = await self.embedding_service.generate_embedding(chunk.text)
                await self.vector_db.upsert_vector(IndexedVector.from_chunk(chunk, embedding))
            except (EmbeddingError, VectorIndexError) as e:
                logger.error(f"Error processing chunk {chunk.chunk_index}: {str(e)}")
                failed_chunks_total.inc()
                report.failed.append(chunk.chunk_index)
                continue

            ingested_chunks_total.inc()
            report.upserted.append(chunk.chunk_index)

        report.registry_entry = self.registry.upsert(url, name)
        ingestion_duration_seconds.observe(time.time() - start_time)

        logger.info(
            f"Processed document {name}: {len(report.upserted)}/{report.total_chunks} chunks indexed "
            f"in {time.time() - start_time:.2f}s"
        )
        return report
