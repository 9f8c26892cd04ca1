"""Document models for the RAG system."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentChunk(BaseModel):
    """Chunk model representing a fragment of a source document."""

    model_config = ConfigDict(frozen=True)

    text: str
    source_url: str
    document_name: str
    chunk_index: int = Field(ge=0)
    total_chunks: int = Field(ge=1)

    @property
    def vector_id(self) -> str:
        """Identifier of the vector holding this chunk."""
        return f"{self.document_name}-{self.chunk_index}"

    def to_payload(self) -> dict:
        """
        Convert the chunk into vector index metadata.

        Returns:
            Payload dictionary stored alongside the vector.
        """
        return {
            "vectorId": self.vector_id,
            "text": self.text,
            "source": self.source_url,
            "document": self.document_name,
            "chunkIndex": self.chunk_index,
            "totalChunks": self.total_chunks,
        }


class IndexedVector(BaseModel):
    """A chunk embedding ready to be upserted into the vector index."""

    id: str
    values: List[float]
    metadata: DocumentChunk

    @classmethod
    def from_chunk(cls, chunk: DocumentChunk, values: List[float]) -> "IndexedVector":
        """Build an indexed vector whose id is derived from the chunk."""
        return cls(id=chunk.vector_id, values=values, metadata=chunk)


class VectorMatch(BaseModel):
    """A single similarity query result."""

    id: str
    score: Optional[float] = None
    metadata: dict = Field(default_factory=dict)


class DocumentRegistryEntry(BaseModel):
    """Bookkeeping record for an ingested document, keyed by url."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    name: str
    added_at: datetime
    last_updated: datetime


class IngestionReport(BaseModel):
    """Outcome of ingesting a single document."""

    name: str
    url: str
    total_chunks: int = 0
    upserted: List[int] = Field(default_factory=list)
    failed: List[int] = Field(default_factory=list)
    registry_entry: Optional[DocumentRegistryEntry] = None
