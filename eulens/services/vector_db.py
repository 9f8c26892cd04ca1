"""Qdrant vector index service."""

import uuid
from typing import List, Optional

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import Distance, NearestQuery, PointStruct, VectorParams

from eulens.core.config import Settings
from eulens.core.exceptions import VectorIndexError
from eulens.models.document import IndexedVector, VectorMatch


def point_uuid(vector_id: str) -> str:
    """
    Map a vector id such as "GDPR-3" to the deterministic UUID Qdrant stores.

    Args:
        vector_id: Human-readable vector id.

    Returns:
        UUID string for the point.
    """
    namespace = uuid.UUID("00000000-0000-0000-0000-000000000000")
    return str(uuid.uuid5(namespace, vector_id))


class VectorDBService:
    """Service for interacting with the Qdrant vector index."""

    def __init__(self, settings: Settings) -> None:
        """
        Initialize the vector index service.

        Args:
            settings: Application settings.
        """
        self.client: Optional[AsyncQdrantClient] = None
        self.url = settings.qdrant_url
        self.api_key = settings.qdrant_api_key
        self.collection_name = settings.qdrant_collection_name
        self.dimensions = settings.embedding_dimensions

    async def connect(self) -> None:
        """
        Connect to Qdrant and make sure the collection exists.

        On failure the client is closed and the service is left unconnected.

        Raises:
            VectorIndexError: If Qdrant cannot be reached or the collection cannot be created.
        """
        try:
            self.client = AsyncQdrantClient(
                url=self.url,
                api_key=self.api_key,
                timeout=30,
            )
            await self._ensure_collection()
        except Exception as e:
            await self.disconnect()
            raise VectorIndexError(
                f"Failed to connect to Qdrant: {str(e)}") from e

    async def disconnect(self) -> None:
        """Disconnect from Qdrant."""
        if self.client:
            client, self.client = self.client, None
            await client.close()

    async def _ensure_collection(self) -> None:
        """Ensure the collection exists."""
        if not self.client:
            raise VectorIndexError("Client not connected")

        collections = await self.client.get_collections()
        collection_names = [col.name for col in collections.collections]

        if self.collection_name not in collection_names:
            await self.client.create_collection(
                collection_name=self.collection_name,
                vectors_config=VectorParams(
                    size=self.dimensions,
                    distance=Distance.COSINE,
                ),
            )

    async def describe(self) -> dict:
        """
        Describe the collection.

        Returns:
            Collection status, point count and vector size.
        """
        if not self.client:
            raise VectorIndexError("Client not connected")

        try:
            info = await self.client.get_collection(self.collection_name)
        except Exception as e:
            raise VectorIndexError(
                f"Failed to describe collection: {str(e)}") from e

        return {
            "collection": self.collection_name,
            "status": str(info.status),
            "points_count": info.points_count,
            "dimensions": self.dimensions,
        }

    async def upsert_vector(self, vector: IndexedVector) -> None:
        """
        Upsert one chunk vector. An existing vector with the same id is overwritten.

        Args:
            vector: Vector with its chunk metadata.

        Raises:
            VectorIndexError: If the upsert fails.
        """
        if not self.client:
            raise VectorIndexError("Client not connected")

        point = PointStruct(
            id=point_uuid(vector.id),
            vector=vector.values,
            payload=vector.metadata.to_payload(),
        )
        try:
            await self.client.upsert(collection_name=self.collection_name, points=[point])
        except Exception as e:
            raise VectorIndexError(
                f"Failed to upsert vector {vector.id}: {str(e)}") from e

    async def search(self, query_embedding: List[float], top_k: int = 3) -> List[VectorMatch]:
        """
        Search for similar chunks.

        Args:
            query_embedding: Query embedding vector.
            top_k: Number of results to return.

        Returns:
            Matches in descending similarity order, with their metadata.

        Raises:
            VectorIndexError: If the query fails.
        """
        if not self.client:
            raise VectorIndexError("Client not connected")

        try:
            results = await self.client.query_points(
                collection_name=self.collection_name,
                query=NearestQuery(nearest=query_embedding),
                limit=top_k,
                with_payload=True,
            )
        except Exception as e:
            raise VectorIndexError(
                f"Failed to query vectors: {str(e)}") from e

        matches = []
        for point in results.points:
            payload = point.payload or {}
            matches.append(
                VectorMatch(
                    id=payload.get("vectorId", str(point.id)),
                    score=point.score,
                    metadata=payload,
                )
            )

        return matches
