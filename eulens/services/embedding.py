"""OpenAI embedding generation service."""

from typing import List

from openai import AsyncOpenAI

from eulens.core.config import Settings
from eulens.core.exceptions import EmbeddingError


class EmbeddingService:
    """Service for generating embeddings using OpenAI."""

    def __init__(self, settings: Settings) -> None:
        """
        Initialize the embedding service.

        Args:
            settings: Application settings.
        """
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)
        self.model = settings.embedding_model

    async def generate_embedding(self, text: str) -> List[float]:
        """
        Generate embedding for a single text.

        Args:
            text: Text string to embed.

        Returns:
            Embedding vector.

        Raises:
            EmbeddingError: If embedding generation fails.
        """
        try:
            response = await self.client.embeddings.create(
                model=self.model,
                input=text,
            )
            return response.data[0].embedding
        except Exception as e:
            raise EmbeddingError(f"Failed to generate embedding: {str(e)}") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
