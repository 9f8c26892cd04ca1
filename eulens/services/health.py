"""Health checks for the vector index and the OpenAI models EU-Lens depends on."""

import time
from typing import Any, Dict

from eulens.core.exceptions import VectorIndexError
from eulens.services.embedding import EmbeddingService
from eulens.services.llm import LLMService
from eulens.services.vector_db import VectorDBService


async def check_qdrant(vector_db: VectorDBService) -> Dict[str, Any]:
    """
    Check that the configured collection is reachable.

    Args:
        vector_db: VectorDBService instance.

    Returns:
        Health status with the collection's point count.
    """
    start_time = time.time()
    try:
        info = await vector_db.describe()
    except VectorIndexError as e:
        return {
            "status": "unhealthy",
            "collection": vector_db.collection_name,
            "error": str(e),
        }

    return {
        "status": "healthy",
        "latency_ms": round((time.time() - start_time) * 1000, 2),
        "collection": info["collection"],
        "points_count": info["points_count"],
    }


async def check_openai(embedding_service: EmbeddingService, llm_service: LLMService) -> Dict[str, Any]:
    """
    Check that the embedding and chat models are available to the configured API key.

    Args:
        embedding_service: Embedding service whose client and model are checked.
        llm_service: LLM service whose client and model are checked.

    Returns:
        Health status naming both models.
    """
    models = {"embedding_model": embedding_service.model, "llm_model": llm_service.model}
    start_time = time.time()
    try:
        await embedding_service.client.models.retrieve(embedding_service.model)
        await llm_service.client.models.retrieve(llm_service.model)
    except Exception as e:
        return {"status": "unhealthy", "error": str(e), **models}

    return {
        "status": "healthy",
        "latency_ms": round((time.time() - start_time) * 1000, 2),
        **models,
    }
