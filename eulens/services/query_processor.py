"""Query processing service for RAG queries."""

import logging
from typing import List

from eulens.core.exceptions import QueryError
from eulens.models.chat import ChatResponse, Source
from eulens.models.document import VectorMatch
from eulens.services.embedding import EmbeddingService
from eulens.services.llm import LLMService
from eulens.services.prompt_builder import build_system_prompt
from eulens.services.vector_db import VectorDBService

logger = logging.getLogger(__name__)

TOP_K = 3
RELEVANCE_THRESHOLD = 0.7
UNKNOWN_DOCUMENT = "Unknown Document"
UNKNOWN_URL = "#"


def build_context(matches: List[VectorMatch]) -> str:
    """
    Join the text of every match, in the order the index returned them.

    Args:
        matches: Similarity query results.

    Returns:
        Context string with passages separated by a blank line.
    """
    return "\n\n".join(match.metadata.get("text") or "" for match in matches)


def build_sources(matches: List[VectorMatch], threshold: float = RELEVANCE_THRESHOLD) -> List[Source]:
    """
    Turn matches into cited sources, keeping only those scoring above threshold.

    Args:
        matches: Similarity query results.
        threshold: Exclusive lower bound on the similarity score.

    Returns:
        Sources in match order.
    """
    sources = [
        Source(
            name=match.metadata.get("document") or UNKNOWN_DOCUMENT,
            url=match.metadata.get("source") or UNKNOWN_URL,
            relevance=match.score or 0,
        )
        for match in matches
    ]
    return [source for source in sources if source.relevance > threshold]


class QueryProcessor:
    """Processes RAG queries."""

    def __init__(
        self,
        vector_db: VectorDBService,
        embedding_service: EmbeddingService,
        llm_service: LLMService,
        top_k: int = TOP_K,
        relevance_threshold: float = RELEVANCE_THRESHOLD,
    ) -> None:
        """
        Initialize query processor.

        Args:
            vector_db: Vector index service.
            embedding_service: Embedding generation service.
            llm_service: LLM service.
            top_k: Number of matches retrieved per question.
            relevance_threshold: Minimum score for a match to be cited.
        """
        self.vector_db = vector_db
        self.embedding_service = embedding_service
        self.llm_service = llm_service
        self.top_k = top_k
        self.relevance_threshold = relevance_threshold

    async def answer(self, question: str) -> ChatResponse:
        """
        Answer a question from the indexed documents.

        Each question is answered on its own; no conversation history is used.

        Args:
            question: User question.

        Returns:
            Answer text with the sources above the relevance threshold.

        Raises:
            QueryError: If any step fails. The cause is chained.
        """
        try:
            query_embedding = await self.embedding_service.generate_embedding(question)
            matches = await self.vector_db.search(query_embedding, top_k=self.top_k)

            context = build_context(matches)
            sources = build_sources(matches, self.relevance_threshold)

            response = await self.llm_service.generate_response(
                build_system_prompt(context), question
            )
        except Exception as e:
            logger.exception(f"Query failed: {str(e)}")
            raise QueryError("Internal server error") from e

        logger.info(
            f"Answered query with {len(matches)} matches, {len(sources)} cited sources")
        return ChatResponse(response=response, sources=sources)
