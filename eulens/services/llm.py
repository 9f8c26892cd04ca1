"""OpenAI chat completion service."""

from openai import AsyncOpenAI

from eulens.core.config import Settings
from eulens.core.exceptions import CompletionError


class LLMService:
    """Service for generating answers with an OpenAI chat model."""

    def __init__(self, settings: Settings) -> None:
        """
        Initialize the LLM service.

        Args:
            settings: Application settings.
        """
        self.client = AsyncOpenAI(api_key=settings.openai_api_key)
        self.model = settings.llm_model

    async def generate_response(self, system_prompt: str, question: str) -> str:
        """
        Generate an answer to a single question.

        Only the system prompt and the question are sent; earlier turns of
        the conversation are never included.

        Args:
            system_prompt: Rendered system prompt carrying the retrieved context.
            question: User question.

        Returns:
            Generated answer text.

        Raises:
            CompletionError: If the call fails or returns no content.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": question},
                ],
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise CompletionError(f"Failed to generate response: {str(e)}") from e

        if not content:
            raise CompletionError("Empty response from LLM")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
