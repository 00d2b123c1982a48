from abc import ABC, abstractmethod

from legallyclear.llm.models import InlineImage


class BaseModelClient(ABC):
    """Contract for provider-specific multimodal model clients."""

    @abstractmethod
    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        image: InlineImage | None = None,
        json_schema: dict[str, object] | None = None,
        schema_name: str = "response",
    ) -> str:
        """Return provider response as plain text.

        When json_schema is given the provider is asked for structured output
        that conforms to it; otherwise free text is expected.

        Raises:
            ModelNetworkError: on transport or API status failures.
            EmptyModelResponseError: when the response carries no text.
        """
