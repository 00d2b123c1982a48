from typing import ClassVar

from legallyclear.config.settings import ConfigurationError, Settings
from legallyclear.llm.client_base import BaseModelClient
from legallyclear.llm.example_client_adapter import ExampleClientAdapter
from legallyclear.llm.openai_client_adapter import OpenAIClientAdapter


class ModelClientFactory:
    """Creates the configured model client adapter."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseModelClient:
        """Create a configured model client from application settings."""
        provider = settings.model_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.model_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.model_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ConfigurationError(
                    "model_base_url is required for model_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ConfigurationError(
            f"Unknown model provider '{provider}'. Choose from: {supported}"
        )

    @staticmethod
    def _resolve_api_key(provider: str, settings: Settings) -> str:
        # AsyncOpenAI needs some key; ollama ignores it.
        if provider == "ollama" and not settings.model_api_key:
            return "ollama"
        return settings.model_api_key
