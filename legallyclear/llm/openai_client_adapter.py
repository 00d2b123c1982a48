from typing import Any

import httpx
import openai

from legallyclear.llm.client_base import BaseModelClient
from legallyclear.llm.exceptions import EmptyModelResponseError, ModelNetworkError
from legallyclear.llm.models import InlineImage


class OpenAIClientAdapter(BaseModelClient):
    """Model client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        messages: list[dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": self._user_content(user_prompt, image)})

        extra: dict[str, Any] = {}
        if json_schema is not None:
            extra["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name,
                    "strict": True,
                    "schema": json_schema,
                },
            }

        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
                **extra,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ModelNetworkError(f"Model provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ModelNetworkError(f"Model provider API error: {exc}") from exc

        if not response.choices:
            raise EmptyModelResponseError("Model returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise EmptyModelResponseError("Model returned empty response")
        return content

    @staticmethod
    def _user_content(user_prompt: str, image: InlineImage | None) -> str | list[dict[str, Any]]:
        if image is None:
            return user_prompt
        return [
            {"type": "image_url", "image_url": {"url": image.data_url}},
            {"type": "text", "text": user_prompt},
        ]
