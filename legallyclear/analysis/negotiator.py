import json
from collections.abc import Sequence
from pathlib import Path

from legallyclear.analysis.base import BaseNegotiator
from legallyclear.analysis.exceptions import NegotiationFailedError
from legallyclear.analysis.models import RiskFlag
from legallyclear.analysis.prompt_loader import load_prompt
from legallyclear.llm.client_base import BaseModelClient
from legallyclear.llm.exceptions import EmptyModelResponseError, ModelClientError
from legallyclear.logging.logger import Log

NEGOTIATION_FAILED_MESSAGE = "Failed to generate negotiation text."
FALLBACK_DRAFT = "Could not generate negotiation text."


class NegotiationDrafter(BaseNegotiator):
    """Drafts a counter-offer email from a prior analysis."""

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.2,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._prompt_template = load_prompt("negotiation_prompt.txt", prompt_template_path)

    async def draft(self, summary: str, red_flags: Sequence[RiskFlag]) -> str:
        prompt = self._build_prompt(summary, red_flags)
        Log.debug(f"Negotiation prompt:\n{prompt}")
        try:
            text = await self._client.create_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt="",
                user_prompt=prompt,
            )
        except EmptyModelResponseError:
            Log.warning("Negotiation draft came back empty, using fallback text")
            return FALLBACK_DRAFT
        except ModelClientError as exc:
            Log.error(f"Negotiation generation failed: {exc}")
            raise NegotiationFailedError(NEGOTIATION_FAILED_MESSAGE) from exc

        Log.info(f"Negotiation draft generated for {len(red_flags)} red flags")
        return text or FALLBACK_DRAFT

    def _build_prompt(self, summary: str, red_flags: Sequence[RiskFlag]) -> str:
        return self._prompt_template.format(
            summary=summary,
            red_flags=json.dumps([flag.to_dict() for flag in red_flags], indent=2),
        )
