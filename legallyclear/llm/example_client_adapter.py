"""Example model client adapter.

Use this module for local development without credentials, and as a reference
when implementing new provider adapters. Implement BaseModelClient and register
the provider in ModelClientFactory.
"""

import json
from typing import ClassVar

from legallyclear.llm.client_base import BaseModelClient
from legallyclear.llm.models import InlineImage


class ExampleClientAdapter(BaseModelClient):
    """Example adapter that returns fixed analysis JSON or a fixed draft.

    No network calls. Structured requests get DEFAULT_ANALYSIS, free-text
    requests get DEFAULT_DRAFT.
    """

    DEFAULT_ANALYSIS: ClassVar[dict[str, object]] = {
        "summary": (
            "This is a one-year phone contract. You pay every month and "
            "it renews by itself unless you cancel."
        ),
        "redFlags": [
            {"risk": "Automatic renewal without reminder", "severity": "high"},
            {"risk": "Early termination fee", "severity": "medium"},
        ],
        "actionItems": ["Set a reminder to cancel before the renewal date"],
        "reasoning": (
            "Scanning the header... a service agreement. "
            "Checking Section 4... found an auto-renewal clause."
        ),
    }

    DEFAULT_DRAFT: ClassVar[str] = (
        "Dear Sir or Madam,\n\n"
        "Before signing, I would like to request that the automatic renewal "
        "clause be removed and the early termination fee be waived.\n\n"
        "Kind regards"
    )

    def __init__(self) -> None:
        pass

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
        _ = model, temperature, system_prompt, user_prompt, image, schema_name
        if json_schema is not None:
            return json.dumps(self.DEFAULT_ANALYSIS)
        return self.DEFAULT_DRAFT
