"""Shared builders for tests."""

import json
from dataclasses import dataclass, field

from legallyclear.ingestion.file_loader import split_base64_payload, to_data_url
from legallyclear.ingestion.models import UploadedDocument
from legallyclear.llm.client_base import BaseModelClient
from legallyclear.llm.models import InlineImage

# 1x1 transparent PNG.
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000105e0272f0000000049454e44ae426082"
)


@dataclass
class FakeUpload:
    """Minimal stand-in for FastAPI's UploadFile."""

    filename: str | None
    content_type: str | None
    content: bytes = b""
    error: Exception | None = None
    read_sizes: list[int] = field(default_factory=list)

    async def read(self, size: int = -1) -> bytes:
        self.read_sizes.append(size)
        if self.error is not None:
            raise self.error
        return self.content if size < 0 else self.content[:size]


def make_document(
    raw_bytes: bytes = PNG_BYTES,
    mime_type: str = "image/png",
    filename: str = "lease.png",
) -> UploadedDocument:
    data_url = to_data_url(raw_bytes, mime_type)
    return UploadedDocument(
        filename=filename,
        mime_type=mime_type,
        preview_data_url=data_url,
        base64_payload=split_base64_payload(data_url),
        raw_bytes=raw_bytes,
    )


def analysis_json(**overrides: object) -> str:
    data: dict[str, object] = {
        "summary": "You owe nothing now but must pay $200 at year 2",
        "redFlags": [{"risk": "Auto-renewal clause", "severity": "high"}],
        "actionItems": ["Cancel before month 11"],
        "reasoning": "Checked clause 4...",
    }
    data.update(overrides)
    return json.dumps(data)



class FakeModelClient(BaseModelClient):
    """Model client returning canned text; records every call."""

    def __init__(
        self,
        analysis: str | None = None,
        draft: str = "Dear Landlord, I would like to discuss the renewal terms.",
        draft_error: Exception | None = None,
    ) -> None:
        self.analysis = analysis if analysis is not None else analysis_json()
        self.draft = draft
        self.draft_error = draft_error
        self.calls: list[dict[str, object]] = []

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
        self.calls.append(
            {"model": model, "image": image, "json_schema": json_schema, "user_prompt": user_prompt}
        )
        if json_schema is not None:
            return self.analysis
        if self.draft_error is not None:
            raise self.draft_error
        return self.draft
