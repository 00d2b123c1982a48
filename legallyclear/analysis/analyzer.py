"""AI-powered contract and bill analyzer."""

import json
from pathlib import Path

from legallyclear.analysis.base import BaseAnalyzer
from legallyclear.analysis.exceptions import AnalysisError, AnalysisFailedError
from legallyclear.analysis.models import AnalysisResult, Severity
from legallyclear.analysis.prompt_loader import load_json_schema, load_prompt
from legallyclear.analysis.validator import validate_and_build
from legallyclear.ingestion.models import UploadedDocument
from legallyclear.llm.client_base import BaseModelClient
from legallyclear.llm.exceptions import EmptyModelResponseError, ModelClientError
from legallyclear.llm.models import InlineImage
from legallyclear.logging.logger import Log

ANALYSIS_FAILED_MESSAGE = "Failed to analyze the document. Please try again."


class DocumentAnalyzer(BaseAnalyzer):
    """Sends a document image to the model and parses its structured answer."""

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.2,
        system_prompt_path: Path | None = None,
        instruction_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._system_prompt = load_prompt("analysis_system.txt", system_prompt_path)
        self._instruction = load_prompt("analysis_instruction.txt", instruction_path)
        self._json_schema = load_json_schema(json_schema_path)

    async def analyze(self, document: UploadedDocument) -> AnalysisResult:
        """Analyze one document image.

        Raises:
            AnalysisFailedError: on transport, empty, malformed or invalid answers.
        """
        try:
            raw_response = await self._call_ai(document)
            Log.debug(f"AI raw analysis response:\n{raw_response}")
            result = validate_and_build(self._parse_json(raw_response))
        except EmptyModelResponseError as exc:
            Log.error(f"Analysis of '{document.filename}' failed: No analysis generated.")
            raise AnalysisFailedError(ANALYSIS_FAILED_MESSAGE) from exc
        except (ModelClientError, AnalysisError) as exc:
            Log.error(f"Analysis of '{document.filename}' failed: {exc}")
            raise AnalysisFailedError(ANALYSIS_FAILED_MESSAGE) from exc

        Log.info(
            f"Analysis of '{document.filename}' complete: "
            f"{len(result.red_flags)} red flags "
            f"({result.count_by_severity(Severity.HIGH)} high), "
            f"{len(result.action_items)} action items"
        )
        return result

    async def _call_ai(self, document: UploadedDocument) -> str:
        return await self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=self._instruction,
            image=InlineImage(
                mime_type=document.mime_type,
                base64_payload=document.base64_payload,
            ),
            json_schema=self._json_schema,
            schema_name="document_analysis",
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise AnalysisError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise AnalysisError("JSON response must be an object")
        return parsed
