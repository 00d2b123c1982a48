import json
from pathlib import Path

from legallyclear.analysis.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(name: str, path: Path | None = None) -> str:
    """Load a prompt text file.

    Args:
        name: File name inside the bundled prompts directory.
        path: Explicit path that overrides the bundled file.

    Returns:
        The raw prompt text, stripped of surrounding whitespace.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt '{name}': {exc}") from exc


def load_json_schema(path: Path | None = None) -> dict[str, object]:
    """Load and parse the analysis output schema.

    Raises:
        PromptLoadError: if the file cannot be read or is not a JSON object.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_schema.json"
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load JSON schema: {exc}") from exc
    try:
        schema = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PromptLoadError(f"Invalid JSON schema in {path}: {exc}") from exc
    if not isinstance(schema, dict):
        raise PromptLoadError(f"JSON schema in {path} must be an object")
    return schema
