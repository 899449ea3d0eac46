from pathlib import Path

from finextract.extraction.exceptions import ExtractionFailure

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the extraction instruction template.

    Args:
        path: Path to the template file.
              Defaults to the bundled extraction_prompt.txt.

    Returns:
        The raw template string with ``{today}`` and ``{json_schema}`` placeholders.

    Raises:
        ExtractionFailure: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionFailure(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the output JSON schema, defaulting to the bundled extraction_schema.json."""
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionFailure(f"Failed to load JSON schema: {exc}") from exc
