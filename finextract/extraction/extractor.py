"""AI-powered financial document extractor."""

import json
from collections.abc import Callable
from datetime import date
from pathlib import Path

from finextract.extraction.base import BaseExtractor
from finextract.extraction.client_base import BaseExtractionClient
from finextract.extraction.exceptions import ExtractionFailure
from finextract.extraction.models import DocumentPart, ExtractedData
from finextract.extraction.prompt_loader import load_json_schema, load_prompt_template
from finextract.extraction.validator import validate_and_build
from finextract.logging.logger import Log


class Extractor(BaseExtractor):
    """Extracts structured fields from a receipt, invoice or statement via an AI provider.

    Stateless between calls; safe to run concurrently for many documents.
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
        today: Callable[[], date] = date.today,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._today = today
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    async def extract(self, content: bytes, media_type: str) -> ExtractedData:
        prompt = self._build_prompt()
        Log.debug(f"Extraction prompt:\n{prompt}", media_type=media_type)

        raw_response = await self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            document=DocumentPart(data=content, media_type=media_type),
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"Extraction complete: {result.vendor_name} {result.amount} {result.currency_code}"
        )
        return result

    def _build_prompt(self) -> str:
        return self._prompt_template.format(
            today=self._today().isoformat(),
            json_schema=self._json_schema,
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
            raise ExtractionFailure(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionFailure("JSON response must be an object")
        return parsed
