import base64
from typing import Any

import httpx
import openai

from finextract.extraction.client_base import BaseExtractionClient
from finextract.extraction.exceptions import ExtractionFailure
from finextract.extraction.models import DocumentPart


def document_content_part(document: DocumentPart) -> dict[str, Any]:
    """Encode a document as a chat content part: PDFs as files, images as data URIs."""
    encoded = base64.b64encode(document.data).decode("ascii")
    data_uri = f"data:{document.media_type};base64,{encoded}"
    if document.is_pdf:
        return {
            "type": "file",
            "file": {"filename": "document.pdf", "file_data": data_uri},
        }
    return {"type": "image_url", "image_url": {"url": data_uri}}


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client built on the OpenAI-compatible async chat API.

    Makes exactly one request per call. The SDK's own retries are disabled.
    """

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
            max_retries=0,
        )

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        document: DocumentPart,
        json_schema: dict[str, object],
    ) -> str:
        messages: list[dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append(
            {
                "role": "user",
                "content": [
                    document_content_part(document),
                    {"type": "text", "text": user_prompt},
                ],
            }
        )
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "extracted_financial_data",
                        "strict": False,
                        "schema": json_schema,
                    },
                },
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionFailure(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionFailure(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionFailure("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ExtractionFailure("AI returned empty response")
        return content
