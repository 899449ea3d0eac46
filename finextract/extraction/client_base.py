from abc import ABC, abstractmethod

from finextract.extraction.models import DocumentPart


class BaseExtractionClient(ABC):
    """Contract for provider-specific extraction AI clients."""

    @abstractmethod
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
        """Send one document plus instructions and return the raw response text.

        Raises:
            ExtractionFailure: on transport, API or empty-payload errors.
        """
