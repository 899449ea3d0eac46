from abc import ABC, abstractmethod

from finextract.extraction.models import ExtractedData


class BaseExtractor(ABC):
    """Contract for the remote extraction client seen by the orchestrator."""

    @abstractmethod
    async def extract(self, content: bytes, media_type: str) -> ExtractedData:
        """Turn raw document bytes into structured financial fields.

        Args:
            content: Raw file content.
            media_type: Declared media type, an image type or application/pdf.

        Returns:
            ExtractedData with every field populated.

        Raises:
            ExtractionFailure: on any failure, whatever the cause.
        """
