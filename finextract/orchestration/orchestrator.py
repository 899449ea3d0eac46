import asyncio
from collections.abc import Iterable
from dataclasses import dataclass

from finextract.extraction.base import BaseExtractor
from finextract.extraction.exceptions import ExtractionFailure
from finextract.logging.logger import Log
from finextract.registry.models import DocumentStatus
from finextract.registry.registry import DocumentRegistry

EXTRACTION_FAILED_MESSAGE = "Extraction failed"


@dataclass(frozen=True)
class ProcessingJob:
    doc_id: str
    content: bytes
    media_type: str


class ProcessingOrchestrator:
    """Drive each registered document to a terminal status, once, with one attempt."""

    def __init__(self, registry: DocumentRegistry, extractor: BaseExtractor) -> None:
        self._registry = registry
        self._extractor = extractor

    async def process(self, doc_id: str, content: bytes, media_type: str) -> None:
        """Mark processing, call the extractor, record success or a generic failure.

        If the entry is removed while the call is outstanding, the final update
        is a no-op inside the registry.
        """
        if self._registry.update_status(doc_id, DocumentStatus.PROCESSING) is None:
            Log.info("Skipping extraction for removed document", document_id=doc_id)
            return
        Log.info(f"Extracting {len(content)} bytes ({media_type})", document_id=doc_id)

        try:
            data = await self._extractor.extract(content, media_type)
        except ExtractionFailure as exc:
            Log.error(f"Extraction failed: {exc}", document_id=doc_id)
            self._mark_failed(doc_id)
            return
        except Exception as exc:
            Log.error(f"Extraction crashed: {exc!r}", document_id=doc_id)
            self._mark_failed(doc_id)
            return

        self._registry.update_status(doc_id, DocumentStatus.SUCCESS, data=data)
        Log.info(f"Extraction succeeded: {data.category.value}", document_id=doc_id)

    def _mark_failed(self, doc_id: str) -> None:
        self._registry.update_status(
            doc_id, DocumentStatus.ERROR, error_message=EXTRACTION_FAILED_MESSAGE
        )

    async def process_many(self, jobs: Iterable[ProcessingJob]) -> None:
        """Run several documents concurrently; completion order is unconstrained."""
        await asyncio.gather(
            *(self.process(job.doc_id, job.content, job.media_type) for job in jobs)
        )
