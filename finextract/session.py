import threading
from collections.abc import Iterable
from concurrent.futures import Future

from finextract.aggregation.stats import AggregateStats, aggregate
from finextract.config.settings import Settings
from finextract.export.csv_exporter import export_csv
from finextract.extraction.base import BaseExtractor
from finextract.extraction.factory import ExtractorFactory
from finextract.logging.logger import Log
from finextract.orchestration.background_loop import BackgroundLoop
from finextract.orchestration.orchestrator import ProcessingOrchestrator
from finextract.registry.models import DocumentEntry, DocumentStatus, SourceFile
from finextract.registry.preview import PreviewStore
from finextract.registry.registry import DocumentRegistry


class ExtractionSession:
    """State for one user session: the registry plus the machinery that fills it.

    Everything the UI does goes through here; nothing is kept in module globals.
    """

    def __init__(
        self,
        registry: DocumentRegistry,
        orchestrator: ProcessingOrchestrator,
        loop: BackgroundLoop,
    ) -> None:
        self._registry = registry
        self._orchestrator = orchestrator
        self._loop = loop
        self._futures: dict[str, Future[None]] = {}
        self._futures_lock = threading.Lock()

    @property
    def registry(self) -> DocumentRegistry:
        return self._registry

    def add_files(self, sources: Iterable[SourceFile]) -> list[str]:
        """Register every file, then start one extraction per file.

        Returns ids in display order (newest first). If the background loop
        refuses work, entries not yet submitted are removed again so none is
        left idle forever, and the error is re-raised.
        """
        added = [(self._registry.add(source), source) for source in sources]
        for index, (doc_id, source) in enumerate(added):
            try:
                future = self._loop.submit(
                    self._orchestrator.process(doc_id, source.content, source.media_type)
                )
            except RuntimeError:
                for unsubmitted_id, _ in added[index:]:
                    self._registry.remove(unsubmitted_id)
                Log.error(f"Could not start {len(added) - index} extraction(s); rolled back")
                raise
            with self._futures_lock:
                self._futures[doc_id] = future
            future.add_done_callback(lambda f, doc_id=doc_id: self._on_done(doc_id, f))
        return [doc_id for doc_id, _ in reversed(added)]

    def remove(self, doc_id: str) -> bool:
        """Remove a document; an extraction in flight keeps running but its result is dropped."""
        return self._registry.remove(doc_id)

    def entries(self) -> tuple[DocumentEntry, ...]:
        return self._registry.list()

    def stats(self) -> AggregateStats:
        return aggregate(self._registry.list())

    def export_csv(self) -> str:
        return export_csv(self._registry.list())

    def has_pending(self) -> bool:
        return any(not entry.status.is_terminal for entry in self._registry.list())

    def has_successful(self) -> bool:
        return any(entry.status is DocumentStatus.SUCCESS for entry in self._registry.list())

    def wait(self, timeout: float | None = None) -> None:
        """Block until every submitted extraction has finished."""
        with self._futures_lock:
            pending = list(self._futures.values())
        for future in pending:
            future.result(timeout)

    def close(self) -> None:
        self._loop.stop()
        self._registry.clear()

    def _on_done(self, doc_id: str, future: "Future[None]") -> None:
        with self._futures_lock:
            self._futures.pop(doc_id, None)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            Log.error(f"Orchestration crashed: {exc!r}", document_id=doc_id)


def build_session(
    settings: Settings,
    extractor: BaseExtractor | None = None,
) -> ExtractionSession:
    """Build a session with all required collaborators."""
    if extractor is None:
        extractor = ExtractorFactory.create(settings)
    registry = DocumentRegistry(PreviewStore(max_size_px=settings.preview_max_size_px))
    orchestrator = ProcessingOrchestrator(registry=registry, extractor=extractor)
    return ExtractionSession(registry=registry, orchestrator=orchestrator, loop=BackgroundLoop())
