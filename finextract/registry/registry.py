import dataclasses
import threading
import uuid

from finextract.extraction.models import ExtractedData
from finextract.logging.logger import Log
from finextract.registry.exceptions import DocumentNotFoundError, InvalidTransitionError
from finextract.registry.models import (
    ALLOWED_TRANSITIONS,
    DocumentEntry,
    DocumentStatus,
    SourceFile,
)
from finextract.registry.preview import PreviewStore


class DocumentRegistry:
    """Ordered, newest-first collection of uploaded documents.

    All operations hold one lock, so an update for one id can never clobber a
    concurrent update for another (writes come from both the UI thread and the
    background event loop).
    """

    def __init__(self, previews: PreviewStore | None = None) -> None:
        self._previews = previews if previews is not None else PreviewStore()
        self._entries: list[DocumentEntry] = []
        self._lock = threading.Lock()

    @property
    def previews(self) -> PreviewStore:
        return self._previews

    def add(self, source: SourceFile) -> str:
        """Register a new document in IDLE status and return its id."""
        entry = DocumentEntry(
            id=str(uuid.uuid4()),
            source=source,
            preview=self._previews.create(source),
        )
        with self._lock:
            self._entries.insert(0, entry)
        Log.info(f"Registered {source.name} ({source.media_type})", document_id=entry.id)
        return entry.id

    def update_status(
        self,
        doc_id: str,
        status: DocumentStatus,
        *,
        data: ExtractedData | None = None,
        error_message: str | None = None,
    ) -> DocumentEntry | None:
        """Replace entry ``doc_id`` with one in ``status``.

        Returns the new entry, or None when the id is gone (removed while its
        extraction was in flight); the entry is never re-created.

        Raises:
            InvalidTransitionError: if the lifecycle forbids the change or the
                payload does not match the target status.
        """
        self._check_payload(status, data, error_message)
        with self._lock:
            index = self._index_of(doc_id)
            if index is None:
                Log.debug(
                    f"Ignoring {status.value} update for removed entry", document_id=doc_id
                )
                return None
            current = self._entries[index]
            if status not in ALLOWED_TRANSITIONS[current.status]:
                raise InvalidTransitionError(
                    f"Cannot move {doc_id} from {current.status.value} to {status.value}"
                )
            updated = dataclasses.replace(
                current, status=status, data=data, error_message=error_message
            )
            self._entries[index] = updated
        return updated

    def remove(self, doc_id: str) -> bool:
        """Drop entry ``doc_id`` and release its preview. False if it was not present."""
        with self._lock:
            index = self._index_of(doc_id)
            if index is None:
                return False
            removed = self._entries.pop(index)
        self._previews.release(removed.preview)
        Log.info(f"Removed {removed.source.name}", document_id=doc_id)
        return True

    def get(self, doc_id: str) -> DocumentEntry:
        with self._lock:
            index = self._index_of(doc_id)
            if index is None:
                raise DocumentNotFoundError(f"Document {doc_id} not found")
            return self._entries[index]

    def list(self) -> tuple[DocumentEntry, ...]:
        """Snapshot of all entries, newest first."""
        with self._lock:
            return tuple(self._entries)

    def clear(self) -> None:
        """Drop every entry and release all previews."""
        with self._lock:
            self._entries.clear()
        self._previews.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _index_of(self, doc_id: str) -> int | None:
        for index, entry in enumerate(self._entries):
            if entry.id == doc_id:
                return index
        return None

    @staticmethod
    def _check_payload(
        status: DocumentStatus,
        data: ExtractedData | None,
        error_message: str | None,
    ) -> None:
        if (data is not None) != (status is DocumentStatus.SUCCESS):
            raise InvalidTransitionError("Extracted data goes with success status only")
        if (error_message is not None) != (status is DocumentStatus.ERROR):
            raise InvalidTransitionError("An error message goes with error status only")
