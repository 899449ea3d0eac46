from dataclasses import dataclass
from enum import Enum

from finextract.extraction.models import ExtractedData


class DocumentStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (DocumentStatus.SUCCESS, DocumentStatus.ERROR)


ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.IDLE: frozenset({DocumentStatus.PROCESSING}),
    DocumentStatus.PROCESSING: frozenset({DocumentStatus.SUCCESS, DocumentStatus.ERROR}),
    DocumentStatus.SUCCESS: frozenset(),
    DocumentStatus.ERROR: frozenset(),
}


@dataclass(frozen=True)
class SourceFile:
    """An uploaded file: name, declared media type and raw bytes."""

    name: str
    media_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/")


@dataclass(frozen=True)
class DocumentEntry:
    """One uploaded document's tracked record.

    Never mutated: the registry swaps in a new instance on every transition.
    ``data`` is set only for SUCCESS, ``error_message`` only for ERROR.
    """

    id: str
    source: SourceFile
    status: DocumentStatus = DocumentStatus.IDLE
    preview: str | None = None
    data: ExtractedData | None = None
    error_message: str | None = None
