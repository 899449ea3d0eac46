import mimetypes
from collections.abc import Iterable
from typing import Protocol

from finextract.logging.logger import Log
from finextract.registry.models import SourceFile

ACCEPTED_EXTENSIONS = ["pdf", "png", "jpg", "jpeg", "webp", "gif"]


class UploadedFileLike(Protocol):
    name: str
    type: str | None

    def getvalue(self) -> bytes: ...


def resolve_media_type(name: str, declared: str | None) -> str:
    """Prefer the browser-declared type, fall back to guessing from the file name."""
    if declared:
        return declared
    guessed, _ = mimetypes.guess_type(name)
    return guessed or "application/octet-stream"


def is_accepted(media_type: str) -> bool:
    return media_type.startswith("image/") or media_type == "application/pdf"


def accepted_sources(uploaded_files: Iterable[UploadedFileLike]) -> list[SourceFile]:
    """Turn uploaded files into SourceFiles, dropping anything but images and PDFs."""
    sources: list[SourceFile] = []
    for uploaded in uploaded_files:
        media_type = resolve_media_type(uploaded.name, uploaded.type)
        if not is_accepted(media_type):
            Log.warning(f"Skipping {uploaded.name}: unsupported type {media_type}")
            continue
        sources.append(
            SourceFile(name=uploaded.name, media_type=media_type, content=uploaded.getvalue())
        )
    return sources
