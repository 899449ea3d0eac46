import io
import threading
import uuid

from PIL import Image, UnidentifiedImageError

from finextract.logging.logger import Log
from finextract.registry.models import SourceFile


class PreviewStore:
    """Holds PNG thumbnails for image uploads behind opaque handles.

    A handle lives as long as its owning registry entry and must be released
    when the entry goes away.
    """

    def __init__(self, max_size_px: int = 256) -> None:
        self._max_size_px = max_size_px
        self._previews: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def create(self, source: SourceFile) -> str | None:
        """Return a handle for a thumbnail of ``source``, or None for non-images."""
        if not source.is_image:
            return None
        thumbnail = self._render_thumbnail(source)
        if thumbnail is None:
            return None
        handle = f"preview:{uuid.uuid4().hex}"
        with self._lock:
            self._previews[handle] = thumbnail
        return handle

    def get(self, handle: str) -> bytes | None:
        with self._lock:
            return self._previews.get(handle)

    def release(self, handle: str | None) -> None:
        if handle is None:
            return
        with self._lock:
            self._previews.pop(handle, None)

    def close(self) -> None:
        with self._lock:
            self._previews.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._previews)

    def _render_thumbnail(self, source: SourceFile) -> bytes | None:
        try:
            with Image.open(io.BytesIO(source.content)) as image:
                image.thumbnail((self._max_size_px, self._max_size_px))
                buf = io.BytesIO()
                image.convert("RGB").save(buf, format="PNG")
        except (UnidentifiedImageError, OSError) as exc:
            Log.warning(f"No preview for {source.name}: {exc}")
            return None
        return buf.getvalue()
