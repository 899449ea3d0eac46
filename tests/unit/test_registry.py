import pytest

from finextract.extraction.models import ExtractedData
from finextract.registry.exceptions import DocumentNotFoundError, InvalidTransitionError
from finextract.registry.models import DocumentStatus, SourceFile
from finextract.registry.preview import PreviewStore
from finextract.registry.registry import DocumentRegistry


def _pdf(name: str = "invoice.pdf") -> SourceFile:
    return SourceFile(name=name, media_type="application/pdf", content=b"%PDF-fake")


def _jpeg(content: bytes, name: str = "receipt.jpg") -> SourceFile:
    return SourceFile(name=name, media_type="image/jpeg", content=content)


def _processing_entry(registry: DocumentRegistry) -> str:
    doc_id = registry.add(_pdf())
    registry.update_status(doc_id, DocumentStatus.PROCESSING)
    return doc_id


class TestAdd:
    def test_new_entry_is_idle(self) -> None:
        registry = DocumentRegistry()
        entry = registry.get(registry.add(_pdf()))
        assert entry.status is DocumentStatus.IDLE
        assert entry.data is None
        assert entry.error_message is None

    def test_ids_are_unique(self) -> None:
        registry = DocumentRegistry()
        ids = {registry.add(_pdf()) for _ in range(20)}
        assert len(ids) == 20

    def test_list_is_newest_first(self) -> None:
        registry = DocumentRegistry()
        ids = [registry.add(_pdf(f"doc{i}.pdf")) for i in range(5)]
        assert [entry.id for entry in registry.list()] == list(reversed(ids))

    def test_image_gets_preview(self, sample_jpeg_bytes: bytes) -> None:
        previews = PreviewStore()
        registry = DocumentRegistry(previews)
        entry = registry.get(registry.add(_jpeg(sample_jpeg_bytes)))
        assert entry.preview is not None
        assert len(previews) == 1

    def test_pdf_gets_no_preview(self) -> None:
        registry = DocumentRegistry()
        assert registry.get(registry.add(_pdf())).preview is None

    def test_broken_image_still_registers(self) -> None:
        registry = DocumentRegistry()
        entry = registry.get(registry.add(_jpeg(b"garbage")))
        assert entry.preview is None
        assert len(registry) == 1


class TestUpdateStatus:
    def test_idle_to_processing(self) -> None:
        registry = DocumentRegistry()
        doc_id = registry.add(_pdf())
        updated = registry.update_status(doc_id, DocumentStatus.PROCESSING)
        assert updated is not None
        assert registry.get(doc_id).status is DocumentStatus.PROCESSING

    def test_processing_to_success_sets_data(self, coffee_data: ExtractedData) -> None:
        registry = DocumentRegistry()
        doc_id = _processing_entry(registry)
        registry.update_status(doc_id, DocumentStatus.SUCCESS, data=coffee_data)
        entry = registry.get(doc_id)
        assert entry.status is DocumentStatus.SUCCESS
        assert entry.data == coffee_data
        assert entry.error_message is None

    def test_processing_to_error_sets_message(self) -> None:
        registry = DocumentRegistry()
        doc_id = _processing_entry(registry)
        registry.update_status(doc_id, DocumentStatus.ERROR, error_message="Extraction failed")
        entry = registry.get(doc_id)
        assert entry.status is DocumentStatus.ERROR
        assert entry.error_message == "Extraction failed"
        assert entry.data is None

    def test_update_keeps_position(self, coffee_data: ExtractedData) -> None:
        registry = DocumentRegistry()
        first = _processing_entry(registry)
        registry.add(_pdf("later.pdf"))
        registry.update_status(first, DocumentStatus.SUCCESS, data=coffee_data)
        assert registry.list()[1].id == first

    def test_idle_cannot_skip_to_success(self, coffee_data: ExtractedData) -> None:
        registry = DocumentRegistry()
        doc_id = registry.add(_pdf())
        with pytest.raises(InvalidTransitionError):
            registry.update_status(doc_id, DocumentStatus.SUCCESS, data=coffee_data)

    @pytest.mark.parametrize("target", [DocumentStatus.IDLE, DocumentStatus.PROCESSING])
    def test_terminal_status_is_final(self, target: DocumentStatus) -> None:
        registry = DocumentRegistry()
        doc_id = _processing_entry(registry)
        registry.update_status(doc_id, DocumentStatus.ERROR, error_message="Extraction failed")
        with pytest.raises(InvalidTransitionError):
            registry.update_status(doc_id, target)
        assert registry.get(doc_id).status is DocumentStatus.ERROR

    def test_success_requires_data(self) -> None:
        registry = DocumentRegistry()
        doc_id = _processing_entry(registry)
        with pytest.raises(InvalidTransitionError):
            registry.update_status(doc_id, DocumentStatus.SUCCESS)

    def test_error_rejects_data(self, coffee_data: ExtractedData) -> None:
        registry = DocumentRegistry()
        doc_id = _processing_entry(registry)
        with pytest.raises(InvalidTransitionError):
            registry.update_status(
                doc_id, DocumentStatus.ERROR, data=coffee_data, error_message="x"
            )

    def test_missing_id_is_noop(self, coffee_data: ExtractedData) -> None:
        registry = DocumentRegistry()
        registry.add(_pdf())
        before = registry.list()
        result = registry.update_status("gone", DocumentStatus.SUCCESS, data=coffee_data)
        assert result is None
        assert registry.list() == before

    def test_removed_id_is_not_resurrected(self, coffee_data: ExtractedData) -> None:
        registry = DocumentRegistry()
        doc_id = _processing_entry(registry)
        registry.remove(doc_id)
        registry.update_status(doc_id, DocumentStatus.SUCCESS, data=coffee_data)
        assert len(registry) == 0
        with pytest.raises(DocumentNotFoundError):
            registry.get(doc_id)


class TestRemove:
    def test_removes_entry(self) -> None:
        registry = DocumentRegistry()
        keep = registry.add(_pdf("keep.pdf"))
        drop = registry.add(_pdf("drop.pdf"))
        assert registry.remove(drop) is True
        assert [entry.id for entry in registry.list()] == [keep]

    def test_missing_id_returns_false(self) -> None:
        registry = DocumentRegistry()
        assert registry.remove("nope") is False

    def test_releases_preview(self, sample_jpeg_bytes: bytes) -> None:
        previews = PreviewStore()
        registry = DocumentRegistry(previews)
        doc_id = registry.add(_jpeg(sample_jpeg_bytes))
        handle = registry.get(doc_id).preview
        registry.remove(doc_id)
        assert previews.get(handle) is None
        assert len(previews) == 0


class TestSnapshotAndClear:
    def test_list_is_a_snapshot(self) -> None:
        registry = DocumentRegistry()
        registry.add(_pdf())
        snapshot = registry.list()
        registry.add(_pdf("another.pdf"))
        assert len(snapshot) == 1
        assert len(registry.list()) == 2

    def test_clear_drops_entries_and_previews(self, sample_jpeg_bytes: bytes) -> None:
        previews = PreviewStore()
        registry = DocumentRegistry(previews)
        registry.add(_jpeg(sample_jpeg_bytes))
        registry.add(_pdf())
        registry.clear()
        assert len(registry) == 0
        assert len(previews) == 0

    def test_get_missing_raises_not_found(self) -> None:
        with pytest.raises(DocumentNotFoundError):
            DocumentRegistry().get("missing")
