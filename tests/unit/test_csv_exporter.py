from dataclasses import replace
from decimal import Decimal

from finextract.export.csv_exporter import EXPORT_FILENAME, export_csv
from finextract.extraction.models import ExtractedData
from finextract.registry.models import DocumentEntry, DocumentStatus, SourceFile

_SOURCE = SourceFile(name="doc.pdf", media_type="application/pdf", content=b"x")
_HEADER = "Date,Vendor,Invoice #,Description,Category,Amount,Currency,Confidence"


def _success(doc_id: str, data: ExtractedData) -> DocumentEntry:
    return DocumentEntry(id=doc_id, source=_SOURCE, status=DocumentStatus.SUCCESS, data=data)


class TestExportCsv:
    def test_filename(self) -> None:
        assert EXPORT_FILENAME == "extracted_financial_data.csv"

    def test_header_only_when_nothing_succeeded(self) -> None:
        failed = DocumentEntry(
            id="x", source=_SOURCE, status=DocumentStatus.ERROR, error_message="Extraction failed"
        )
        assert export_csv((failed,)) == _HEADER + "\n"

    def test_row_format(self, coffee_data: ExtractedData) -> None:
        lines = export_csv((_success("a", coffee_data),)).splitlines()
        assert lines == [_HEADER, "2024-01-01,Cafe,N/A,Coffee,Expense,42.5,USD,90"]

    def test_quotes_and_escapes(self, coffee_data: ExtractedData) -> None:
        entries = (
            _success("a", replace(coffee_data, vendor_name="Acme, Inc.")),
            _success("b", replace(coffee_data, vendor_name='Bob\'s "Shop"')),
        )
        lines = export_csv(entries).splitlines()
        assert lines[1].split(",", 1)[1].startswith('"Acme, Inc.",')
        assert ',"Bob\'s ""Shop""",' in lines[2]

    def test_keeps_registry_order_and_skips_non_success(self, coffee_data: ExtractedData) -> None:
        pending = DocumentEntry(id="p", source=_SOURCE, status=DocumentStatus.PROCESSING)
        entries = (
            _success("new", replace(coffee_data, vendor_name="Newer")),
            pending,
            _success("old", replace(coffee_data, vendor_name="Older")),
        )
        lines = export_csv(entries).splitlines()
        assert len(lines) == 3
        assert ",Newer," in lines[1]
        assert ",Older," in lines[2]

    def test_fractional_confidence_and_amount(self, coffee_data: ExtractedData) -> None:
        data = replace(coffee_data, amount=Decimal("1200.05"), confidence_score=87.5)
        row = export_csv((_success("a", data),)).splitlines()[1]
        assert row.endswith(",1200.05,USD,87.5")
