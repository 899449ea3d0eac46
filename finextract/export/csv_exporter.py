"""CSV export of successfully extracted documents."""

import csv
import io
from collections.abc import Iterable

from finextract.registry.models import DocumentEntry, DocumentStatus

EXPORT_FILENAME = "extracted_financial_data.csv"
EXPORT_MEDIA_TYPE = "text/csv"
EXPORT_HEADERS = (
    "Date",
    "Vendor",
    "Invoice #",
    "Description",
    "Category",
    "Amount",
    "Currency",
    "Confidence",
)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def export_csv(entries: Iterable[DocumentEntry]) -> str:
    """One header row plus one row per successful entry, in registry order.

    Fields holding a comma, quote or newline are quoted, with inner quotes doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for entry in entries:
        if entry.status is not DocumentStatus.SUCCESS or entry.data is None:
            continue
        data = entry.data
        writer.writerow(
            (
                data.transaction_date,
                data.vendor_name,
                data.invoice_number,
                data.description,
                data.category.value,
                str(data.amount),
                data.currency_code,
                _format_number(data.confidence_score),
            )
        )
    return buf.getvalue()
