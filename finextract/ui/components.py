"""Pure helpers that shape registry state for display."""

import pandas as pd

from finextract.aggregation.stats import AggregateStats, format_amount
from finextract.registry.models import DocumentEntry, DocumentStatus

STATUS_LABELS = {
    DocumentStatus.IDLE: "Pending",
    DocumentStatus.PROCESSING: "Processing",
    DocumentStatus.SUCCESS: "Success",
    DocumentStatus.ERROR: "Failed",
}

STATUS_ICONS = {
    DocumentStatus.IDLE: "⏳",
    DocumentStatus.PROCESSING: "🔄",
    DocumentStatus.SUCCESS: "✅",
    DocumentStatus.ERROR: "❌",
}

TABLE_COLUMNS = ["Document", "Size", "Date", "Vendor", "Category", "Amount", "Status"]


def status_label(status: DocumentStatus) -> str:
    return f"{STATUS_ICONS[status]} {STATUS_LABELS[status]}"


def _row(entry: DocumentEntry) -> dict[str, str]:
    data = entry.data
    return {
        "Document": entry.source.name,
        "Size": f"{entry.source.size_bytes / 1024:.1f} KB",
        "Date": data.transaction_date if data else "-",
        "Vendor": data.vendor_name if data else "-",
        "Category": data.category.value if data else "-",
        "Amount": f"{data.currency_code} {format_amount(data.amount)}".strip() if data else "-",
        "Status": status_label(entry.status),
    }


def documents_frame(entries: tuple[DocumentEntry, ...]) -> pd.DataFrame:
    """One row per entry, in registry order."""
    return pd.DataFrame([_row(entry) for entry in entries], columns=TABLE_COLUMNS)


def breakdown_frame(stats: AggregateStats) -> pd.DataFrame:
    """Category counts indexed by category name, ready for ``st.bar_chart``."""
    frame = pd.DataFrame(
        [{"category": c.name, "documents": c.value} for c in stats.category_breakdown],
        columns=["category", "documents"],
    )
    return frame.set_index("category")


def processed_ratio(stats: AggregateStats) -> float:
    """Share of documents that finished successfully, for the progress bar."""
    return min(stats.total_successful / (stats.total_documents or 1), 1.0)
