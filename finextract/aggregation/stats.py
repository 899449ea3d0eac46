from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from finextract.extraction.models import TransactionCategory
from finextract.registry.models import DocumentEntry, DocumentStatus


@dataclass(frozen=True)
class CategoryCount:
    name: str
    value: int


@dataclass(frozen=True)
class AggregateStats:
    """Summary of the registry snapshot it was derived from.

    ``total_amount`` adds amounts across currencies without conversion.
    """

    total_documents: int
    total_successful: int
    total_amount: Decimal
    category_breakdown: tuple[CategoryCount, ...]


def aggregate(entries: Iterable[DocumentEntry]) -> AggregateStats:
    """Derive counts, total and per-category counts from successful entries."""
    entries = tuple(entries)
    extracted = [
        entry.data
        for entry in entries
        if entry.status is DocumentStatus.SUCCESS and entry.data is not None
    ]
    counts = Counter(data.category for data in extracted)
    breakdown = tuple(
        CategoryCount(name=category.value, value=counts[category])
        for category in TransactionCategory
        if counts[category] > 0
    )
    return AggregateStats(
        total_documents=len(entries),
        total_successful=len(extracted),
        total_amount=sum((data.amount for data in extracted), Decimal("0")),
        category_breakdown=breakdown,
    )


def format_amount(amount: Decimal) -> str:
    """Render an amount with thousands separators and two decimals."""
    return f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"
