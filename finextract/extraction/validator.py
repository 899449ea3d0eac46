"""Builds ExtractedData from the provider's parsed JSON object."""

import math
from decimal import Decimal
from typing import Any

from finextract.extraction.exceptions import ExtractionFailure
from finextract.extraction.models import NOT_APPLICABLE, ExtractedData, TransactionCategory

_REQUIRED_FIELDS = ("date", "amount", "description", "vendorName", "category")
_VALID_CATEGORIES = frozenset(c.value for c in TransactionCategory)


def validate_and_build(data: dict[str, Any]) -> ExtractedData:
    """Check shape conformance and build an ExtractedData.

    Absent (or null) optional fields are filled: currency with "", invoiceNumber
    with "N/A", confidenceScore with 0. Values are not checked against business
    rules.

    Raises:
        ExtractionFailure: on any shape violation.
    """
    _require_fields(data)
    return ExtractedData(
        transaction_date=_require_string(data, "date"),
        amount=_build_amount(data["amount"]),
        currency_code=_optional_string(data, "currency", ""),
        description=_require_string(data, "description"),
        vendor_name=_require_string(data, "vendorName"),
        invoice_number=_optional_string(data, "invoiceNumber", NOT_APPLICABLE),
        category=_build_category(data["category"]),
        confidence_score=_build_confidence(data.get("confidenceScore")),
    )


def _require_fields(data: dict[str, Any]) -> None:
    for field in _REQUIRED_FIELDS:
        if data.get(field) is None:
            raise ExtractionFailure(f"Missing required field: {field}")


def _is_number(value: Any) -> bool:
    """True for finite JSON numbers; rejects bools and the inf/NaN json.loads lets through."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _require_string(data: dict[str, Any], field: str) -> str:
    value = data[field]
    if not isinstance(value, str):
        raise ExtractionFailure(f"'{field}' must be a string")
    return value


def _optional_string(data: dict[str, Any], field: str, default: str) -> str:
    value = data.get(field)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ExtractionFailure(f"'{field}' must be a string or absent")
    return value


def _build_amount(raw: Any) -> Decimal:
    if not _is_number(raw):
        raise ExtractionFailure("'amount' must be a finite number")
    # str() keeps the literal the model sent: 42.5 -> Decimal("42.5")
    return Decimal(str(raw))


def _build_category(raw: Any) -> TransactionCategory:
    if not isinstance(raw, str) or raw not in _VALID_CATEGORIES:
        raise ExtractionFailure(
            f"'category' must be one of {sorted(_VALID_CATEGORIES)}, got {raw!r}"
        )
    return TransactionCategory(raw)


def _build_confidence(raw: Any) -> float:
    if raw is None:
        return 0.0
    if not _is_number(raw):
        raise ExtractionFailure("'confidenceScore' must be a finite number or absent")
    return float(raw)
