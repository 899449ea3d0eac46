from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class TransactionCategory(str, Enum):
    """Closed set of labels the model may assign to a document."""

    EXPENSE = "Expense"
    DEPOSIT = "Deposit"
    TRANSFER = "Transfer"
    CHARGE = "Charge"
    OTHER = "Other"


NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class DocumentPart:
    """Raw document content as sent to the provider."""

    data: bytes
    media_type: str

    @property
    def is_pdf(self) -> bool:
        return self.media_type == "application/pdf"


@dataclass(frozen=True)
class ExtractedData:
    """Structured result for one financial document."""

    transaction_date: str
    amount: Decimal
    currency_code: str
    description: str
    vendor_name: str
    invoice_number: str
    category: TransactionCategory
    confidence_score: float
