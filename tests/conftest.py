import io
from decimal import Decimal

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from finextract.extraction.models import ExtractedData, TransactionCategory


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page invoice PDF."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "INVOICE #1001  Acme, Inc.  Total: 120.00 USD")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_jpeg_bytes() -> bytes:
    """Generate a small receipt-sized JPEG."""
    buf = io.BytesIO()
    Image.new("RGB", (600, 900), color=(250, 250, 245)).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture()
def coffee_data() -> ExtractedData:
    return ExtractedData(
        transaction_date="2024-01-01",
        amount=Decimal("42.5"),
        currency_code="USD",
        description="Coffee",
        vendor_name="Cafe",
        invoice_number="N/A",
        category=TransactionCategory.EXPENSE,
        confidence_score=90.0,
    )
