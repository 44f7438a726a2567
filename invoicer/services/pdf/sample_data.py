"""Fixed records used to preview invoice templates without touching the database."""
from __future__ import annotations

from invoicer.core.models import Client, Invoice, InvoiceItem, Settings

SAMPLE_CLIENT = Client(
    id="sample-client-id",
    company_name="Acme Corporation",
    address="123 Business Ave\nSuite 100\nTokyo, Japan",
    email="billing@acme.example.com",
)

SAMPLE_INVOICE = Invoice(
    id="sample-invoice-id",
    invoice_number="INV-2025-01-1706700000",
    client_id=SAMPLE_CLIENT.id,
    issue_date="2025-01-15",
    due_date="2025-02-15",
    total=150000,
    created_at="2025-01-15T00:00:00.000Z",
    currency="JPY",
    items=[
        InvoiceItem(description="Consulting Services - January 2025", quantity=1, unit_price=100000),
        InvoiceItem(description="Additional Support", quantity=10, unit_price=5000),
    ],
)

SAMPLE_SETTINGS = Settings(
    freelancer_name="Jane Smith",
    address="456 Freelancer St\nOsaka, Japan",
    email="jane@freelancer.example.com",
    bank_name="Sample Bank",
    account_holder="Jane Smith",
    account_number="****1234",
    swift="SAMPLEXX",
    bank_country="Japan",
    bank_currency="JPY",
    filename_template="invoice-{yyyymm}.pdf",
)
