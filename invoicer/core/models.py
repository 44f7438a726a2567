"""Modèles Pydantic du domaine (clients, contrats, factures, paramètres)."""
from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DueDateMethod = Literal["days", "endOfNextMonth"]
InvoiceType = Literal["recurring", "custom"]

DEFAULT_FILENAME_TEMPLATE = "invoice-{yyyymm}.pdf"


class DomainModel(BaseModel):
    """Accepts the browser application's camelCase payloads as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Client(DomainModel):
    id: str
    company_name: str
    address: str = ""
    email: str = ""


class ClientCreate(DomainModel):
    company_name: str = Field(..., min_length=1)
    address: str = ""
    email: str = ""


class Contract(DomainModel):
    id: str
    client_id: str
    description_template: str = ""
    unit_price: float = 0
    currency: str = "JPY"
    quantity: float = 1
    due_days: int = 30
    due_date_method: DueDateMethod = "days"


class ContractCreate(DomainModel):
    client_id: str
    description_template: str = ""
    unit_price: float = 0
    currency: str = "JPY"
    quantity: float = 1
    due_days: int = 30
    due_date_method: DueDateMethod = "days"


class InvoiceItem(DomainModel):
    description: str = ""
    quantity: float = 1
    unit_price: float = 0


class Invoice(DomainModel):
    id: str
    invoice_number: str
    client_id: str
    issue_date: str
    due_date: str
    total: float
    created_at: str = ""
    items: Optional[list[InvoiceItem]] = None
    currency: Optional[str] = None
    invoice_type: Optional[InvoiceType] = None
    contract_id: Optional[str] = None


class InvoiceCreate(DomainModel):
    invoice_number: Optional[str] = None
    client_id: str
    issue_date: str
    due_date: str
    total: float
    created_at: str = ""
    items: Optional[list[InvoiceItem]] = None
    currency: Optional[str] = None
    invoice_type: Optional[InvoiceType] = None
    contract_id: Optional[str] = None


class Settings(DomainModel):
    freelancer_name: str = ""
    address: str = ""
    email: str = ""
    bank_name: str = ""
    account_holder: str = ""
    account_number: str = ""
    swift: str = ""
    bank_country: str = ""
    bank_currency: str = "JPY"
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    invoice_template: Optional[str] = None


def resolve_invoice_type(invoice: Invoice) -> InvoiceType:
    """Explicit type wins; older invoices are custom only when they carry items."""

    if invoice.invoice_type is not None:
        return invoice.invoice_type
    return "custom" if invoice.items else "recurring"


def generate_invoice_number(issue_date: date, timestamp_ms: int) -> str:
    """Build an ``INV-YYYY-MM-{timestamp}`` number, the format stored invoices use."""

    return f"INV-{issue_date.year}-{issue_date.month:02d}-{timestamp_ms}"
