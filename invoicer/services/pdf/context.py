"""Per-call render context for invoice PDFs."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

from reportlab.pdfbase import pdfmetrics

from invoicer.core.models import Client, Contract, Invoice, InvoiceItem, Settings, resolve_invoice_type
from .formatting import parse_iso_date

FALLBACK_CURRENCY = "JPY"
DEFAULT_DUE_DAYS = 30
END_OF_MONTH_TERMS = "Payment is due by the end of the invoice month."


class ContractLookup(Protocol):
    def get_contract_by_id(self, contract_id: str) -> Contract | None: ...

    def get_contracts_by_client_id(self, client_id: str) -> list[Contract]: ...


@dataclass(frozen=True)
class InvoiceFonts:
    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"


@dataclass(frozen=True)
class RenderContext:
    canvas: Any
    invoice: Invoice
    client: Client
    settings: Settings
    fonts: InvoiceFonts
    page_width: float
    page_height: float
    margin: float
    contract: Contract | None
    currency: str
    items_to_render: tuple[InvoiceItem, ...]
    has_custom_items: bool
    payment_terms: str
    invoice_num_text: str


def embed_standard_fonts() -> InvoiceFonts:
    """Return the regular/bold pair after checking reportlab knows both faces."""

    fonts = InvoiceFonts()
    pdfmetrics.getFont(fonts.regular)
    pdfmetrics.getFont(fonts.bold)
    return fonts


async def resolve_contract(invoice: Invoice, contracts: ContractLookup) -> Contract | None:
    if invoice.contract_id is not None:
        return await asyncio.to_thread(contracts.get_contract_by_id, invoice.contract_id)
    # Older invoices carry no contract id: take whatever the store returns first.
    candidates = await asyncio.to_thread(contracts.get_contracts_by_client_id, invoice.client_id)
    return candidates[0] if candidates else None


def resolve_currency(invoice: Invoice, contract: Contract | None) -> str:
    return invoice.currency or (contract.currency if contract else None) or FALLBACK_CURRENCY


def build_payment_terms(contract: Contract | None) -> str:
    if contract is not None and contract.due_date_method == "endOfNextMonth":
        return END_OF_MONTH_TERMS
    due_days = (contract.due_days if contract is not None else None) or DEFAULT_DUE_DAYS
    return f"Payment is due within {due_days} days from the invoice date."


def build_invoice_number_text(invoice: Invoice) -> str:
    """Short display label ``INVOICE [MM-YYYY-XXXX]``.

    Month and year come from the issue date, not from the stored number; the
    suffix is the last four characters of the number's final ``-`` segment.
    """

    issue_date = parse_iso_date(invoice.issue_date)
    timestamp = invoice.invoice_number.split("-")[-1]
    return f"INVOICE [{issue_date.month:02d}-{issue_date.year}-{timestamp[-4:]}]"


async def build_render_context(
    canvas: Any,
    invoice: Invoice,
    client: Client,
    settings: Settings,
    contracts: ContractLookup,
    *,
    page_size: tuple[float, float],
    margin: float,
) -> RenderContext:
    contract = await resolve_contract(invoice, contracts)
    has_custom_items = resolve_invoice_type(invoice) == "custom"
    items = tuple(invoice.items or ()) if has_custom_items else ()
    width, height = page_size

    return RenderContext(
        canvas=canvas,
        invoice=invoice,
        client=client,
        settings=settings,
        fonts=embed_standard_fonts(),
        page_width=width,
        page_height=height,
        margin=margin,
        contract=contract,
        currency=resolve_currency(invoice, contract),
        items_to_render=items,
        has_custom_items=has_custom_items,
        payment_terms=build_payment_terms(contract),
        invoice_num_text=build_invoice_number_text(invoice),
    )
