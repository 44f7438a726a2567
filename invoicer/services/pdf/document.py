"""Invoice PDF generation entry points."""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from reportlab.pdfgen import canvas

from invoicer.core.models import Client, Invoice, Settings
from invoicer.core.services import InMemoryContractLookup
from .context import ContractLookup, build_render_context
from .filename import format_filename
from .renderer import render_invoice
from .sample_data import SAMPLE_CLIENT, SAMPLE_INVOICE, SAMPLE_SETTINGS
from .styles import INVOICE_TEMPLATES, resolve_template_id

logger = logging.getLogger(__name__)

A4_WIDTH = 595.28
A4_HEIGHT = 841.89
PAGE_SIZE = (A4_WIDTH, A4_HEIGHT)
MARGIN = 50


@dataclass(frozen=True)
class GeneratedInvoicePdf:
    pdf_bytes: bytes
    filename: str


async def generate_invoice_pdf(
    invoice: Invoice,
    client: Client,
    settings: Settings,
    *,
    contracts: ContractLookup,
    style_override: str | None = None,
) -> GeneratedInvoicePdf:
    """Render ``invoice`` on a fresh A4 page and return the bytes with their filename.

    ``style_override`` replaces ``settings.invoice_template`` (template previews).
    Each call owns its buffer, canvas and context, so calls may run concurrently.
    """

    template_id = resolve_template_id(style_override or settings.invoice_template)
    template = INVOICE_TEMPLATES[template_id]

    buffer = io.BytesIO()
    # invariant=1 drops the creation date and random document id: same input, same bytes.
    pdf = canvas.Canvas(buffer, pagesize=PAGE_SIZE, invariant=1)

    ctx = await build_render_context(
        pdf,
        invoice,
        client,
        settings,
        contracts,
        page_size=PAGE_SIZE,
        margin=MARGIN,
    )
    pdf.setTitle(ctx.invoice_num_text)
    pdf.setAuthor(settings.freelancer_name)
    pdf.setSubject(f"Invoice {invoice.invoice_number} for {client.company_name}")

    render_invoice(ctx, template.style)
    pdf.showPage()
    pdf.save()

    filename = format_filename(settings.filename_template, invoice, client, settings)
    logger.debug(
        "[PDF] invoice %s rendered with template %s (%s custom rows, contract=%s)",
        invoice.id,
        template_id,
        len(ctx.items_to_render),
        ctx.contract.id if ctx.contract else None,
    )
    return GeneratedInvoicePdf(pdf_bytes=buffer.getvalue(), filename=filename)


async def render_template_preview(template_id: str | None) -> GeneratedInvoicePdf:
    """Render the sample invoice with ``template_id`` (settings page preview)."""

    return await generate_invoice_pdf(
        SAMPLE_INVOICE,
        SAMPLE_CLIENT,
        SAMPLE_SETTINGS,
        contracts=InMemoryContractLookup(),
        style_override=resolve_template_id(template_id),
    )
