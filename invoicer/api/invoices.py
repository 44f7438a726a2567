from __future__ import annotations

import io
import logging
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse

from invoicer.core import services
from invoicer.services.pdf import (
    GeneratedInvoicePdf,
    generate_invoice_pdf,
    invoice_template_entries,
    render_template_preview,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _pdf_response(generated: GeneratedInvoicePdf, *, download: bool) -> StreamingResponse:
    disposition = "attachment" if download else "inline"
    return StreamingResponse(
        io.BytesIO(generated.pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f"{disposition}; filename*=UTF-8''{quote(generated.filename)}"},
    )


@router.get("/templates")
async def list_invoice_templates() -> list[dict[str, str]]:
    return invoice_template_entries()


@router.get("/templates/{template_id}/preview")
async def preview_invoice_template(template_id: str) -> StreamingResponse:
    generated = await render_template_preview(template_id)
    return _pdf_response(generated, download=False)


@router.get("/{invoice_id}/pdf")
async def download_invoice_pdf(
    invoice_id: str,
    template: str | None = Query(default=None, description="Template override for previews."),
    download: bool = Query(default=True),
) -> StreamingResponse:
    invoice = services.get_invoice(invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    client = services.get_client(invoice.client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    settings = services.get_settings()
    if settings is None:
        raise HTTPException(status_code=409, detail="Settings must be saved before generating invoices")

    generated = await generate_invoice_pdf(
        invoice,
        client,
        settings,
        contracts=services.SqliteContractLookup(),
        style_override=template,
    )
    logger.info("[PDF] invoice %s exported as %s", invoice_id, generated.filename)
    return _pdf_response(generated, download=download)
