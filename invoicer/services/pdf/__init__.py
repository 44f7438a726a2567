"""Invoice PDF rendering services."""

from .document import GeneratedInvoicePdf, generate_invoice_pdf, render_template_preview
from .filename import format_filename
from .styles import INVOICE_TEMPLATES, invoice_template_entries, resolve_style, resolve_template_id

__all__ = [
    "GeneratedInvoicePdf",
    "generate_invoice_pdf",
    "render_template_preview",
    "format_filename",
    "INVOICE_TEMPLATES",
    "invoice_template_entries",
    "resolve_style",
    "resolve_template_id",
]
