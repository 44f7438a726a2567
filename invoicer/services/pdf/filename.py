"""Download filename for generated invoices."""
from __future__ import annotations

import re

from invoicer.core.models import Client, Invoice, Settings
from .formatting import parse_iso_date

_FORBIDDEN_CHARS_RE = re.compile(r'[\\/:*?"<>|]')
_TOKEN_RE = re.compile(r"\{(\w+)\}")


def sanitize_filename(filename: str) -> str:
    return _FORBIDDEN_CHARS_RE.sub("-", filename)


def format_filename(template: str | None, invoice: Invoice, client: Client, settings: Settings) -> str:
    """Expand ``{freelancer}``, ``{client}``, ``{month}``, ``{monthPad}``, ``{year}``
    and ``{yyyymm}``; other ``{...}`` tokens are kept as written.

    A blank template falls back to ``invoice-{yyyymm}.pdf``.
    """

    issue_date = parse_iso_date(invoice.issue_date)
    month_pad = f"{issue_date.month:02d}"
    yyyymm = f"{issue_date.year}{month_pad}"

    if not template or not template.strip():
        return sanitize_filename(f"invoice-{yyyymm}.pdf")

    tokens = {
        "freelancer": settings.freelancer_name or "",
        "client": client.company_name or "",
        "month": str(issue_date.month),
        "monthPad": month_pad,
        "year": str(issue_date.year),
        "yyyymm": yyyymm,
    }
    filename = _TOKEN_RE.sub(lambda match: tokens.get(match.group(1), match.group(0)), template)
    if not filename.lower().endswith(".pdf"):
        filename = f"{filename}.pdf"
    return sanitize_filename(filename)
