"""Single-page invoice layout shared by every template.

All positions are fixed offsets from the page edges and the 50 pt margin; the
active :class:`InvoiceStyle` only supplies colours and stroke weights.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics

from invoicer.core.models import Contract
from .context import RenderContext
from .formatting import format_amount, format_quantity, month_name, parse_iso_date
from .styles import InvoiceStyle

LINK_COLOR = colors.Color(0, 0, 0.8)
ELLIPSIS = "..."

TABLE_DATA_ROWS = 7
HEADER_ROW_HEIGHT = 24
ROW_HEIGHT = 22
QUANTITY_COLUMN_WIDTH = 80
UNIT_PRICE_COLUMN_WIDTH = 80
TOTAL_COLUMN_WIDTH = 70
CELL_PADDING = 5
DESCRIPTION_PADDING = 10
REMITTANCE_LINE_SPACING = 16
REMITTANCE_VALUE_OFFSET = 90
FOOTER_Y = 60

JPY_FULL_NAME = "Japanese Yen (JPY)"
THANK_YOU_TEXT = "THANK YOU FOR YOUR BUSINESS!"


@dataclass(frozen=True)
class TableGeometry:
    left: float
    right: float
    top: float
    bottom: float
    header_bottom: float
    quantity_x: float
    description_x: float
    unit_price_x: float
    total_x: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def description_width(self) -> float:
        return self.unit_price_x - self.description_x


@dataclass(frozen=True)
class TableRow:
    quantity: str
    description: str
    unit_price: str
    total: str


def _text_width(text: str, font: str, size: float) -> float:
    return pdfmetrics.stringWidth(text, font, size)


def _draw_text(canvas: Any, x: float, y: float, text: str, *, font: str, size: float, color: colors.Color) -> None:
    canvas.setFont(font, size)
    canvas.setFillColor(color)
    canvas.drawString(x, y, text)


def _draw_right_aligned(
    canvas: Any, right: float, y: float, text: str, *, font: str, size: float, color: colors.Color
) -> None:
    _draw_text(canvas, right - _text_width(text, font, size), y, text, font=font, size=size, color=color)


def _draw_line(
    canvas: Any, x1: float, y1: float, x2: float, y2: float, *, width: float, color: colors.Color
) -> None:
    canvas.setStrokeColor(color)
    canvas.setLineWidth(width)
    canvas.line(x1, y1, x2, y2)


def _draw_box(
    canvas: Any, x: float, y: float, box_width: float, box_height: float, *, width: float, color: colors.Color
) -> None:
    canvas.setStrokeColor(color)
    canvas.setLineWidth(width)
    canvas.rect(x, y, box_width, box_height, stroke=1, fill=0)


def _non_empty_lines(value: str) -> list[str]:
    return [line for line in value.split("\n") if line.strip()]


def truncate_text(text: str, font: str, size: float, max_width: float) -> str:
    """Shorten ``text`` one character at a time until it fits with a trailing ellipsis."""

    if _text_width(text, font, size) <= max_width:
        return text
    truncated = text
    width = _text_width(truncated, font, size)
    while width > max_width and truncated:
        truncated = truncated[:-1]
        width = _text_width(truncated + ELLIPSIS, font, size)
    return truncated + ELLIPSIS


def render_contract_description(template: str, issue_date: str) -> str:
    parsed = parse_iso_date(issue_date)
    return template.replace("{{month}}", month_name(parsed.month)).replace("{{year}}", str(parsed.year))


def format_money(value: float, currency: str) -> str:
    return f"{format_amount(value)} {currency}"


def currency_display_name(currency: str) -> str:
    return JPY_FULL_NAME if currency == "JPY" else currency


def _draw_issuer(ctx: RenderContext, style: InvoiceStyle) -> None:
    canvas, settings, fonts = ctx.canvas, ctx.settings, ctx.fonts
    y = ctx.page_height - ctx.margin
    _draw_text(canvas, ctx.margin, y, settings.freelancer_name, font=fonts.bold, size=11, color=style.text_color)
    y -= 16
    for line in _non_empty_lines(settings.address):
        _draw_text(canvas, ctx.margin, y, line, font=fonts.regular, size=9, color=style.text_color)
        y -= 12
    if settings.email:
        _draw_text(canvas, ctx.margin, y, settings.email, font=fonts.regular, size=9, color=LINK_COLOR)


def _draw_invoice_meta(ctx: RenderContext, style: InvoiceStyle) -> None:
    canvas, fonts = ctx.canvas, ctx.fonts
    right = ctx.page_width - ctx.margin
    y = ctx.page_height - ctx.margin
    _draw_right_aligned(canvas, right, y, "INVOICE", font=fonts.bold, size=28, color=style.emphasis_color)
    y -= 30
    lines = (
        ctx.invoice_num_text,
        f"INVOICE DATE: {ctx.invoice.issue_date}",
        f"DUE DATE: {ctx.invoice.due_date}",
    )
    for index, line in enumerate(lines):
        if index:
            y -= 14
        _draw_right_aligned(canvas, right, y, line, font=fonts.regular, size=9, color=style.text_color)


def _draw_bill_to(ctx: RenderContext, style: InvoiceStyle) -> None:
    canvas, client, fonts = ctx.canvas, ctx.client, ctx.fonts
    # Fixed offset from the page top; a tall issuer block may overlap.
    y = ctx.page_height - 140
    _draw_text(canvas, ctx.margin, y, "BILL TO:", font=fonts.bold, size=9, color=style.label_color)
    y -= 14
    _draw_text(canvas, ctx.margin, y, client.company_name, font=fonts.regular, size=10, color=style.text_color)
    y -= 12
    for line in _non_empty_lines(client.address):
        _draw_text(canvas, ctx.margin, y, line, font=fonts.regular, size=9, color=style.text_color)
        y -= 12
    if client.email:
        _draw_text(canvas, ctx.margin, y, f"Email: {client.email}", font=fonts.regular, size=9, color=LINK_COLOR)


def table_geometry(ctx: RenderContext) -> TableGeometry:
    top = ctx.page_height - 280
    left = ctx.margin
    right = ctx.page_width - ctx.margin
    description_width = right - left - QUANTITY_COLUMN_WIDTH - UNIT_PRICE_COLUMN_WIDTH - TOTAL_COLUMN_WIDTH
    description_x = left + QUANTITY_COLUMN_WIDTH
    unit_price_x = description_x + description_width
    return TableGeometry(
        left=left,
        right=right,
        top=top,
        bottom=top - (HEADER_ROW_HEIGHT + TABLE_DATA_ROWS * ROW_HEIGHT),
        header_bottom=top - HEADER_ROW_HEIGHT,
        quantity_x=left,
        description_x=description_x,
        unit_price_x=unit_price_x,
        total_x=unit_price_x + UNIT_PRICE_COLUMN_WIDTH,
    )


def _draw_table_grid(ctx: RenderContext, style: InvoiceStyle, table: TableGeometry) -> None:
    canvas, fonts = ctx.canvas, ctx.fonts
    _draw_box(
        canvas,
        table.left,
        table.bottom,
        table.width,
        table.top - table.bottom,
        width=style.line_width,
        color=style.border_color,
    )
    for x in (table.description_x, table.unit_price_x, table.total_x):
        _draw_line(canvas, x, table.top, x, table.bottom, width=style.line_width, color=style.border_color)
    _draw_line(
        canvas,
        table.left,
        table.header_bottom,
        table.right,
        table.header_bottom,
        width=style.line_width,
        color=style.border_color,
    )
    for index in range(1, TABLE_DATA_ROWS):
        row_y = table.header_bottom - index * ROW_HEIGHT
        _draw_line(
            canvas,
            table.left,
            row_y,
            table.right,
            row_y,
            width=style.line_width * 0.5,
            color=style.border_color,
        )

    header_y = table.top - 16
    headers = (
        ("QUANTITY", table.quantity_x + 10),
        ("DESCRIPTION", table.description_x + 10),
        ("UNIT PRICE", table.unit_price_x + 5),
        ("TOTAL", table.total_x + 15),
    )
    for label, x in headers:
        _draw_text(canvas, x, header_y, label, font=fonts.bold, size=9, color=style.header_text_color)


def _contract_row(ctx: RenderContext, contract: Contract) -> TableRow:
    return TableRow(
        quantity=format_quantity(contract.quantity),
        description=render_contract_description(contract.description_template, ctx.invoice.issue_date),
        unit_price=format_money(contract.unit_price, ctx.currency),
        # The stored total wins over quantity x unit price: the contract may have changed since.
        total=format_money(ctx.invoice.total, ctx.currency),
    )


def table_rows(ctx: RenderContext) -> list[TableRow]:
    if ctx.has_custom_items and ctx.items_to_render:
        return [
            TableRow(
                quantity=format_quantity(item.quantity),
                description=item.description,
                unit_price=format_money(item.unit_price, ctx.currency),
                total=format_money(item.quantity * item.unit_price, ctx.currency),
            )
            for item in ctx.items_to_render[:TABLE_DATA_ROWS]
        ]
    if ctx.contract is not None:
        return [_contract_row(ctx, ctx.contract)]
    return []


def _draw_table_rows(ctx: RenderContext, style: InvoiceStyle, table: TableGeometry) -> None:
    canvas, font = ctx.canvas, ctx.fonts.regular
    max_description_width = table.description_width - 2 * DESCRIPTION_PADDING
    for index, row in enumerate(table_rows(ctx)):
        y = table.header_bottom - 15 - index * ROW_HEIGHT
        quantity_width = _text_width(row.quantity, font, 10)
        _draw_text(
            canvas,
            table.quantity_x + (QUANTITY_COLUMN_WIDTH - quantity_width) / 2,
            y,
            row.quantity,
            font=font,
            size=10,
            color=style.text_color,
        )
        description = truncate_text(row.description, font, 10, max_description_width)
        _draw_text(
            canvas,
            table.description_x + DESCRIPTION_PADDING,
            y,
            description,
            font=font,
            size=10,
            color=style.text_color,
        )
        _draw_right_aligned(
            canvas, table.total_x - CELL_PADDING, y, row.unit_price, font=font, size=10, color=style.text_color
        )
        _draw_right_aligned(
            canvas, table.right - CELL_PADDING, y, row.total, font=font, size=10, color=style.text_color
        )


def _draw_amount_due(ctx: RenderContext, style: InvoiceStyle, table: TableGeometry) -> float:
    canvas, fonts = ctx.canvas, ctx.fonts
    amount_y = table.bottom - 25
    _draw_box(
        canvas,
        table.unit_price_x,
        amount_y - 5,
        UNIT_PRICE_COLUMN_WIDTH + TOTAL_COLUMN_WIDTH,
        22,
        width=style.line_width,
        color=style.border_color,
    )
    _draw_line(
        canvas,
        table.total_x,
        amount_y + 17,
        table.total_x,
        amount_y - 5,
        width=style.line_width,
        color=style.border_color,
    )
    _draw_text(
        canvas,
        table.unit_price_x + 10,
        amount_y + 2,
        "AMOUNT DUE",
        font=fonts.bold,
        size=9,
        color=style.label_color,
    )
    _draw_right_aligned(
        canvas,
        table.right - CELL_PADDING,
        amount_y + 2,
        format_money(ctx.invoice.total, ctx.currency),
        font=fonts.bold,
        size=9,
        color=style.emphasis_color,
    )
    return amount_y


def _draw_remittance(ctx: RenderContext, style: InvoiceStyle, y: float) -> float:
    canvas, settings, fonts = ctx.canvas, ctx.settings, ctx.fonts
    header = "REMITTANCE ADVICE:"
    _draw_text(canvas, ctx.margin, y, header, font=fonts.bold, size=10, color=style.label_color)
    _draw_line(
        canvas,
        ctx.margin,
        y - 2,
        ctx.margin + _text_width(header, fonts.bold, 10),
        y - 2,
        width=style.line_width,
        color=style.border_color,
    )
    y -= 20
    _draw_text(canvas, ctx.margin, y, "Direct Deposit", font=fonts.bold, size=9, color=style.text_color)

    rows = (
        ("Bank Name", settings.bank_name),
        ("Account Holder", settings.account_holder),
        ("Account Number", settings.account_number),
        ("SWIFT", settings.swift),
        ("Bank Country", settings.bank_country),
        ("Bank Currency", settings.bank_currency or ctx.currency),
    )
    value_x = ctx.margin + REMITTANCE_VALUE_OFFSET
    for label, value in rows:
        # Empty fields keep their slot so the following rows do not move up.
        y -= REMITTANCE_LINE_SPACING
        if not value:
            continue
        _draw_text(canvas, ctx.margin, y, label, font=fonts.regular, size=9, color=style.label_color)
        _draw_text(canvas, value_x, y, f": {value}", font=fonts.regular, size=9, color=style.text_color)
    return y


def _draw_footer(ctx: RenderContext, style: InvoiceStyle) -> None:
    canvas, fonts = ctx.canvas, ctx.fonts
    _draw_line(
        canvas,
        ctx.margin,
        FOOTER_Y + 20,
        ctx.page_width - ctx.margin,
        FOOTER_Y + 20,
        width=style.line_width,
        color=style.border_color,
    )
    thank_you_width = _text_width(THANK_YOU_TEXT, fonts.bold, 10)
    _draw_text(
        canvas,
        (ctx.page_width - thank_you_width) / 2,
        FOOTER_Y,
        THANK_YOU_TEXT,
        font=fonts.bold,
        size=10,
        color=style.text_color,
    )


def render_invoice(ctx: RenderContext, style: InvoiceStyle) -> None:
    canvas, fonts = ctx.canvas, ctx.fonts

    _draw_issuer(ctx, style)
    _draw_invoice_meta(ctx, style)
    _draw_bill_to(ctx, style)

    table = table_geometry(ctx)
    _draw_table_grid(ctx, style, table)
    _draw_table_rows(ctx, style, table)
    amount_y = _draw_amount_due(ctx, style, table)

    y = amount_y - 30
    _draw_text(
        canvas,
        ctx.margin,
        y,
        f"All amounts in {currency_display_name(ctx.currency)}",
        font=fonts.regular,
        size=9,
        color=style.text_color,
    )

    y = _draw_remittance(ctx, style, y - 35)

    y -= 25
    _draw_text(canvas, ctx.margin, y, ctx.payment_terms, font=fonts.regular, size=9, color=style.text_color)
    y -= 16
    if ctx.settings.email:
        _draw_text(
            canvas,
            ctx.margin,
            y,
            f"If you have any questions concerning this invoice, contact {ctx.settings.email}",
            font=fonts.regular,
            size=9,
            color=style.text_color,
        )

    _draw_footer(ctx, style)
