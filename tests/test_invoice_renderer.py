import pytest
from conftest import RecordingCanvas
from reportlab.pdfbase import pdfmetrics

from invoicer.core.models import InvoiceItem
from invoicer.services.pdf import renderer, styles
from invoicer.services.pdf.formatting import format_amount


def _render(ctx, template_id: str = "default") -> RecordingCanvas:
    renderer.render_invoice(ctx, styles.resolve_style(template_id))
    return ctx.canvas


def _geometry(canvas: RecordingCanvas) -> tuple[list[tuple], list[tuple]]:
    texts = [(entry.text, entry.x, entry.y, entry.font, entry.size) for entry in canvas.texts]
    strokes = [(entry.kind, entry.coords) for entry in canvas.strokes]
    return texts, strokes


def test_every_style_draws_identical_geometry(make_invoice, client, settings, make_items, build_context) -> None:
    invoice = make_invoice(items=make_items(3), currency="USD")
    results = {}
    for template_id in styles.INVOICE_TEMPLATES:
        ctx = build_context(invoice, client, settings, canvas=RecordingCanvas())
        results[template_id] = _geometry(_render(ctx, template_id))

    reference = results["default"]
    assert reference[0] and reference[1]
    for template_id, geometry in results.items():
        assert geometry == reference, template_id


def test_styles_change_colors_and_stroke_weights(make_invoice, client, settings, build_context) -> None:
    default_canvas = _render(build_context(make_invoice(), client, settings, canvas=RecordingCanvas()), "default")
    classic_canvas = _render(build_context(make_invoice(), client, settings, canvas=RecordingCanvas()), "classic")

    assert {stroke.width for stroke in default_canvas.strokes} == {0.5, 0.25}
    assert {stroke.width for stroke in classic_canvas.strokes} == {1.0, 0.5}
    assert default_canvas.find_text("INVOICE").color is styles.resolve_style("default").emphasis_color


def test_custom_invoice_renders_at_most_seven_rows(make_invoice, client, settings, make_items, build_context) -> None:
    invoice = make_invoice(items=make_items(10))
    canvas = _render(build_context(invoice, client, settings))

    drawn = canvas.text_values()
    for index in range(1, 8):
        assert f"Item {index}" in drawn
    for index in range(8, 11):
        assert f"Item {index}" not in drawn
        assert f"{format_amount(index * 1000)} JPY" not in drawn


def test_custom_rows_format_prices_and_line_totals(make_invoice, client, settings, build_context) -> None:
    items = [InvoiceItem(description="Support hours", quantity=12.5, unit_price=4800)]
    canvas = _render(build_context(make_invoice(items=items, currency="USD"), client, settings))

    drawn = canvas.text_values()
    assert "12.5" in drawn
    assert "4,800 USD" in drawn
    assert "60,000 USD" in drawn


def test_right_aligned_values_end_at_column_edges(make_invoice, client, settings, build_context) -> None:
    items = [InvoiceItem(description="Design", quantity=2, unit_price=123456)]
    ctx = build_context(make_invoice(items=items, total=246912), client, settings)
    canvas = _render(ctx)
    table = renderer.table_geometry(ctx)

    unit = canvas.find_text("123,456 JPY")
    assert unit.x + pdfmetrics.stringWidth(unit.text, "Helvetica", 10) == pytest.approx(table.total_x - 5)

    due_date = canvas.find_text("DUE DATE: 2025-04-14")
    assert due_date.x + pdfmetrics.stringWidth(due_date.text, "Helvetica", 9) == pytest.approx(ctx.page_width - ctx.margin)


def test_long_description_is_truncated_with_ellipsis(make_invoice, client, settings, build_context) -> None:
    description = "Very long description " * 20
    items = [InvoiceItem(description=description, quantity=1, unit_price=1)]
    ctx = build_context(make_invoice(items=items), client, settings)
    canvas = _render(ctx)
    table = renderer.table_geometry(ctx)
    max_width = table.description_width - 20

    drawn = next(text for text in canvas.texts if text.text.startswith("Very long"))
    assert drawn.text.endswith("...")
    assert pdfmetrics.stringWidth(drawn.text, "Helvetica", 10) <= max_width


def test_truncate_text_keeps_fitting_text_verbatim() -> None:
    assert renderer.truncate_text("Short", "Helvetica", 10, 200) == "Short"


def test_truncate_text_drops_characters_until_ellipsis_fits() -> None:
    text = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    max_width = pdfmetrics.stringWidth("ABCDEFGHIJ", "Helvetica", 10)

    truncated = renderer.truncate_text(text, "Helvetica", 10, max_width)

    assert truncated.endswith("...")
    assert pdfmetrics.stringWidth(truncated, "Helvetica", 10) <= max_width
    longer = truncated[:-3] + text[len(truncated) - 3] + "..."
    assert pdfmetrics.stringWidth(longer, "Helvetica", 10) > max_width


def test_recurring_invoice_synthesizes_row_from_contract(make_invoice, client, settings, contract, build_context) -> None:
    # Stored total differs from quantity x unit price on purpose.
    invoice = make_invoice(total=280000)
    canvas = _render(build_context(invoice, client, settings, [contract]))

    drawn = canvas.text_values()
    assert "Development services for March 2025" in drawn
    assert "300,000 JPY" in drawn
    assert drawn.count("280,000 JPY") == 2  # line total and amount due


def test_recurring_invoice_without_contract_leaves_table_empty(make_invoice, client, settings, build_context) -> None:
    ctx = build_context(make_invoice(), client, settings)
    canvas = _render(ctx)
    table = renderer.table_geometry(ctx)

    rows = [text for text in canvas.texts if table.bottom < text.y < table.header_bottom]
    assert rows == []


def test_amount_due_uses_emphasis_color_and_box_spans_price_columns(
    make_invoice, client, settings, build_context
) -> None:
    ctx = build_context(make_invoice(total=1234567.5, currency="EUR"), client, settings)
    canvas = _render(ctx, "soft_accent")
    table = renderer.table_geometry(ctx)

    amount = canvas.find_text("1,234,567.5 EUR")
    assert amount.color is styles.resolve_style("soft_accent").emphasis_color
    box = next(stroke for stroke in canvas.strokes if stroke.kind == "rect" and stroke.coords[0] == table.unit_price_x)
    assert box.coords[2] == pytest.approx(table.right - table.unit_price_x)


def test_currency_note_expands_only_jpy(make_invoice, client, settings, build_context) -> None:
    jpy = _render(build_context(make_invoice(), client, settings)).text_values()
    usd = _render(build_context(make_invoice(currency="USD"), client, settings)).text_values()

    assert "All amounts in Japanese Yen (JPY)" in jpy
    assert "All amounts in USD" in usd


def test_remittance_skips_empty_fields_without_compacting(make_invoice, client, settings, build_context) -> None:
    full = _render(build_context(make_invoice(), client, settings))
    sparse_settings = settings.model_copy(update={"account_number": "", "bank_currency": ""})
    sparse = _render(build_context(make_invoice(currency="USD"), client, sparse_settings))

    assert "Account Number" not in sparse.text_values()
    assert sparse.find_text("SWIFT").y == full.find_text("SWIFT").y
    assert sparse.find_text(": USD").y == full.find_text(": JPY").y
    assert full.find_text("SWIFT").y == pytest.approx(full.find_text("Account Holder").y - 32)


def test_contact_line_only_with_issuer_email(make_invoice, client, settings, build_context) -> None:
    with_email = _render(build_context(make_invoice(), client, settings)).text_values()
    no_email = _render(build_context(make_invoice(), client, settings.model_copy(update={"email": ""}))).text_values()

    contact = "If you have any questions concerning this invoice, contact jane@freelancer.example.com"
    assert contact in with_email
    assert not any(text.startswith("If you have any questions") for text in no_email)


def test_address_blank_lines_are_skipped(make_invoice, client, settings, build_context) -> None:
    canvas = _render(build_context(make_invoice(), client, settings))

    street = canvas.find_text("456 Freelancer St")
    city = canvas.find_text("Osaka, Japan")
    assert street.y - city.y == pytest.approx(12)
    assert "" not in [text.text for text in canvas.texts if text.font == "Helvetica" and text.size == 9]


def test_bill_to_block_starts_at_fixed_offset(make_invoice, client, settings, build_context) -> None:
    tall_settings = settings.model_copy(update={"address": "\n".join(f"Line {n}" for n in range(12))})
    ctx = build_context(make_invoice(), client, tall_settings)
    canvas = _render(ctx)

    assert canvas.find_text("BILL TO:").y == ctx.page_height - 140


def test_footer_is_centered(make_invoice, client, settings, build_context) -> None:
    ctx = build_context(make_invoice(), client, settings)
    canvas = _render(ctx)

    footer = canvas.find_text("THANK YOU FOR YOUR BUSINESS!")
    width = pdfmetrics.stringWidth(footer.text, "Helvetica-Bold", 10)
    assert footer.y == 60
    assert footer.x + width / 2 == pytest.approx(ctx.page_width / 2)


def test_contract_description_uses_english_month_names() -> None:
    assert renderer.render_contract_description("{{month}}/{{year}} - {{month}}", "2024-12-01") == (
        "December/2024 - December"
    )
