from dataclasses import fields

import pytest

from invoicer.services.pdf import styles


def test_registry_exposes_five_templates_in_order() -> None:
    keys = [entry["key"] for entry in styles.invoice_template_entries()]

    assert keys == ["default", "clean", "standard", "classic", "soft_accent"]
    assert all(entry["label"] and entry["description"] for entry in styles.invoice_template_entries())


def test_unknown_style_falls_back_to_default() -> None:
    default_style = styles.resolve_style("default")

    assert styles.resolve_style("nonexistent") is default_style
    assert styles.resolve_style(None) is default_style
    assert styles.resolve_style("") is default_style
    assert styles.resolve_template_id("modern_clean") == styles.DEFAULT_TEMPLATE


def test_known_style_resolves_to_its_configuration() -> None:
    assert styles.resolve_style("classic") is styles.INVOICE_TEMPLATES["classic"].style
    assert styles.resolve_template_id("soft_accent") == "soft_accent"


def test_styles_only_carry_colors_and_stroke_weight() -> None:
    names = {field.name for field in fields(styles.InvoiceStyle)}

    assert names == {
        "text_color",
        "label_color",
        "emphasis_color",
        "accent_color",
        "border_color",
        "header_text_color",
        "line_width",
    }


def test_only_soft_accent_header_differs_from_body_text() -> None:
    diverging = [
        key
        for key, template in styles.INVOICE_TEMPLATES.items()
        if template.style.header_text_color.rgb() != template.style.text_color.rgb()
    ]

    assert diverging == ["soft_accent"]


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        styles.INVOICE_TEMPLATES["custom"] = styles.INVOICE_TEMPLATES["default"]  # type: ignore[index]
