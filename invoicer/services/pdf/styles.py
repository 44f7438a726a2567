"""Invoice template registry.

Every template shares one page layout; a template only chooses colours and the
grid stroke weight. Nothing positional may be added to :class:`InvoiceStyle`.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from reportlab.lib import colors


@dataclass(frozen=True)
class InvoiceStyle:
    text_color: colors.Color
    label_color: colors.Color
    emphasis_color: colors.Color
    accent_color: colors.Color
    border_color: colors.Color
    header_text_color: colors.Color
    line_width: float


@dataclass(frozen=True)
class InvoiceTemplate:
    key: str
    label: str
    description: str
    style: InvoiceStyle


BLACK = colors.Color(0, 0, 0)
DARK_GRAY = colors.Color(0.2, 0.2, 0.2)
GRAY = colors.Color(0.5, 0.5, 0.5)
LIGHT_GRAY = colors.Color(0.7, 0.7, 0.7)
SOFT_INDIGO = colors.Color(0.35, 0.35, 0.85)

DEFAULT_TEMPLATE = "default"

_TEMPLATES: tuple[InvoiceTemplate, ...] = (
    InvoiceTemplate(
        key="default",
        label="Default",
        description="Neutral monochrome look, the safe universal option",
        style=InvoiceStyle(
            text_color=BLACK,
            label_color=DARK_GRAY,
            emphasis_color=BLACK,
            accent_color=BLACK,
            border_color=LIGHT_GRAY,
            header_text_color=BLACK,
            line_width=0.5,
        ),
    ),
    InvoiceTemplate(
        key="clean",
        label="Clean",
        description="Modern, conservative with more white space",
        style=InvoiceStyle(
            text_color=DARK_GRAY,
            label_color=GRAY,
            emphasis_color=BLACK,
            accent_color=DARK_GRAY,
            border_color=colors.Color(0.85, 0.85, 0.85),
            header_text_color=DARK_GRAY,
            line_width=0.5,
        ),
    ),
    InvoiceTemplate(
        key="standard",
        label="Standard",
        description="Business & accounting friendly, structured",
        style=InvoiceStyle(
            text_color=BLACK,
            label_color=BLACK,
            emphasis_color=BLACK,
            accent_color=BLACK,
            border_color=GRAY,
            header_text_color=BLACK,
            line_width=1.0,
        ),
    ),
    InvoiceTemplate(
        key="classic",
        label="Classic",
        description="Traditional, timeless with strong grid",
        style=InvoiceStyle(
            text_color=BLACK,
            label_color=BLACK,
            emphasis_color=BLACK,
            accent_color=BLACK,
            border_color=BLACK,
            header_text_color=BLACK,
            line_width=1.0,
        ),
    ),
    InvoiceTemplate(
        key="soft_accent",
        label="Soft Accent",
        description="Modern premium with subtle indigo accents",
        style=InvoiceStyle(
            text_color=DARK_GRAY,
            label_color=GRAY,
            emphasis_color=SOFT_INDIGO,
            accent_color=SOFT_INDIGO,
            border_color=colors.Color(0.8, 0.8, 0.9),
            # Only template whose header row differs from the body text.
            header_text_color=SOFT_INDIGO,
            line_width=0.5,
        ),
    ),
)

INVOICE_TEMPLATES: Mapping[str, InvoiceTemplate] = MappingProxyType(
    {template.key: template for template in _TEMPLATES}
)


def resolve_template_id(value: str | None) -> str:
    if value and value in INVOICE_TEMPLATES:
        return value
    return DEFAULT_TEMPLATE


def resolve_style(value: str | None) -> InvoiceStyle:
    return INVOICE_TEMPLATES[resolve_template_id(value)].style


def invoice_template_entries() -> list[dict[str, str]]:
    return [
        {"key": template.key, "label": template.label, "description": template.description}
        for template in _TEMPLATES
    ]
