import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from invoicer.core.models import Client, Contract, Invoice, InvoiceItem, Settings
from invoicer.core.services import InMemoryContractLookup
from invoicer.services.pdf.context import build_render_context
from invoicer.services.pdf.document import MARGIN, PAGE_SIZE


@dataclass(frozen=True)
class DrawnText:
    text: str
    x: float
    y: float
    font: str
    size: float
    color: object


@dataclass(frozen=True)
class DrawnStroke:
    kind: str
    coords: tuple[float, ...]
    width: float
    color: object


class RecordingCanvas:
    """Collects the drawing calls the invoice renderer makes."""

    def __init__(self) -> None:
        self.texts: list[DrawnText] = []
        self.strokes: list[DrawnStroke] = []
        self._font: tuple[str, float] = ("Helvetica", 12)
        self._fill = None
        self._stroke = None
        self._line_width = 1.0

    def setFont(self, name: str, size: float) -> None:
        self._font = (name, size)

    def setFillColor(self, color) -> None:
        self._fill = color

    def setStrokeColor(self, color) -> None:
        self._stroke = color

    def setLineWidth(self, width: float) -> None:
        self._line_width = width

    def drawString(self, x: float, y: float, text: str) -> None:
        self.texts.append(DrawnText(text, x, y, self._font[0], self._font[1], self._fill))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.strokes.append(DrawnStroke("line", (x1, y1, x2, y2), self._line_width, self._stroke))

    def rect(self, x: float, y: float, width: float, height: float, stroke: int = 1, fill: int = 0) -> None:
        self.strokes.append(DrawnStroke("rect", (x, y, width, height), self._line_width, self._stroke))

    def text_values(self) -> list[str]:
        return [entry.text for entry in self.texts]

    def find_text(self, text: str) -> DrawnText:
        return next(entry for entry in self.texts if entry.text == text)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        freelancer_name="Jane Smith",
        address="456 Freelancer St\n\nOsaka, Japan",
        email="jane@freelancer.example.com",
        bank_name="Sample Bank",
        account_holder="Jane Smith",
        account_number="****1234",
        swift="SAMPLEXX",
        bank_country="Japan",
        bank_currency="JPY",
    )


@pytest.fixture
def client() -> Client:
    return Client(
        id="client-1",
        company_name="Acme Corporation",
        address="123 Business Ave\nTokyo, Japan",
        email="billing@acme.example.com",
    )


@pytest.fixture
def contract() -> Contract:
    return Contract(
        id="contract-1",
        client_id="client-1",
        description_template="Development services for {{month}} {{year}}",
        unit_price=300000,
        currency="JPY",
        quantity=1,
        due_days=45,
        due_date_method="days",
    )


@pytest.fixture
def make_invoice():
    def _make(**overrides) -> Invoice:
        values = {
            "id": "invoice-1",
            "invoice_number": "INV-2025-03-1741000012345",
            "client_id": "client-1",
            "issue_date": "2025-03-15",
            "due_date": "2025-04-14",
            "total": 300000,
            "created_at": "2025-03-15T00:00:00.000Z",
        }
        values.update(overrides)
        return Invoice(**values)

    return _make


@pytest.fixture
def make_items():
    def _make(count: int, *, unit_price: float = 1000) -> list[InvoiceItem]:
        return [
            InvoiceItem(description=f"Item {index}", quantity=index, unit_price=unit_price)
            for index in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def build_context():
    def _build(invoice, client, settings, contracts=(), canvas=None):
        return asyncio.run(
            build_render_context(
                canvas if canvas is not None else RecordingCanvas(),
                invoice,
                client,
                settings,
                InMemoryContractLookup(contracts),
                page_size=PAGE_SIZE,
                margin=MARGIN,
            )
        )

    return _build


@pytest.fixture
def recording_canvas() -> RecordingCanvas:
    return RecordingCanvas()
