"""Persistence services for clients, contracts, invoices and settings."""
from __future__ import annotations

import json
import logging
import sqlite3
import time
import uuid
from collections.abc import Iterable
from datetime import date

from invoicer.core import db
from invoicer.core.models import (
    Client,
    ClientCreate,
    Contract,
    ContractCreate,
    Invoice,
    InvoiceCreate,
    InvoiceItem,
    Settings,
    generate_invoice_number,
)

logger = logging.getLogger(__name__)

_CONTRACT_COLUMNS = (
    "client_id",
    "description_template",
    "unit_price",
    "currency",
    "quantity",
    "due_days",
    "due_date_method",
)
_INVOICE_COLUMNS = (
    "invoice_number",
    "client_id",
    "issue_date",
    "due_date",
    "total",
    "created_at",
    "items",
    "currency",
    "invoice_type",
    "contract_id",
)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _row_to_client(row: sqlite3.Row) -> Client:
    return Client(
        id=row["id"],
        company_name=row["company_name"],
        address=row["address"],
        email=row["email"],
    )


def _row_to_contract(row: sqlite3.Row) -> Contract:
    return Contract(id=row["id"], **{column: row[column] for column in _CONTRACT_COLUMNS})


def _row_to_invoice(row: sqlite3.Row) -> Invoice:
    values = {column: row[column] for column in _INVOICE_COLUMNS}
    raw_items = values.pop("items")
    items = None
    if raw_items is not None:
        items = [InvoiceItem.model_validate(entry) for entry in json.loads(raw_items)]
    return Invoice(id=row["id"], items=items, **values)


def _invoice_values(invoice: Invoice | InvoiceCreate) -> tuple[object, ...]:
    items = None
    if invoice.items is not None:
        items = json.dumps([item.model_dump() for item in invoice.items])
    return (
        invoice.invoice_number,
        invoice.client_id,
        invoice.issue_date,
        invoice.due_date,
        invoice.total,
        invoice.created_at,
        items,
        invoice.currency,
        invoice.invoice_type,
        invoice.contract_id,
    )


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


def _assignments(columns: Iterable[str]) -> str:
    return ", ".join(f"{column} = ?" for column in columns)


# --- Clients -----------------------------------------------------------------


def list_clients() -> list[Client]:
    with db.get_connection() as conn:
        rows = conn.execute("SELECT * FROM clients ORDER BY company_name COLLATE NOCASE").fetchall()
    return [_row_to_client(row) for row in rows]


def get_client(client_id: str) -> Client | None:
    with db.get_connection() as conn:
        row = conn.execute("SELECT * FROM clients WHERE id = ?", (client_id,)).fetchone()
    return _row_to_client(row) if row else None


def create_client(payload: ClientCreate) -> Client:
    client = Client(id=_new_id(), **payload.model_dump())
    with db.get_connection() as conn:
        conn.execute(
            "INSERT INTO clients (id, company_name, address, email) VALUES (?, ?, ?, ?)",
            (client.id, client.company_name, client.address, client.email),
        )
    return client


def update_client(client: Client) -> Client:
    with db.get_connection() as conn:
        cursor = conn.execute(
            "UPDATE clients SET company_name = ?, address = ?, email = ? WHERE id = ?",
            (client.company_name, client.address, client.email, client.id),
        )
        if cursor.rowcount == 0:
            raise ValueError(f"Client introuvable: {client.id}")
    return client


def delete_client(client_id: str) -> None:
    with db.get_connection() as conn:
        conn.execute("DELETE FROM clients WHERE id = ?", (client_id,))


# --- Contracts ---------------------------------------------------------------


def list_contracts() -> list[Contract]:
    with db.get_connection() as conn:
        rows = conn.execute("SELECT * FROM contracts ORDER BY rowid").fetchall()
    return [_row_to_contract(row) for row in rows]


def get_contract(contract_id: str) -> Contract | None:
    with db.get_connection() as conn:
        row = conn.execute("SELECT * FROM contracts WHERE id = ?", (contract_id,)).fetchone()
    return _row_to_contract(row) if row else None


def get_contracts_by_client_id(client_id: str) -> list[Contract]:
    with db.get_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM contracts WHERE client_id = ? ORDER BY rowid",
            (client_id,),
        ).fetchall()
    return [_row_to_contract(row) for row in rows]


def create_contract(payload: ContractCreate) -> Contract:
    contract = Contract(id=_new_id(), **payload.model_dump())
    values = tuple(getattr(contract, column) for column in _CONTRACT_COLUMNS)
    with db.get_connection() as conn:
        conn.execute(
            f"INSERT INTO contracts (id, {', '.join(_CONTRACT_COLUMNS)}) "
            f"VALUES ({_placeholders(len(_CONTRACT_COLUMNS) + 1)})",
            (contract.id, *values),
        )
    return contract


def update_contract(contract: Contract) -> Contract:
    values = tuple(getattr(contract, column) for column in _CONTRACT_COLUMNS)
    with db.get_connection() as conn:
        cursor = conn.execute(
            f"UPDATE contracts SET {_assignments(_CONTRACT_COLUMNS)} WHERE id = ?",
            (*values, contract.id),
        )
        if cursor.rowcount == 0:
            raise ValueError(f"Contrat introuvable: {contract.id}")
    return contract


def delete_contract(contract_id: str) -> None:
    with db.get_connection() as conn:
        conn.execute("DELETE FROM contracts WHERE id = ?", (contract_id,))


# --- Invoices ----------------------------------------------------------------


def list_invoices() -> list[Invoice]:
    with db.get_connection() as conn:
        rows = conn.execute("SELECT * FROM invoices ORDER BY issue_date DESC, rowid DESC").fetchall()
    return [_row_to_invoice(row) for row in rows]


def get_invoice(invoice_id: str) -> Invoice | None:
    with db.get_connection() as conn:
        row = conn.execute("SELECT * FROM invoices WHERE id = ?", (invoice_id,)).fetchone()
    return _row_to_invoice(row) if row else None


def get_invoices_by_client_id(client_id: str) -> list[Invoice]:
    with db.get_connection() as conn:
        rows = conn.execute(
            "SELECT * FROM invoices WHERE client_id = ? ORDER BY rowid",
            (client_id,),
        ).fetchall()
    return [_row_to_invoice(row) for row in rows]


def create_invoice(payload: InvoiceCreate) -> Invoice:
    values = payload.model_dump()
    if not values["invoice_number"]:
        issue_date = date.fromisoformat(payload.issue_date.strip()[:10])
        values["invoice_number"] = generate_invoice_number(issue_date, _now_ms())
    invoice = Invoice(id=_new_id(), **values)
    with db.get_connection() as conn:
        conn.execute(
            f"INSERT INTO invoices (id, {', '.join(_INVOICE_COLUMNS)}) "
            f"VALUES ({_placeholders(len(_INVOICE_COLUMNS) + 1)})",
            (invoice.id, *_invoice_values(invoice)),
        )
    return invoice


def update_invoice(invoice: Invoice) -> Invoice:
    with db.get_connection() as conn:
        cursor = conn.execute(
            f"UPDATE invoices SET {_assignments(_INVOICE_COLUMNS)} WHERE id = ?",
            (*_invoice_values(invoice), invoice.id),
        )
        if cursor.rowcount == 0:
            raise ValueError(f"Facture introuvable: {invoice.id}")
    return invoice


def delete_invoice(invoice_id: str) -> None:
    with db.get_connection() as conn:
        conn.execute("DELETE FROM invoices WHERE id = ?", (invoice_id,))


# --- Settings ----------------------------------------------------------------


def get_settings() -> Settings | None:
    with db.get_connection() as conn:
        row = conn.execute("SELECT payload FROM settings WHERE id = 1").fetchone()
    if row is None:
        return None
    return Settings.model_validate_json(row["payload"])


def save_settings(settings: Settings) -> Settings:
    with db.get_connection() as conn:
        conn.execute(
            """
            INSERT INTO settings (id, payload) VALUES (1, ?)
            ON CONFLICT(id) DO UPDATE SET payload = excluded.payload
            """,
            (settings.model_dump_json(),),
        )
    logger.info("[SETTINGS] saved (template=%s)", settings.invoice_template)
    return settings


# --- Contract lookups --------------------------------------------------------


class SqliteContractLookup:
    """Contract lookup backed by the application database."""

    def get_contract_by_id(self, contract_id: str) -> Contract | None:
        return get_contract(contract_id)

    def get_contracts_by_client_id(self, client_id: str) -> list[Contract]:
        return get_contracts_by_client_id(client_id)


class InMemoryContractLookup:
    """Contract lookup over a fixed collection, kept in the given order."""

    def __init__(self, contracts: Iterable[Contract] = ()) -> None:
        self._contracts = tuple(contracts)

    def get_contract_by_id(self, contract_id: str) -> Contract | None:
        return next((contract for contract in self._contracts if contract.id == contract_id), None)

    def get_contracts_by_client_id(self, client_id: str) -> list[Contract]:
        return [contract for contract in self._contracts if contract.client_id == client_id]
