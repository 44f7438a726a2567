"""Gestion basique des connexions SQLite."""
from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock

from invoicer.core.config import app_config

DATA_DIR = app_config.DATA_DIR
INVOICES_DB_PATH = DATA_DIR / "invoices.db"

logger = logging.getLogger(__name__)

_db_lock = RLock()

_SCHEMA = """
CREATE TABLE IF NOT EXISTS clients (
    id TEXT PRIMARY KEY,
    company_name TEXT NOT NULL,
    address TEXT NOT NULL DEFAULT '',
    email TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS contracts (
    id TEXT PRIMARY KEY,
    client_id TEXT NOT NULL,
    description_template TEXT NOT NULL DEFAULT '',
    unit_price REAL NOT NULL DEFAULT 0,
    currency TEXT NOT NULL DEFAULT 'JPY',
    quantity REAL NOT NULL DEFAULT 1,
    due_days INTEGER NOT NULL DEFAULT 30,
    due_date_method TEXT NOT NULL DEFAULT 'days'
);
CREATE INDEX IF NOT EXISTS idx_contracts_client ON contracts(client_id);
CREATE TABLE IF NOT EXISTS invoices (
    id TEXT PRIMARY KEY,
    invoice_number TEXT NOT NULL,
    client_id TEXT NOT NULL,
    issue_date TEXT NOT NULL,
    due_date TEXT NOT NULL,
    total REAL NOT NULL,
    created_at TEXT NOT NULL DEFAULT '',
    items TEXT,
    currency TEXT,
    invoice_type TEXT,
    contract_id TEXT
);
CREATE INDEX IF NOT EXISTS idx_invoices_client ON invoices(client_id);
CREATE INDEX IF NOT EXISTS idx_invoices_issue_date ON invoices(issue_date);
CREATE TABLE IF NOT EXISTS settings (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    payload TEXT NOT NULL
);
"""


def _connect(path: Path) -> sqlite3.Connection:
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def _managed_connection(path: Path) -> Iterator[sqlite3.Connection]:
    """Yield a SQLite connection that is always closed on exit."""

    conn = _connect(path)
    try:
        yield conn
        conn.commit()
    except Exception:
        if conn.in_transaction:
            conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def get_connection() -> Iterator[sqlite3.Connection]:
    # Module attribute read at call time so tests can point it elsewhere.
    with _managed_connection(INVOICES_DB_PATH) as conn:
        yield conn


def init_database() -> None:
    with _db_lock:
        with get_connection() as conn:
            conn.executescript(_SCHEMA)
    logger.info("[DB] schema ready at %s", INVOICES_DB_PATH)
