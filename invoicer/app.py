"""Application FastAPI principale du générateur de factures."""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from invoicer.api import invoices
from invoicer.core.db import init_database
from invoicer.core.logging_config import configure_logging

configure_logging()


@asynccontextmanager
async def _lifespan(_: FastAPI):
    init_database()
    yield


app = FastAPI(title="Invoicer API", version="1.0.0", lifespan=_lifespan)

app.include_router(invoices.router, prefix="/invoices", tags=["invoices"])


@app.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Renvoie l'état de santé générique du service."""
    return {"status": "ok"}
