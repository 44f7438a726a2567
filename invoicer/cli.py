"""Ligne de commande du générateur de factures.

Permet de lister les modèles, d'exporter leurs aperçus et de rendre une
facture enregistrée sans lancer le serveur HTTP.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from invoicer.core import services
from invoicer.core.db import init_database
from invoicer.services.pdf import (
    INVOICE_TEMPLATES,
    GeneratedInvoicePdf,
    generate_invoice_pdf,
    invoice_template_entries,
    render_template_preview,
    resolve_template_id,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="invoicer-render", description="Rendu PDF des factures")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("templates", help="Liste les modèles de facture disponibles")

    preview = subparsers.add_parser("preview", help="Exporte l'aperçu d'un ou de tous les modèles")
    preview.add_argument("--template", help="Identifiant du modèle (défaut: tous)")
    preview.add_argument("--output", type=Path, default=Path("."), help="Dossier de destination")

    render = subparsers.add_parser("render", help="Rend une facture enregistrée")
    render.add_argument("invoice_id")
    render.add_argument("--template", help="Modèle à utiliser à la place de celui des paramètres")
    render.add_argument("--output", type=Path, default=Path("."), help="Dossier de destination")
    return parser


def _write(generated: GeneratedInvoicePdf, output_dir: Path, name: str | None = None) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / (name or generated.filename)
    target.write_bytes(generated.pdf_bytes)
    print(target)
    return target


def _export_previews(template_id: str | None, output_dir: Path) -> int:
    template_ids = [resolve_template_id(template_id)] if template_id else list(INVOICE_TEMPLATES)
    for key in template_ids:
        generated = asyncio.run(render_template_preview(key))
        # Every preview shares the sample invoice filename.
        _write(generated, output_dir, f"preview-{key}.pdf")
    return 0


def _render_invoice(invoice_id: str, template_id: str | None, output_dir: Path) -> int:
    init_database()
    invoice = services.get_invoice(invoice_id)
    if invoice is None:
        print(f"Facture introuvable : {invoice_id}", file=sys.stderr)
        return 1
    client = services.get_client(invoice.client_id)
    if client is None:
        print(f"Client introuvable : {invoice.client_id}", file=sys.stderr)
        return 1
    settings = services.get_settings()
    if settings is None:
        print("Paramètres manquants : enregistrez-les avant de générer une facture.", file=sys.stderr)
        return 1

    generated = asyncio.run(
        generate_invoice_pdf(
            invoice,
            client,
            settings,
            contracts=services.SqliteContractLookup(),
            style_override=template_id,
        )
    )
    _write(generated, output_dir)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(sys.argv[1:] if argv is None else list(argv))
    logger.debug("Commande %s", args.command)

    if args.command == "templates":
        for entry in invoice_template_entries():
            print(f"{entry['key']:<14}{entry['label']:<16}{entry['description']}")
        return 0
    if args.command == "preview":
        return _export_previews(args.template, args.output)
    return _render_invoice(args.invoice_id, args.template, args.output)


if __name__ == "__main__":
    raise SystemExit(main())
