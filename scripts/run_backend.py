#!/usr/bin/env python3
"""Launch the invoicer FastAPI app with uvicorn for local development."""
from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
LOGGER = logging.getLogger(__name__)

logging.basicConfig(level=logging.INFO, format="%(message)s")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lance l'API de factures en mode développement",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port sur lequel exposer l'API (défaut: 8000)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Adresse d'écoute d'uvicorn (défaut: 127.0.0.1)",
    )
    parser.add_argument(
        "--skip-tests",
        action="store_true",
        help="Ne pas exécuter pytest avant le lancement",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    if not args.skip_tests:
        LOGGER.info("➡️  Exécution des tests")
        subprocess.run([sys.executable, "-m", "pytest", "-q"], cwd=str(ROOT_DIR), check=True)

    command = [
        sys.executable,
        "-m",
        "uvicorn",
        "invoicer.app:app",
        "--reload",
        "--host",
        args.host,
        "--port",
        str(args.port),
    ]
    LOGGER.info("➡️  Lancement de l'API : %s", " ".join(command))

    process = subprocess.Popen(command, cwd=str(ROOT_DIR))
    try:
        return process.wait()
    except KeyboardInterrupt:
        LOGGER.info("⏹️  Arrêt de l'API...")
        process.terminate()
        try:
            return process.wait(timeout=10)
        except subprocess.TimeoutExpired:
            process.kill()
            return process.wait()


if __name__ == "__main__":
    raise SystemExit(main())
