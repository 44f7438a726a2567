#!/usr/bin/env python3
"""Remove rotated invoicer log files beyond the configured retention."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from invoicer.core.config import app_config

DEFAULT_KEEP = 5

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger("purge-logs")


def rotated_files(log_dir: Path) -> list[Path]:
    """Return ``invoicer.log.N`` backups, newest first."""

    backups = [path for path in log_dir.glob("invoicer.log.*") if path.is_file()]
    return sorted(backups, key=lambda path: path.stat().st_mtime, reverse=True)


def purge(log_dir: Path, keep: int) -> list[Path]:
    deleted: list[Path] = []
    for path in rotated_files(log_dir)[keep:]:
        try:
            path.unlink()
        except PermissionError:
            logger.warning("Fichier de log verrouillé, ignoré : %s", path)
            continue
        deleted.append(path)
    return deleted


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Purge des journaux tournants d'invoicer")
    parser.add_argument("--log-dir", type=Path, default=app_config.LOG_DIR)
    parser.add_argument("--keep", type=int, default=DEFAULT_KEEP, help="Sauvegardes à conserver")
    args = parser.parse_args(argv)

    if not args.log_dir.exists():
        logger.info("Aucun dossier de logs : %s", args.log_dir)
        return 0
    deleted = purge(args.log_dir, max(args.keep, 0))
    logger.info("%s fichier(s) supprimé(s) dans %s", len(deleted), args.log_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
