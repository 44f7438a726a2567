from __future__ import annotations

import logging
import logging.config
from collections.abc import Iterable
from pathlib import Path

from invoicer.core.config import app_config

LOG_DIR = app_config.LOG_DIR


class AccessPathExcludeFilter(logging.Filter):
    """Drop uvicorn access lines for noisy paths such as health probes."""

    def __init__(self, paths: Iterable[str] = ()) -> None:
        super().__init__()
        self.paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2]).split("?", 1)[0]
            if path in self.paths:
                return False
        return True


def configure_logging(log_dir: Path | None = None) -> None:
    """Configure application-wide logging with a rotating file handler."""

    target_dir = log_dir or LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    logging.captureWarnings(True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "filters": {
            "exclude_health": {
                "()": AccessPathExcludeFilter,
                "paths": ["/health"],
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if app_config.DEBUG else "INFO",
                "formatter": "verbose",
            },
            "app_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "verbose",
                "filename": str(target_dir / "invoicer.log"),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 5,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console", "app_file"],
                "level": "DEBUG",
            },
            "uvicorn": {
                "handlers": ["console", "app_file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console", "app_file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console", "app_file"],
                "filters": ["exclude_health"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)


__all__ = ["AccessPathExcludeFilter", "configure_logging", "LOG_DIR"]
