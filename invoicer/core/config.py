"""Configuration statique de l'application."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from invoicer.core.env_loader import load_env

_TRUE_VALUES = {"1", "true", "yes", "on", "y", "t"}
_FALSE_VALUES = {"0", "false", "no", "off", "n", "f"}

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _get_env_flag(name: str, default: bool = False) -> bool:
    """Retourne une valeur booléenne à partir d'une variable d'environnement."""

    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return Path(value.strip()).expanduser()


@dataclass(frozen=True)
class AppConfig:
    """Paramètres globaux lus depuis l'environnement."""

    DEBUG: bool = False
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOG_DIR: Path = PROJECT_ROOT / "logs"


def load_config() -> AppConfig:
    load_env()
    return AppConfig(
        DEBUG=_get_env_flag("INVOICER_DEBUG", default=False),
        DATA_DIR=_get_env_path("INVOICER_DATA_DIR", PROJECT_ROOT / "data"),
        LOG_DIR=_get_env_path("INVOICER_LOG_DIR", PROJECT_ROOT / "logs"),
    )


app_config = load_config()
