from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

DEFAULT_STORE_PATH = "data/patientlog_store.json"
DEFAULT_LOG_LEVEL = "INFO"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def load_dotenv(path: Optional[Path] = None) -> dict[str, str]:
    """Copy values from a .env file into the environment without overriding.

    Returns the variables that were actually set.
    """
    env_path = path or Path(".env")
    if not env_path.is_file():
        return {}
    loaded: dict[str, str] = {}
    for key, value in dotenv_values(env_path).items():
        if value is None or key in os.environ:
            continue
        os.environ[key] = value
        loaded[key] = value
    return loaded


@dataclass(frozen=True)
class Settings:
    store_path: Path
    log_level: str


def load_settings(env_path: Optional[Path] = None) -> Settings:
    load_dotenv(env_path)
    store_path = os.getenv("PATIENTLOG_STORE_PATH") or DEFAULT_STORE_PATH
    log_level = (os.getenv("PATIENTLOG_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    return Settings(store_path=Path(store_path), log_level=log_level)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=_LOG_FORMAT)


__all__ = [
    "DEFAULT_STORE_PATH",
    "DEFAULT_LOG_LEVEL",
    "Settings",
    "load_dotenv",
    "load_settings",
    "configure_logging",
]
