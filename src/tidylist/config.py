# src/tidylist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TIDYLIST"

STORAGE_BACKENDS = ("sqlite", "file", "memory")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    """Load .env from the working directory; real env vars win."""
    load_dotenv(override=False)


_load_dotenv()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = (os.getenv(name) or "").strip().lower()
    return raw if raw in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    storage_backend: str
    storage_key: str
    strict_load: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path
    files_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tidylist").strip() or "tidylist"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        storage_backend = _env_choice(_k("STORAGE_BACKEND"), STORAGE_BACKENDS, "sqlite")
        storage_key = _env(_k("STORAGE_KEY"), "todo_items").strip() or "todo_items"
        strict_load = _env_bool(_k("STRICT_LOAD"), False)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tidylist"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "tidylist.sqlite3")
        files_dir = _env_path(_k("FILES_DIR"), data_dir / "slots")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            storage_backend=storage_backend,
            storage_key=storage_key,
            strict_load=strict_load,
            data_dir=data_dir,
            db_path=db_path,
            files_dir=files_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
