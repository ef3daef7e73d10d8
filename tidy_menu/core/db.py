"""Gestion basique des connexions SQLite."""
from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import ContextManager

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
OPTIONS_DB_PATH = DATA_DIR / "menu_options.db"

logger = logging.getLogger(__name__)

DATA_DIR.mkdir(parents=True, exist_ok=True)
logger.info("[DB] pid=%s OPTIONS_DB_PATH=%s", os.getpid(), OPTIONS_DB_PATH.resolve())

_db_lock = RLock()


def _connect(path: Path) -> sqlite3.Connection:
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


def get_options_connection(path: Path | None = None) -> ContextManager[sqlite3.Connection]:
    return _managed_connection(path or OPTIONS_DB_PATH)


def init_databases(path: Path | None = None) -> None:
    with _db_lock:
        with get_options_connection(path) as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS menu_options (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    updated_by TEXT
                );
                """
            )
