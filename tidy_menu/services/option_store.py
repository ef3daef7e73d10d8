"""Stockage clé/valeur des documents de configuration du menu."""
from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any, Protocol

from tidy_menu.core import db

logger = logging.getLogger(__name__)


class OptionStore(Protocol):
    def get(self, key: str) -> dict[str, Any] | None:
        ...

    def set(self, key: str, value: dict[str, Any], updated_by: str | None = None) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def delete_prefix(self, prefix: str) -> int:
        ...


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqliteOptionStore:
    """Options persistées dans la table ``menu_options``.

    Chaque écriture porte sur une seule clé, SQLite garantit son atomicité.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        db.init_databases(path)

    def get(self, key: str) -> dict[str, Any] | None:
        with db.get_options_connection(self._path) as conn:
            row = conn.execute(
                "SELECT value FROM menu_options WHERE key = ?",
                (key,),
            ).fetchone()
        if not row:
            return None
        try:
            parsed = json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning("Invalid JSON stored for menu option %s", key)
            return None
        if isinstance(parsed, dict):
            return parsed
        logger.warning("Unexpected payload type stored for menu option %s", key)
        return None

    def set(self, key: str, value: dict[str, Any], updated_by: str | None = None) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        with db.get_options_connection(self._path) as conn:
            conn.execute(
                """
                INSERT INTO menu_options (key, value, updated_at, updated_by)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at,
                    updated_by = excluded.updated_by
                """,
                (key, payload, _utc_now_iso(), updated_by),
            )

    def delete(self, key: str) -> None:
        with db.get_options_connection(self._path) as conn:
            conn.execute("DELETE FROM menu_options WHERE key = ?", (key,))

    def delete_prefix(self, prefix: str) -> int:
        with db.get_options_connection(self._path) as conn:
            cursor = conn.execute(
                "DELETE FROM menu_options WHERE key LIKE ? ESCAPE '\\'",
                (f"{_escape_like(prefix)}%",),
            )
            return cursor.rowcount

    def keys(self) -> list[str]:
        with db.get_options_connection(self._path) as conn:
            rows = conn.execute("SELECT key FROM menu_options ORDER BY key").fetchall()
        return [row["key"] for row in rows]


class MemoryOptionStore:
    """Stockage en mémoire pour les hôtes qui gèrent eux-mêmes la persistance."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        raw = self._values.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: dict[str, Any], updated_by: str | None = None) -> None:
        self._values[key] = json.dumps(value, ensure_ascii=False)

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def delete_prefix(self, prefix: str) -> int:
        doomed = [key for key in self._values if key.startswith(prefix)]
        for key in doomed:
            del self._values[key]
        return len(doomed)

    def keys(self) -> list[str]:
        return sorted(self._values)


__all__ = ["MemoryOptionStore", "OptionStore", "SqliteOptionStore"]
