"""Key-value persistence.

Everything the dashboard saves (user data, settings, task files, gold price
history) goes through the small interface below. Values are JSON documents
and keys come back in the order they were first written.
"""
import datetime as dt
import json
from abc import ABC, abstractmethod
from typing import Any, Optional

import streamlit as st
from sqlalchemy import text

from utils.log import get_logger
from .database import create_tables, get_engine, with_sqlite_retry

logger = get_logger(__name__)


class StorageError(Exception):
    """A stored value could not be read back."""


class KeyValueStore(ABC):
    """Interface for saving and loading named JSON documents."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the decoded value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Create or replace a value. Replacing keeps the key's position."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""

    @abstractmethod
    def list_keys(self, prefix: str = "") -> list[str]:
        """Keys in first-insertion order, optionally filtered by prefix."""


def _encode(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("stored_value_corrupt", key=key, error=str(e))
        raise StorageError(f"Stored value for {key!r} is not valid JSON") from e


class MemoryStore(KeyValueStore):
    """Dict-backed store. Values are kept encoded so callers never share state."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return None if raw is None else _decode(key, raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = _encode(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def list_keys(self, prefix: str = "") -> list[str]:
        return [k for k in self._data if k.startswith(prefix)]


class SqlStore(KeyValueStore):
    """Store backed by the kv_store table."""

    def __init__(self, engine):
        self._engine = engine
        create_tables(engine)

    def get(self, key: str) -> Optional[Any]:
        with self._engine.begin() as conn:
            row = conn.execute(
                text("SELECT value FROM kv_store WHERE key = :key;"),
                {"key": key},
            ).mappings().first()
        if not row:
            return None
        return _decode(key, row["value"])

    def set(self, key: str, value: Any) -> None:
        now = dt.datetime.now().isoformat()
        payload = _encode(value)

        def _op():
            with self._engine.begin() as conn:
                conn.execute(
                    text(
                        """
                        INSERT INTO kv_store (key, value, created_at, updated_at)
                        VALUES (:key, :value, :now, :now)
                        ON CONFLICT(key) DO UPDATE
                           SET value = excluded.value,
                               updated_at = excluded.updated_at;
                        """
                    ),
                    {"key": key, "value": payload, "now": now},
                )

        with_sqlite_retry(_op)

    def delete(self, key: str) -> None:
        def _op():
            with self._engine.begin() as conn:
                conn.execute(text("DELETE FROM kv_store WHERE key = :key;"), {"key": key})

        with_sqlite_retry(_op)

    def list_keys(self, prefix: str = "") -> list[str]:
        with self._engine.begin() as conn:
            rows = conn.execute(
                text(
                    """
                    SELECT key
                    FROM kv_store
                    WHERE substr(key, 1, :n) = :prefix
                    ORDER BY id ASC;
                    """
                ),
                {"prefix": prefix, "n": len(prefix)},
            ).mappings().all()
        return [str(r["key"]) for r in rows]


@st.cache_resource
def get_store() -> KeyValueStore:
    """Process-wide store on the configured database."""
    return SqlStore(get_engine())
