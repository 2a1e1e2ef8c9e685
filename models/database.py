"""Database connection and initialization."""
import os
import time
from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import OperationalError
import streamlit as st


def _database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///pennywise.db")


def build_engine(url: str):
    """Create a SQLAlchemy engine with SQLite optimizations."""
    is_sqlite = url.startswith("sqlite")
    engine = create_engine(
        url,
        future=True,
        connect_args={"check_same_thread": False, "timeout": 30} if is_sqlite else {},
    )

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA synchronous=NORMAL;")
            cursor.execute("PRAGMA busy_timeout=5000;")
            cursor.close()

    return engine


@st.cache_resource
def get_engine():
    """Get the process-wide engine."""
    return build_engine(_database_url())


def with_sqlite_retry(fn, retries: int = 6, base_sleep_s: float = 0.08):
    """Retry wrapper for SQLite operations that may encounter locks."""
    last_exc: Exception | None = None
    for attempt in range(retries):
        try:
            return fn()
        except OperationalError as e:
            msg = str(e).lower()
            if "database is locked" not in msg and "database locked" not in msg:
                raise
            last_exc = e
            time.sleep(base_sleep_s * (attempt + 1))
    if last_exc:
        raise last_exc
    raise RuntimeError("SQLite retry failed")


def create_tables(engine) -> None:
    """Create the key-value table if it does not exist."""
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    key TEXT NOT NULL UNIQUE,
                    value TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
        )


def init_db() -> None:
    """Initialize database tables."""
    create_tables(get_engine())


def reset_all_data() -> None:
    """Delete every stored key."""
    engine = get_engine()
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM kv_store;"))
