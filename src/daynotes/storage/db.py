"""SQLite database connection and initialization."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from daynotes.core.config import DATABASE_PATH

logger = logging.getLogger(__name__)

# Generic key-value table; notes share it with any other persisted data
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def connect(db_path: Path | str | None = None) -> sqlite3.Connection:
    """
    Open a connection with row factory and pragmas applied.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)
    """
    path = Path(db_path) if db_path else DATABASE_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # Enable WAL mode for better concurrent access
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA synchronous=NORMAL")
    return conn


def init_db(db_path: Path | str | None = None) -> None:
    """
    Initialize database with schema.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)
    """
    with get_connection(db_path) as conn:
        conn.executescript(SCHEMA_SQL)
    logger.debug("Schema ready at %s", db_path or DATABASE_PATH)


@contextmanager
def get_connection(
    db_path: Path | str | None = None,
) -> Generator[sqlite3.Connection, None, None]:
    """
    Get a short-lived database connection.

    Commits on success and rolls back if the block raises.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)

    Yields:
        SQLite connection with row factory enabled
    """
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
