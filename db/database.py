import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from config import get_config_value
from .schema import SCHEMA_SQL, INDEXES_SQL, SCHEMA_VERSION

logger = logging.getLogger(__name__)

# Overrides the configured path when set (tests point this at tmp_path).
DB_PATH: Optional[Path] = None


def get_db_path() -> Path:
    """Return the SQLite file location: DB_PATH if set, else [database] path from config."""
    if DB_PATH is not None:
        return Path(DB_PATH)
    return Path(get_config_value("database", "path")).expanduser()


def init_db(db_path: Optional[Union[str, Path]] = None) -> None:
    """Create tables and indexes if they don't exist."""
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with get_conn(path) as conn:
        conn.executescript(SCHEMA_SQL)
        conn.executescript(INDEXES_SQL)
        ensure_schema_version(conn)
        conn.commit()
    logger.info("Database ready at %s", path)


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the SQLite schema version from PRAGMA user_version."""
    cursor = conn.cursor()
    cursor.execute("PRAGMA user_version")
    row = cursor.fetchone()
    return int(row[0]) if row else 0


def ensure_schema_version(conn: sqlite3.Connection) -> None:
    if get_schema_version(conn) != SCHEMA_VERSION:
        conn.execute(f"PRAGMA user_version = {int(SCHEMA_VERSION)}")


def count_surahs(conn: sqlite3.Connection) -> int:
    cursor = conn.cursor()
    cursor.execute("SELECT COUNT(*) FROM surahs")
    return int((cursor.fetchone() or [0])[0])


@contextmanager
def get_conn(db_path: Optional[Union[str, Path]] = None):
    """Context manager for SQLite connection, using row_factory for dict-like rows."""
    path = Path(db_path) if db_path else get_db_path()
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()


def get_db():
    """FastAPI dependency that yields a DB connection and closes it afterwards."""
    with get_conn() as conn:
        yield conn
