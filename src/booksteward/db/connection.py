# ABOUTME: SQLite database connection management for the BookSteward library catalog.
# ABOUTME: Opens or creates the database, applies schema and migrations.

import logging
import sqlite3
from pathlib import Path

from booksteward.db.schema import MIGRATIONS, SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".booksteward" / "library.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply pending schema migrations sequentially.

    No-op if the database is already at the latest version.
    """
    current = get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            logger.debug("Applying schema migration to version %d", version)
            conn.executescript(sql)


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the BookSteward library database.

    Creates the database file and parent directories if they don't exist.
    Applies the schema on first creation, then any pending migrations. Sets
    WAL journal mode, foreign keys, and the sqlite3.Row factory.

    Args:
        path: Path to the database file. Defaults to ~/.booksteward/library.db.

    Returns:
        A configured sqlite3.Connection.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")

    if not _schema_exists(conn):
        logger.debug("Creating library schema at %s", db_path)
        conn.executescript(SCHEMA_V1)

    _apply_migrations(conn)

    return conn
