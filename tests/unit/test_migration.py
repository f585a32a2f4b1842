# ABOUTME: Unit tests for the schema migration runner.
# ABOUTME: Validates that migrations apply sequentially and are idempotent.

import sqlite3
from pathlib import Path

import pytest

from booksteward.db.connection import _apply_migrations, get_schema_version, open_library
from booksteward.db.schema import MIGRATIONS, SCHEMA_V1


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test_migration.db"


class TestMigrations:
    """Tests for the migration runner."""

    def test_fresh_db_has_latest_version(self, db_path: Path) -> None:
        conn = open_library(db_path)
        version = get_schema_version(conn)
        conn.close()
        assert version == 3

    def test_migrations_list_is_ordered(self) -> None:
        versions = [v for v, _ in MIGRATIONS]
        assert versions == sorted(versions)
        assert len(versions) == len(set(versions))

    def test_migration_creates_tag_tables(self, db_path: Path) -> None:
        conn = open_library(db_path)
        names = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        conn.close()
        assert {"tags", "book_tags"} <= names

    def test_v1_database_is_upgraded(self, db_path: Path) -> None:
        """A database created at version 1 gains the tag and category tables on open."""
        conn = sqlite3.connect(str(db_path))
        conn.executescript(SCHEMA_V1)
        conn.close()

        conn = open_library(db_path)
        assert get_schema_version(conn) == 3
        conn.close()

    def test_apply_migrations_twice_is_noop(self, db_path: Path) -> None:
        conn = open_library(db_path)
        _apply_migrations(conn)
        count = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
        conn.close()
        assert count == 3

    def test_migration_creates_category_tables(self, db_path: Path) -> None:
        conn = open_library(db_path)
        names = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        conn.close()
        assert {"categories", "book_categories"} <= names

    def test_v2_database_gains_categories(self, db_path: Path) -> None:
        """A database at version 2 keeps its tags and gains categories."""
        conn = sqlite3.connect(str(db_path))
        conn.executescript(SCHEMA_V1)
        conn.executescript(MIGRATIONS[0][1])
        conn.execute(
            "INSERT INTO books (title, file_path, import_date) "
            "VALUES ('Dune', '/b/Dune.pdf', '2024-01-01T00:00:00')"
        )
        conn.execute("INSERT INTO tags (name) VALUES ('classic')")
        conn.commit()
        conn.close()

        conn = open_library(db_path)
        assert get_schema_version(conn) == 3
        assert conn.execute("SELECT COUNT(*) FROM tags").fetchone()[0] == 1
        assert conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0] == 0
        conn.close()
