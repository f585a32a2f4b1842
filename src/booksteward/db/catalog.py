# ABOUTME: CRUD operations for the BookSteward library catalog.
# ABOUTME: Add, query, update, and delete book records, their tags, and categories in SQLite.

import logging
import sqlite3
from collections import defaultdict
from datetime import datetime
from pathlib import Path

from booksteward.core.errors import CatalogError, require
from booksteward.db.mapping import record_to_row, row_to_record
from booksteward.metadata.tags import BookTag, parse_tag, tag_name
from booksteward.metadata.types import BookRecord, Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_NAME = "Uncategorized"
MAX_CATEGORY_NAME_LENGTH = 100


class LibraryCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for book records.

    Implements the BookRepository protocol. Updates use optimistic
    concurrency: a record whose version no longer matches the stored row is
    rejected instead of overwriting a newer write.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- Tag loading ---

    def _tags_by_book(self, book_ids: list[int] | None = None) -> dict[int, list[BookTag]]:
        """Load tags for the given books (or all books), keyed by book id."""
        sql = (
            "SELECT bt.book_id, t.name FROM book_tags bt "
            "JOIN tags t ON t.id = bt.tag_id"
        )
        params: list[int] = []
        if book_ids is not None:
            if not book_ids:
                return {}
            sql += f" WHERE bt.book_id IN ({', '.join('?' for _ in book_ids)})"
            params = book_ids
        sql += " ORDER BY bt.rowid"

        tags: dict[int, list[BookTag]] = defaultdict(list)
        for row in self._conn.execute(sql, params):
            tags[row[0]].append(parse_tag(row[1]))
        return tags

    def _records(self, rows: list[sqlite3.Row]) -> list[BookRecord]:
        tags = self._tags_by_book([row["id"] for row in rows])
        return [row_to_record(row, tags.get(row["id"])) for row in rows]

    def _write_tags(self, book_id: int, tags: list[BookTag]) -> None:
        for tag in tags:
            name = tag_name(tag)
            self._conn.execute("INSERT OR IGNORE INTO tags (name) VALUES (?)", (name,))
            self._conn.execute(
                "INSERT OR IGNORE INTO book_tags (book_id, tag_id) "
                "SELECT ?, id FROM tags WHERE name = ?",
                (book_id, name),
            )

    # --- BookRepository ---

    def add_book(self, record: BookRecord) -> int:
        """Add a record and its tags to the catalog.

        Sets record.id to the assigned row ID and returns it.

        Raises:
            ValidationError: If record is None.
            CatalogError: If the insert fails.
        """
        require(record, "record")

        row = record_to_row(record)
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)

        try:
            cursor = self._conn.execute(
                f"INSERT INTO books ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
            book_id = cursor.lastrowid
            self._write_tags(book_id, record.tags)  # type: ignore[arg-type]
            self._conn.commit()
        except sqlite3.Error as exc:
            self._conn.rollback()
            raise CatalogError(f"Could not add {record.file_path}: {exc}") from exc

        record.id = book_id
        record.version = 0
        logger.debug("Added book %d: %s", book_id, record.title)
        return book_id  # type: ignore[return-value]

    def get_by_id(self, book_id: int) -> BookRecord | None:
        """Retrieve a book by its row ID."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        return self._records([row])[0] if row else None

    def get_by_path(self, path: str | Path) -> BookRecord | None:
        """Retrieve a book by file path, ignoring case."""
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE file_path = ? COLLATE NOCASE ORDER BY id LIMIT 1",
            (str(path),),
        )
        row = cursor.fetchone()
        return self._records([row])[0] if row else None

    def list_all(self) -> list[BookRecord]:
        """Return all books in the catalog, ordered by title then id."""
        cursor = self._conn.execute("SELECT * FROM books ORDER BY title, id")
        rows = cursor.fetchall()
        tags = self._tags_by_book()
        return [row_to_record(row, tags.get(row["id"])) for row in rows]

    def update_book(self, record: BookRecord) -> bool:
        """Write a record's fields and tags back to the catalog.

        Returns False without retrying when the book no longer exists or
        when the stored version differs from record.version (another write
        got there first). On success record.version is advanced.

        Raises:
            ValidationError: If record is None.
            CatalogError: If the update fails for any other reason.
        """
        require(record, "record")
        if record.id is None:
            logger.warning("Cannot update unsaved book %r", record.title)
            return False

        row = record_to_row(record)
        set_clause = ", ".join(f"{k} = ?" for k in row)
        set_clause += (
            ", version = version + 1"
            ", date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now')"
        )

        try:
            cursor = self._conn.execute(
                f"UPDATE books SET {set_clause} WHERE id = ? AND version = ?",
                [*row.values(), record.id, record.version],
            )
            if cursor.rowcount == 0:
                self._conn.rollback()
                if self._exists(record.id):
                    logger.warning(
                        "Concurrent update conflict on book %d (version %d is stale)",
                        record.id, record.version,
                    )
                else:
                    logger.warning("Book %d not found", record.id)
                return False

            self._conn.execute("DELETE FROM book_tags WHERE book_id = ?", (record.id,))
            self._write_tags(record.id, record.tags)
            self._conn.commit()
        except sqlite3.Error as exc:
            self._conn.rollback()
            raise CatalogError(f"Could not update book {record.id}: {exc}") from exc

        record.version += 1
        logger.info("Updated book %d", record.id)
        return True

    def delete_book(self, book_id: int) -> bool:
        """Delete a book from the catalog. Returns False if it did not exist."""
        cursor = self._conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
        self._conn.commit()

        if cursor.rowcount == 0:
            logger.warning("Book %d not found", book_id)
            return False

        logger.info("Deleted book %d", book_id)
        return True

    def _exists(self, book_id: int) -> bool:
        cursor = self._conn.execute("SELECT 1 FROM books WHERE id = ?", (book_id,))
        return cursor.fetchone() is not None

    # --- Queries ---

    def search(self, query: str) -> list[BookRecord]:
        """Full-text search across title, author, publisher, and description.

        Uses FTS5 MATCH syntax. Results are ranked by relevance (FTS5 rank).
        A blank query returns every book.
        """
        if not query.strip():
            return self.list_all()

        cursor = self._conn.execute(
            "SELECT books.* FROM books "
            "JOIN books_fts ON books.id = books_fts.rowid "
            "WHERE books_fts MATCH ? "
            "ORDER BY books_fts.rank",
            (query,),
        )
        return self._records(cursor.fetchall())

    def mark_opened(self, book_id: int, when: datetime | None = None) -> None:
        """Record that a book was opened. It no longer counts as new.

        Raises:
            ValueError: If the book_id does not exist.
        """
        opened = (when or datetime.now()).isoformat()
        cursor = self._conn.execute(
            "UPDATE books SET last_opened = ?, is_new = 0, version = version + 1, "
            "date_modified = strftime('%Y-%m-%dT%H:%M:%S', 'now') WHERE id = ?",
            (opened, book_id),
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Book with id {book_id} not found")

    # --- Tag operations ---

    def add_tag(self, book_id: int, name: str) -> None:
        """Tag a book. Creates the tag if it doesn't exist. Idempotent.

        Raises:
            ValueError: If the book_id does not exist.
        """
        if not self._exists(book_id):
            raise ValueError(f"Book with id {book_id} not found")

        self._write_tags(book_id, [parse_tag(name)])
        self._conn.commit()

    def remove_tag(self, book_id: int, name: str) -> None:
        """Remove a tag from a book.

        Raises:
            ValueError: If the tag doesn't exist or the book isn't tagged with it.
        """
        cursor = self._conn.execute("SELECT id FROM tags WHERE name = ?", (name,))
        tag_row = cursor.fetchone()
        if tag_row is None:
            raise ValueError(f"Tag '{name}' not found")

        cursor = self._conn.execute(
            "DELETE FROM book_tags WHERE book_id = ? AND tag_id = ?",
            (book_id, tag_row[0]),
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Book {book_id} is not tagged with '{name}'")

    def get_tags_for_book(self, book_id: int) -> list[str]:
        """Get all tag names for a book, alphabetically sorted."""
        cursor = self._conn.execute(
            "SELECT t.name FROM tags t "
            "JOIN book_tags bt ON t.id = bt.tag_id "
            "WHERE bt.book_id = ? "
            "ORDER BY t.name",
            (book_id,),
        )
        return [row[0] for row in cursor.fetchall()]

    def list_tags(self) -> list[tuple[str, int]]:
        """List all tags with their book counts, alphabetically sorted."""
        cursor = self._conn.execute(
            "SELECT t.name, COUNT(bt.book_id) as book_count "
            "FROM tags t "
            "JOIN book_tags bt ON t.id = bt.tag_id "
            "GROUP BY t.id "
            "ORDER BY t.name"
        )
        return [(row[0], row[1]) for row in cursor.fetchall()]

    def get_books_by_tag(self, name: str) -> list[BookRecord]:
        """Get all books with a given tag.

        Raises:
            ValueError: If the tag doesn't exist.
        """
        cursor = self._conn.execute("SELECT id FROM tags WHERE name = ?", (name,))
        if cursor.fetchone() is None:
            raise ValueError(f"Tag '{name}' not found")

        cursor = self._conn.execute(
            "SELECT b.* FROM books b "
            "JOIN book_tags bt ON b.id = bt.book_id "
            "JOIN tags t ON bt.tag_id = t.id "
            "WHERE t.name = ? "
            "ORDER BY b.title, b.id",
            (name,),
        )
        return self._records(cursor.fetchall())

    # --- Category operations ---

    def _require_category(self, category_id: int) -> None:
        cursor = self._conn.execute("SELECT 1 FROM categories WHERE id = ?", (category_id,))
        if cursor.fetchone() is None:
            raise ValueError(f"Category with id {category_id} not found")

    def _load_categories(self) -> dict[int, Category]:
        """Load every category with its book ids, children linked to parents."""
        categories = {
            row["id"]: Category(name=row["name"], id=row["id"], parent_id=row["parent_id"])
            for row in self._conn.execute(
                "SELECT id, name, parent_id FROM categories ORDER BY name, id"
            )
        }
        for row in self._conn.execute(
            "SELECT category_id, book_id FROM book_categories ORDER BY book_id"
        ):
            categories[row[0]].book_ids.append(row[1])
        for category in categories.values():
            if category.parent_id is not None:
                categories[category.parent_id].children.append(category)
        return categories

    def create_category(self, name: str, parent_id: int | None = None) -> Category:
        """Create a category, optionally as a subcategory of parent_id.

        Raises:
            ValueError: If the name is blank or too long, or the parent doesn't exist.
        """
        name = _category_name(name)
        if parent_id is not None:
            self._require_category(parent_id)

        cursor = self._conn.execute(
            "INSERT INTO categories (name, parent_id) VALUES (?, ?)", (name, parent_id),
        )
        self._conn.commit()

        logger.info("Created category %d: %s", cursor.lastrowid, name)
        return Category(name=name, id=cursor.lastrowid, parent_id=parent_id)

    def get_category(self, category_id: int) -> Category | None:
        """Retrieve a category with its direct children and book ids."""
        return self._load_categories().get(category_id)

    def list_categories(self) -> list[Category]:
        """All categories, flat, alphabetically sorted."""
        return list(self._load_categories().values())

    def root_categories(self) -> list[Category]:
        """Top-level categories with their subtrees attached, alphabetically sorted."""
        return [c for c in self._load_categories().values() if c.is_root]

    def rename_category(self, category_id: int, name: str) -> Category | None:
        """Rename a category. Returns None if it does not exist.

        Raises:
            ValueError: If the new name is blank or too long.
        """
        name = _category_name(name)
        cursor = self._conn.execute(
            "UPDATE categories SET name = ? WHERE id = ?", (name, category_id),
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            logger.warning("Category %d not found", category_id)
            return None
        return self.get_category(category_id)

    def delete_category(self, category_id: int) -> bool:
        """Delete a category and its book assignments. Returns False if it did not exist.

        The books themselves are kept.

        Raises:
            ValueError: If the category still has subcategories.
        """
        cursor = self._conn.execute(
            "SELECT COUNT(*) FROM categories WHERE parent_id = ?", (category_id,),
        )
        if cursor.fetchone()[0]:
            raise ValueError(f"Category {category_id} has subcategories")

        cursor = self._conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        self._conn.commit()

        if cursor.rowcount == 0:
            logger.warning("Category %d not found", category_id)
            return False

        logger.info("Deleted category %d", category_id)
        return True

    def get_or_create_default_category(self) -> Category:
        """Return the root default category, creating it on first use."""
        cursor = self._conn.execute(
            "SELECT id FROM categories WHERE name = ? COLLATE NOCASE AND parent_id IS NULL "
            "ORDER BY id LIMIT 1",
            (DEFAULT_CATEGORY_NAME,),
        )
        row = cursor.fetchone()
        if row is not None:
            return self.get_category(row[0])  # type: ignore[return-value]
        return self.create_category(DEFAULT_CATEGORY_NAME)

    def add_book_to_category(self, category_id: int, book_id: int) -> bool:
        """File a book under a category. Returns False if it was already there.

        Raises:
            ValueError: If the category or book does not exist.
        """
        self._require_category(category_id)
        if not self._exists(book_id):
            raise ValueError(f"Book with id {book_id} not found")

        cursor = self._conn.execute(
            "INSERT OR IGNORE INTO book_categories (book_id, category_id) VALUES (?, ?)",
            (book_id, category_id),
        )
        self._conn.commit()
        return cursor.rowcount > 0

    def remove_book_from_category(self, category_id: int, book_id: int) -> bool:
        """Take a book out of a category. Returns False if it wasn't in it."""
        cursor = self._conn.execute(
            "DELETE FROM book_categories WHERE book_id = ? AND category_id = ?",
            (book_id, category_id),
        )
        self._conn.commit()
        return cursor.rowcount > 0

    def set_category_books(self, category_id: int, book_ids: list[int]) -> None:
        """Replace the set of books filed under a category.

        Raises:
            ValueError: If the category or any of the books does not exist.
        """
        self._require_category(category_id)
        missing = [book_id for book_id in book_ids if not self._exists(book_id)]
        if missing:
            raise ValueError(f"Books not found: {', '.join(map(str, missing))}")

        self._conn.execute("DELETE FROM book_categories WHERE category_id = ?", (category_id,))
        self._conn.executemany(
            "INSERT OR IGNORE INTO book_categories (book_id, category_id) VALUES (?, ?)",
            [(book_id, category_id) for book_id in book_ids],
        )
        self._conn.commit()

    def get_books_in_category(self, category_id: int) -> list[BookRecord]:
        """Books filed directly under a category, ordered by title.

        Raises:
            ValueError: If the category does not exist.
        """
        self._require_category(category_id)
        cursor = self._conn.execute(
            "SELECT b.* FROM books b "
            "JOIN book_categories bc ON b.id = bc.book_id "
            "WHERE bc.category_id = ? "
            "ORDER BY b.title, b.id",
            (category_id,),
        )
        return self._records(cursor.fetchall())


def _category_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValueError("Category name must not be blank")
    if len(name) > MAX_CATEGORY_NAME_LENGTH:
        raise ValueError(
            f"Category name is longer than {MAX_CATEGORY_NAME_LENGTH} characters"
        )
    return name
