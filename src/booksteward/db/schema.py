# ABOUTME: SQL DDL statements for the BookSteward library database schema.
# ABOUTME: Defines the books table, FTS5 index with sync triggers, then tag and category tables via migrations.

SCHEMA_V1 = """
-- Core book catalog table
CREATE TABLE books (
    id                 INTEGER PRIMARY KEY AUTOINCREMENT,
    title              TEXT NOT NULL,
    author             TEXT,
    publisher          TEXT,
    description        TEXT,
    isbn               TEXT,
    publication_year   INTEGER,
    file_path          TEXT NOT NULL,
    file_extensions    TEXT NOT NULL DEFAULT '[]',
    import_date        TEXT NOT NULL,
    last_opened        TEXT,
    is_new             INTEGER NOT NULL DEFAULT 1,
    is_info_incomplete INTEGER NOT NULL DEFAULT 1,
    is_favorite        INTEGER NOT NULL DEFAULT 0,
    version            INTEGER NOT NULL DEFAULT 0,
    date_modified      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- Path uniqueness is enforced by the importer, so this index is not UNIQUE
CREATE INDEX idx_books_file_path ON books(file_path COLLATE NOCASE);
CREATE INDEX idx_books_isbn ON books(isbn) WHERE isbn IS NOT NULL;

-- FTS5 virtual table for full-text search
CREATE VIRTUAL TABLE books_fts USING fts5(
    title, author, publisher, description,
    content='books',
    content_rowid='id'
);

-- Triggers to keep FTS in sync with the books table
CREATE TRIGGER books_ai AFTER INSERT ON books BEGIN
    INSERT INTO books_fts(rowid, title, author, publisher, description)
    VALUES (new.id, new.title, new.author, new.publisher, new.description);
END;

CREATE TRIGGER books_ad AFTER DELETE ON books BEGIN
    INSERT INTO books_fts(books_fts, rowid, title, author, publisher, description)
    VALUES ('delete', old.id, old.title, old.author, old.publisher, old.description);
END;

CREATE TRIGGER books_au AFTER UPDATE ON books BEGIN
    INSERT INTO books_fts(books_fts, rowid, title, author, publisher, description)
    VALUES ('delete', old.id, old.title, old.author, old.publisher, old.description);
    INSERT INTO books_fts(rowid, title, author, publisher, description)
    VALUES (new.id, new.title, new.author, new.publisher, new.description);
END;

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

MIGRATION_V2_TAGS = """
CREATE TABLE tags (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE
);

CREATE TABLE book_tags (
    book_id INTEGER NOT NULL REFERENCES books(id) ON DELETE CASCADE,
    tag_id  INTEGER NOT NULL REFERENCES tags(id) ON DELETE CASCADE,
    PRIMARY KEY (book_id, tag_id)
);

CREATE INDEX idx_book_tags_tag_id ON book_tags(tag_id);

INSERT INTO schema_version (version) VALUES (2);
"""

MIGRATION_V3_CATEGORIES = """
CREATE TABLE categories (
    id        INTEGER PRIMARY KEY AUTOINCREMENT,
    name      TEXT NOT NULL,
    parent_id INTEGER REFERENCES categories(id) ON DELETE RESTRICT
);

CREATE INDEX idx_categories_parent_id ON categories(parent_id);

CREATE TABLE book_categories (
    book_id     INTEGER NOT NULL REFERENCES books(id) ON DELETE CASCADE,
    category_id INTEGER NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
    PRIMARY KEY (book_id, category_id)
);

CREATE INDEX idx_book_categories_category_id ON book_categories(category_id);

INSERT INTO schema_version (version) VALUES (3);
"""

# (version, sql) pairs applied in order to databases below that version
MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2_TAGS),
    (3, MIGRATION_V3_CATEGORIES),
]
