# ABOUTME: Shared pytest fixtures for BookSteward tests.
# ABOUTME: Provides temporary catalogs, an in-memory repository, and sample ebook directory trees.

from pathlib import Path

import pytest

from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import open_library
from tests.fakes import InMemoryRepository


@pytest.fixture()
def repository() -> InMemoryRepository:
    """An empty in-memory repository."""
    return InMemoryRepository()


@pytest.fixture()
def catalog(tmp_path: Path):
    """Provide a LibraryCatalog backed by a temporary database."""
    conn = open_library(tmp_path / "library.db")
    yield LibraryCatalog(conn)
    conn.close()


@pytest.fixture()
def book_tree(tmp_path: Path) -> Path:
    """Create a directory tree with mixed ebook and non-ebook files.

    Layout:
        books/
            Umberto Eco - The Name of the Rose.epub
            Umberto Eco - The Name of the Rose.PDF
            fiction/
                Dune.mobi
                cover.jpg
            notes/
                Reading List.txt
                metadata.opf
    """
    root = tmp_path / "books"
    (root / "fiction").mkdir(parents=True)
    (root / "notes").mkdir()

    (root / "Umberto Eco - The Name of the Rose.epub").write_bytes(b"fake epub")
    (root / "Umberto Eco - The Name of the Rose.PDF").write_bytes(b"fake pdf")
    (root / "fiction" / "Dune.mobi").write_bytes(b"fake mobi")
    (root / "fiction" / "cover.jpg").write_bytes(b"fake jpg")
    (root / "notes" / "Reading List.txt").write_text("a list")
    (root / "notes" / "metadata.opf").write_text("<metadata/>")

    return root
