# ABOUTME: Public API for the BookSteward library database layer.
# ABOUTME: Exports connection management, catalog operations, and the repository protocol.

from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library
from booksteward.db.repository import BookRepository

__all__ = [
    "DEFAULT_DB_PATH",
    "BookRepository",
    "LibraryCatalog",
    "open_library",
]
