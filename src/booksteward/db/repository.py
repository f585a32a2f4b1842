# ABOUTME: BookRepository protocol: the persistence contract the import engine depends on.
# ABOUTME: LibraryCatalog implements it over SQLite; tests substitute an in-memory fake.

from typing import Protocol, runtime_checkable

from booksteward.metadata.types import BookRecord


@runtime_checkable
class BookRepository(Protocol):
    """Protocol for book record storage.

    add_book assigns and returns the record's id. update_book and
    delete_book report failure (missing id, stale write) as False rather
    than raising.
    """

    def list_all(self) -> list[BookRecord]: ...

    def get_by_id(self, book_id: int) -> BookRecord | None: ...

    def add_book(self, record: BookRecord) -> int: ...

    def update_book(self, record: BookRecord) -> bool: ...

    def delete_book(self, book_id: int) -> bool: ...
