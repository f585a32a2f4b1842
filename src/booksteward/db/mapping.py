# ABOUTME: Converts between BookRecord dataclasses and SQLite row dictionaries.
# ABOUTME: Handles JSON file-extension lists, ISO timestamps, and integer flags.

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from booksteward.metadata.tags import BookTag
from booksteward.metadata.types import BookRecord


def record_to_row(record: BookRecord) -> dict[str, Any]:
    """Convert a BookRecord to a dict suitable for INSERT or UPDATE.

    Excludes id, version, and tags, which the catalog manages separately.
    """
    return {
        "title": record.title,
        "author": record.author,
        "publisher": record.publisher,
        "description": record.description,
        "isbn": record.isbn,
        "publication_year": record.publication_year,
        "file_path": str(record.file_path),
        "file_extensions": json.dumps(record.file_extensions),
        "import_date": record.import_date.isoformat(),
        "last_opened": record.last_opened.isoformat() if record.last_opened else None,
        "is_new": int(record.is_new),
        "is_info_incomplete": int(record.is_info_incomplete),
        "is_favorite": int(record.is_favorite),
    }


def row_to_record(row: Any, tags: list[BookTag] | None = None) -> BookRecord:
    """Convert a database row (dict-like) back to a BookRecord."""
    last_opened = row["last_opened"]
    extensions = row["file_extensions"]
    return BookRecord(
        id=row["id"],
        title=row["title"],
        author=row["author"],
        publisher=row["publisher"],
        description=row["description"],
        isbn=row["isbn"],
        publication_year=row["publication_year"],
        file_path=Path(row["file_path"]),
        file_extensions=json.loads(extensions) if extensions else [],
        import_date=datetime.fromisoformat(row["import_date"]),
        last_opened=datetime.fromisoformat(last_opened) if last_opened else None,
        is_new=bool(row["is_new"]),
        is_info_incomplete=bool(row["is_info_incomplete"]),
        is_favorite=bool(row["is_favorite"]),
        tags=list(tags or []),
        version=row["version"],
    )
