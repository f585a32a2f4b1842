# ABOUTME: Recognized ebook formats and filesystem enumeration of book files.
# ABOUTME: Provides the format filter, a recursive directory walk, and file size helpers.

from pathlib import Path

BOOK_EXTENSIONS: frozenset[str] = frozenset(
    {".pdf", ".mobi", ".epub", ".txt", ".azw3"}
)

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def is_book_file(path: str | Path | None) -> bool:
    """Check whether a path has a recognized ebook extension.

    Comparison is case-insensitive (".PDF" counts). Empty or None paths
    are never book files.
    """
    if not path:
        return False
    return Path(path).suffix.lower() in BOOK_EXTENSIONS


def find_book_files(root: Path) -> list[Path]:
    """Recursively find all recognized ebook files under root, sorted."""
    return sorted(
        path for path in root.rglob("*") if path.is_file() and is_book_file(path)
    )


def file_size(path: Path) -> int:
    """Size of a file in bytes.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    return path.stat().st_size


def format_file_size(num_bytes: int) -> str:
    """Render a byte count for display, e.g. 1536 -> "1.50 KB"."""
    number = float(num_bytes)
    unit = 0
    while round(number / 1024) >= 1 and unit < len(_SIZE_UNITS) - 1:
        number /= 1024
        unit += 1
    return f"{number:,.2f} {_SIZE_UNITS[unit]}"
