# ABOUTME: The `booksteward open` command for opening a cataloged book.
# ABOUTME: Records the open (clearing the new flag) and launches the file in its default viewer.

import logging
from pathlib import Path

import click
from rich.console import Console

from booksteward.cli.options import db_option
from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library

logger = logging.getLogger(__name__)

console = Console()


@click.command("open")
@click.argument("book_id", type=int)
@click.option(
    "--launch/--no-launch",
    default=True,
    help="Open the file with the system's default application (default: launch).",
)
@db_option
def open_book(book_id: int, launch: bool, db_path: Path | None) -> None:
    """Open a book. It moves from the new view to the recent view."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        record = catalog.get_by_id(book_id)
        if record is None:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)
        catalog.mark_opened(book_id)
    finally:
        conn.close()

    if launch:
        if not record.file_path.exists():
            console.print(f"[yellow]File not found: {record.file_path}[/yellow]")
            raise SystemExit(1)
        status = click.launch(str(record.file_path))
        if status != 0:
            logger.warning("Viewer for %s exited with status %d", record.file_path, status)

    console.print(f"Opened [bold]{record.title}[/bold].")
