# ABOUTME: The `booksteward favorite` command for marking books as favorites.
# ABOUTME: Sets or clears the favorite flag through a version-checked catalog update.

from pathlib import Path

import click
from rich.console import Console

from booksteward.cli.options import db_option
from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("favorite")
@click.argument("book_id", type=int)
@click.option("--off", is_flag=True, default=False, help="Remove the book from favorites.")
@db_option
def favorite(book_id: int, off: bool, db_path: Path | None) -> None:
    """Mark a book as a favorite, or unmark it with --off."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        record = catalog.get_by_id(book_id)
        if record is None:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)
        record.is_favorite = not off
        saved = catalog.update_book(record)
    finally:
        conn.close()

    if not saved:
        console.print(
            f"[red]Book {book_id} was changed by another update. Nothing saved; try again.[/red]"
        )
        raise SystemExit(1)

    if off:
        console.print(f"Removed [bold]{record.title}[/bold] from favorites.")
    else:
        console.print(f"Added [bold]{record.title}[/bold] to favorites.")
