# ABOUTME: The `booksteward import` command for scanning and cataloging ebook files.
# ABOUTME: Walks a directory, skips files already cataloged, and stores new records in the library DB.

from pathlib import Path

import click
from rich.console import Console

from booksteward.cli.options import db_option
from booksteward.core.importer import import_candidates
from booksteward.core.scanner import find_book_files
from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("import")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@db_option
def import_command(directory: Path, db_path: Path | None) -> None:
    """Scan a directory for ebook files and catalog them in the library."""
    book_files = find_book_files(directory.resolve())

    if not book_files:
        console.print(f"[yellow]No ebook files found in {directory}[/yellow]")
        return

    console.print(f"Found [bold]{len(book_files)}[/bold] ebook file(s)\n")

    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        result = import_candidates(book_files, LibraryCatalog(conn))
    finally:
        conn.close()

    parts = [f"[green]{len(result.added)} added[/green]"]
    if result.skipped:
        parts.append(f"[yellow]{len(result.skipped)} skipped[/yellow]")
    if result.errors:
        parts.append(f"[red]{len(result.errors)} error(s)[/red]")

    console.print(", ".join(parts))

    if result.errors:
        console.print(
            f"\n[yellow]{len(result.errors)} file(s) could not be imported:[/yellow]"
        )
        for path, msg in result.errors:
            console.print(f"  [dim]{path.name}:[/dim] {msg}")
