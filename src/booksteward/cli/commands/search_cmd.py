# ABOUTME: The `booksteward search` command for full-text search of the catalog.
# ABOUTME: Searches title, author, publisher, and description using SQLite FTS5.

from pathlib import Path

import click
from rich.console import Console

from booksteward.cli.commands.ls_cmd import render_records
from booksteward.cli.options import db_option
from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.command("search")
@click.argument("query")
@db_option
def search(query: str, db_path: Path | None) -> None:
    """Search the library catalog by title, author, or description."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        results = LibraryCatalog(conn).search(query)
    finally:
        conn.close()

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    render_records(results)
