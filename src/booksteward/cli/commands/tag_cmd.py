# ABOUTME: The `booksteward tag` command group for managing book tags.
# ABOUTME: Provides add, rm, and ls subcommands for tagging operations.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from booksteward.cli.options import db_option
from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library

console = Console()


@click.group("tag")
def tag() -> None:
    """Manage book tags."""


@tag.command("add")
@click.argument("book_id", type=int)
@click.argument("tag_name")
@db_option
def tag_add(book_id: int, tag_name: str, db_path: Path | None) -> None:
    """Add a tag to a book."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        record = catalog.get_by_id(book_id)
        if record is None:
            console.print(f"[red]Book {book_id} not found.[/red]")
            raise SystemExit(1)
        catalog.add_tag(book_id, tag_name)
    finally:
        conn.close()

    console.print(f"Tagged [bold]{record.title}[/bold] with [cyan]{tag_name}[/cyan].")


@tag.command("rm")
@click.argument("book_id", type=int)
@click.argument("tag_name")
@db_option
def tag_rm(book_id: int, tag_name: str, db_path: Path | None) -> None:
    """Remove a tag from a book."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        LibraryCatalog(conn).remove_tag(book_id, tag_name)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Removed tag [cyan]{tag_name}[/cyan] from book {book_id}.")


@tag.command("ls")
@db_option
def tag_ls(db_path: Path | None) -> None:
    """List all tags with book counts."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        tags = LibraryCatalog(conn).list_tags()
    finally:
        conn.close()

    if not tags:
        console.print("[yellow]No tags in the library.[/yellow]")
        return

    table = Table()
    table.add_column("Tag", style="cyan")
    table.add_column("Books", style="dim", justify="right")

    for name, count in tags:
        table.add_row(name, str(count))

    console.print(table)
