# ABOUTME: The `booksteward ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table of a browse view, merging same-titled format variants.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from booksteward.cli.options import db_option
from booksteward.core.aggregator import BookView, merge_by_title, select_view
from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library
from booksteward.metadata.types import BookRecord

console = Console()


def render_records(records: list[BookRecord]) -> None:
    """Print records as a table with a count footer."""
    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold", no_wrap=True)
    table.add_column("Author")
    table.add_column("Formats")
    table.add_column("Tags", style="cyan")

    for record in records:
        table.add_row(
            str(record.id) if record.id is not None else "",
            record.title,
            record.author or "[dim]unknown[/dim]",
            ", ".join(ext.lstrip(".") for ext in record.file_extensions),
            ", ".join(record.tag_names),
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} book(s)[/dim]")


@click.command("ls")
@db_option
@click.option(
    "--view",
    type=click.Choice([v.value for v in BookView]),
    default=BookView.ALL.value,
    help="Browse view to list (default: all).",
)
@click.option(
    "--tag",
    "tag_filter",
    default=None,
    help="Filter by tag name.",
)
@click.option(
    "--category",
    "category_id",
    type=int,
    default=None,
    help="Only books filed under this category ID.",
)
@click.option(
    "--merge/--no-merge",
    default=True,
    help="Show same-titled files as a single book (default: merge).",
)
def ls(
    db_path: Path | None,
    view: str,
    tag_filter: str | None,
    category_id: int | None,
    merge: bool,
) -> None:
    """List books in the library catalog."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        if tag_filter:
            try:
                records = catalog.get_books_by_tag(tag_filter)
            except ValueError as exc:
                console.print(f"[red]Tag '{tag_filter}' not found.[/red]")
                raise SystemExit(1) from exc
        else:
            records = catalog.list_all()
        if category_id is not None:
            try:
                filed = {r.id for r in catalog.get_books_in_category(category_id)}
            except ValueError as exc:
                console.print(f"[red]Category {category_id} not found.[/red]")
                raise SystemExit(1) from exc
            records = [r for r in records if r.id in filed]
    finally:
        conn.close()

    records = select_view(records, BookView(view))
    if merge:
        records = merge_by_title(records)

    if not records:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    render_records(records)
