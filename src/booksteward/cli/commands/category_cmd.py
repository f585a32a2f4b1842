# ABOUTME: The `booksteward category` command group for organizing books into a category tree.
# ABOUTME: Provides add, rename, rm, ls, assign, and unassign subcommands.

from pathlib import Path

import click
from rich.console import Console
from rich.tree import Tree

from booksteward.cli.options import db_option
from booksteward.db.catalog import LibraryCatalog
from booksteward.db.connection import DEFAULT_DB_PATH, open_library
from booksteward.metadata.types import Category

console = Console()


def _label(category: Category) -> str:
    books = len(category.book_ids)
    return f"[bold]{category.name}[/bold] [dim](id {category.id}, {books} book(s))[/dim]"


def _add_branch(tree: Tree, category: Category) -> None:
    branch = tree.add(_label(category))
    for child in category.children:
        _add_branch(branch, child)


@click.group("category")
def category() -> None:
    """Organize books into categories and subcategories."""


@category.command("add")
@click.argument("name")
@click.option(
    "--parent",
    "parent_id",
    type=int,
    default=None,
    help="Create as a subcategory of this category ID.",
)
@db_option
def category_add(name: str, parent_id: int | None, db_path: Path | None) -> None:
    """Create a category."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        created = LibraryCatalog(conn).create_category(name, parent_id)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Created category [bold]{created.name}[/bold] (id {created.id}).")


@category.command("rename")
@click.argument("category_id", type=int)
@click.argument("name")
@db_option
def category_rename(category_id: int, name: str, db_path: Path | None) -> None:
    """Rename a category."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        renamed = LibraryCatalog(conn).rename_category(category_id, name)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    if renamed is None:
        console.print(f"[red]Category {category_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Renamed category {category_id} to [bold]{renamed.name}[/bold].")


@category.command("rm")
@click.argument("category_id", type=int)
@db_option
def category_rm(category_id: int, db_path: Path | None) -> None:
    """Delete a category. Books in it stay in the library."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        deleted = LibraryCatalog(conn).delete_category(category_id)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    if not deleted:
        console.print(f"[red]Category {category_id} not found.[/red]")
        raise SystemExit(1)
    console.print(f"Deleted category {category_id}.")


@category.command("ls")
@db_option
def category_ls(db_path: Path | None) -> None:
    """Show the category tree. Creates the default category in an empty library."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        roots = catalog.root_categories()
        if not roots:
            roots = [catalog.get_or_create_default_category()]
    finally:
        conn.close()

    tree = Tree("Categories")
    for root in roots:
        _add_branch(tree, root)
    console.print(tree)


@category.command("assign")
@click.argument("category_id", type=int)
@click.argument("book_ids", type=int, nargs=-1, required=True)
@db_option
def category_assign(category_id: int, book_ids: tuple[int, ...], db_path: Path | None) -> None:
    """File one or more books under a category."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        catalog = LibraryCatalog(conn)
        added = sum(catalog.add_book_to_category(category_id, book_id) for book_id in book_ids)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Added [bold]{added}[/bold] book(s) to category {category_id}.")


@category.command("unassign")
@click.argument("category_id", type=int)
@click.argument("book_id", type=int)
@db_option
def category_unassign(category_id: int, book_id: int, db_path: Path | None) -> None:
    """Take a book out of a category."""
    conn = open_library(db_path or DEFAULT_DB_PATH)
    try:
        removed = LibraryCatalog(conn).remove_book_from_category(category_id, book_id)
    finally:
        conn.close()

    if not removed:
        console.print(f"[red]Book {book_id} is not in category {category_id}.[/red]")
        raise SystemExit(1)
    console.print(f"Removed book {book_id} from category {category_id}.")
