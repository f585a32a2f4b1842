# ABOUTME: CLI package for BookSteward, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from booksteward.cli.commands import (
    category_cmd,
    compare_cmd,
    favorite_cmd,
    import_cmd,
    ls_cmd,
    open_cmd,
    search_cmd,
    tag_cmd,
)


def _configure_logging(verbose: bool) -> None:
    """Route log records through Rich. WARNING by default, DEBUG with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


@click.group()
@click.version_option(package_name="booksteward")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """BookSteward - catalog, compare, and browse your ebook files."""
    _configure_logging(verbose)


cli.add_command(import_cmd.import_command)
cli.add_command(compare_cmd.compare)
cli.add_command(ls_cmd.ls)
cli.add_command(search_cmd.search)
cli.add_command(tag_cmd.tag)
cli.add_command(category_cmd.category)
cli.add_command(open_cmd.open_book)
cli.add_command(favorite_cmd.favorite)
