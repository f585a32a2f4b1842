# ABOUTME: Shared Click options for BookSteward CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db.

from pathlib import Path

import click

from booksteward.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="BOOKSTEWARD_DB",
    help=f"Path to library database (default: {DEFAULT_DB_PATH}, env: BOOKSTEWARD_DB)",
)
