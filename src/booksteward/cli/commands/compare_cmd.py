# ABOUTME: The `booksteward compare` command for comparing two ebook directories.
# ABOUTME: Parses both trees without touching the library and reports tiered match buckets.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from booksteward.core.importer import parse_candidates
from booksteward.core.matcher import (
    SIMILARITY_THRESHOLD,
    ComparisonResult,
    MatchPair,
    compare_collections,
)
from booksteward.core.scanner import find_book_files
from booksteward.metadata.types import BookRecord

console = Console()


def _describe(record: BookRecord | None) -> str:
    if record is None:
        return ""
    if record.author:
        return f"{record.title} - {record.author}"
    return record.title


def _record_json(record: BookRecord | None) -> dict | None:
    if record is None:
        return None
    return {
        "title": record.title,
        "author": record.author,
        "path": str(record.file_path),
        "formats": record.file_extensions,
    }


def _pair_json(pair: MatchPair) -> dict:
    return {"left": _record_json(pair.left), "right": _record_json(pair.right)}


@click.command("compare")
@click.argument("left", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("right", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "-t", "--threshold",
    type=click.FloatRange(0.0, 1.0),
    default=SIMILARITY_THRESHOLD,
    help=f"Title similarity a pair must exceed (default {SIMILARITY_THRESHOLD}).",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
def compare(left: Path, right: Path, threshold: float, json_output: bool) -> None:
    """Compare the ebooks in two directories by title and author."""
    left_records = parse_candidates(find_book_files(left))
    right_records = parse_candidates(find_book_files(right))

    result = compare_collections(left_records, right_records, threshold=threshold)

    if json_output:
        _print_json(result, left, right)
        return

    _print_rich(result, left, right)


def _print_json(result: ComparisonResult, left: Path, right: Path) -> None:
    """Print comparison results as JSON."""
    data = {
        "left": str(left),
        "right": str(right),
        "left_total": result.left_total,
        "right_total": result.right_total,
        "counts": result.counts,
        "buckets": {
            bucket.kind.value: [_pair_json(pair) for pair in bucket.pairs]
            for bucket in result.buckets
        },
    }
    click.echo(json_lib.dumps(data, indent=2))


def _print_rich(result: ComparisonResult, left: Path, right: Path) -> None:
    """Print comparison results with Rich formatting."""
    console.print(
        f"[bold]{result.left_total}[/bold] book(s) in {left}, "
        f"[bold]{result.right_total}[/bold] book(s) in {right}\n"
    )

    summary = Table(title="Comparison Summary")
    summary.add_column("Bucket", style="bold")
    summary.add_column("Count", justify="right")
    for bucket in result.buckets:
        summary.add_row(bucket.kind.label, str(bucket.count))
    console.print(summary)

    for bucket in result.buckets:
        if not bucket.pairs:
            continue
        table = Table(title=bucket.kind.label)
        table.add_column("Left")
        table.add_column("Right")
        for pair in bucket.pairs:
            table.add_row(_describe(pair.left), _describe(pair.right))
        console.print(table)
