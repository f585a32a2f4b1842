# ABOUTME: Display-time merging of same-titled books stored as separate format files.
# ABOUTME: Also selects the browse views (new, favorites, recent, incomplete) over loaded records.

import copy
from collections.abc import Iterable
from enum import Enum

from booksteward.core.errors import require
from booksteward.metadata.tags import tag_name
from booksteward.metadata.types import BookRecord


class BookView(Enum):
    """Predefined browse views over the catalog."""

    ALL = "all"
    NEW = "new"
    FAVORITES = "favorites"
    RECENT = "recent"
    INCOMPLETE = "incomplete"


def select_view(records: Iterable[BookRecord], view: BookView) -> list[BookRecord]:
    """Filter records for a browse view.

    RECENT keeps only books that have been opened, most recent first; the
    other views keep input order.
    """
    records = list(records)
    if view is BookView.NEW:
        return [r for r in records if r.is_new]
    if view is BookView.FAVORITES:
        return [r for r in records if r.is_favorite]
    if view is BookView.INCOMPLETE:
        return [r for r in records if r.is_info_incomplete]
    if view is BookView.RECENT:
        opened = [r for r in records if r.last_opened is not None]
        return sorted(opened, key=lambda r: r.last_opened, reverse=True)
    return records


def _merge_group(group: list[BookRecord]) -> BookRecord:
    """Fold the formats and tags of a same-titled group into a copy of its first record."""
    primary = copy.copy(group[0])
    primary.file_extensions = list(primary.file_extensions)
    primary.tags = list(primary.tags)

    for other in group[1:]:
        for ext in other.file_extensions:
            primary.add_extension(ext)
        for tag in other.tags:
            if not primary.has_tag(tag_name(tag)):
                primary.tags.append(tag)

    return primary


def merge_by_title(records: Iterable[BookRecord]) -> list[BookRecord]:
    """Collapse records with the same title (ignoring case) into one entity each.

    Groups come out in the order their first member was seen. A single
    record passes through unchanged; for larger groups the first record is
    copied and given the union of the group's file extensions and tags.
    The input records are never modified, so merging the output again is a
    no-op.

    Raises:
        ValidationError: If records is None.
    """
    require(records, "records")

    groups: dict[str, list[BookRecord]] = {}
    for record in records:
        groups.setdefault(record.title.casefold(), []).append(record)

    return [
        group[0] if len(group) == 1 else _merge_group(group)
        for group in groups.values()
    ]
