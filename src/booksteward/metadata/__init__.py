# ABOUTME: Metadata package: book records, tag variants, filename heuristics, and scoring.
# ABOUTME: Exports the BookRecord dataclass used throughout BookSteward.

from booksteward.metadata.filename import FilenameGuess, parse_filename
from booksteward.metadata.scoring import edit_distance, similarity
from booksteward.metadata.tags import (
    BookTag,
    FormatTag,
    IncompleteInfoTag,
    Tag,
    parse_tag,
    tag_name,
)
from booksteward.metadata.types import BookRecord, Category

__all__ = [
    "BookRecord",
    "BookTag",
    "Category",
    "FilenameGuess",
    "FormatTag",
    "IncompleteInfoTag",
    "Tag",
    "edit_distance",
    "parse_filename",
    "parse_tag",
    "similarity",
    "tag_name",
]
