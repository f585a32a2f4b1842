# ABOUTME: Core data structures for cataloged (or transient) book records and categories.
# ABOUTME: BookRecord flows through import, comparison, merging, and the catalog; Category forms a tree.

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from booksteward.metadata.tags import BookTag, tag_name


def is_blank(value: str | None) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()


@dataclass
class BookRecord:
    """A single book file and its metadata.

    id is None until the record has been added to the catalog. Records built
    for a directory comparison are never persisted and keep id None.
    file_extensions is ordered and duplicate-free; tags are unique by name.
    """

    title: str
    file_path: Path
    id: int | None = None
    author: str | None = None
    publisher: str | None = None
    description: str | None = None
    isbn: str | None = None
    publication_year: int | None = None
    file_extensions: list[str] = field(default_factory=list)
    import_date: datetime = field(default_factory=datetime.now)
    last_opened: datetime | None = None
    is_new: bool = True
    is_info_incomplete: bool = True
    is_favorite: bool = False
    tags: list[BookTag] = field(default_factory=list)
    version: int = 0

    @property
    def tag_names(self) -> list[str]:
        """Tag names in record order."""
        return [tag_name(t) for t in self.tags]

    def has_tag(self, name: str) -> bool:
        return name in self.tag_names

    def add_tag(self, tag: BookTag) -> bool:
        """Attach a tag unless one with the same name is already present.

        Returns True if the tag was added.
        """
        if self.has_tag(tag_name(tag)):
            return False
        self.tags.append(tag)
        return True

    @staticmethod
    def _normalize_extension(ext: str) -> str:
        ext = ext.lower()
        return ext if ext.startswith(".") else f".{ext}"

    def has_extension(self, ext: str) -> bool:
        """Check for a file extension. Normalizes dot prefix and case."""
        return self._normalize_extension(ext) in self.file_extensions

    def add_extension(self, ext: str) -> bool:
        """Append an extension (as ".ext", lower-cased) unless already present.

        Returns True if added.
        """
        if self.has_extension(ext):
            return False
        self.file_extensions.append(self._normalize_extension(ext))
        return True

    def missing_core_info(self) -> bool:
        """Whether title, author, or publisher is blank."""
        return is_blank(self.title) or is_blank(self.author) or is_blank(self.publisher)


@dataclass
class Category:
    """A node in the category tree.

    parent_id is None for root categories. children holds direct
    subcategories when loaded as part of a tree; book_ids lists the books
    filed under this category (a book may be in several).
    """

    name: str
    id: int | None = None
    parent_id: int | None = None
    children: list["Category"] = field(default_factory=list)
    book_ids: list[int] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
