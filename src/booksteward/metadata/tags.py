# ABOUTME: Tag variants attached to book records (format, incomplete-info, user tags).
# ABOUTME: Serializes to and parses from the plain tag-name strings stored in the catalog.

from dataclasses import dataclass

FORMAT_TAG_PREFIX = "format:"
INCOMPLETE_INFO_TAG_NAME = "incomplete metadata"


@dataclass(frozen=True)
class Tag:
    """A user-assigned tag, identified by name."""

    name: str


@dataclass(frozen=True)
class FormatTag:
    """Derived tag naming a file format, e.g. FormatTag("epub") -> "format:epub"."""

    extension: str

    @property
    def name(self) -> str:
        return f"{FORMAT_TAG_PREFIX}{self.extension.lstrip('.').lower()}"


@dataclass(frozen=True)
class IncompleteInfoTag:
    """Derived tag marking a record whose title, author, or publisher was blank."""

    @property
    def name(self) -> str:
        return INCOMPLETE_INFO_TAG_NAME


BookTag = Tag | FormatTag | IncompleteInfoTag


def tag_name(tag: BookTag) -> str:
    """Return the string form of a tag as stored in the catalog."""
    return tag.name


def parse_tag(name: str) -> BookTag:
    """Parse a stored tag name back into its variant.

    "format:pdf" becomes FormatTag("pdf"), "incomplete metadata" becomes
    IncompleteInfoTag(), anything else is a plain user Tag.
    """
    if name.startswith(FORMAT_TAG_PREFIX) and len(name) > len(FORMAT_TAG_PREFIX):
        return FormatTag(name[len(FORMAT_TAG_PREFIX):])
    if name == INCOMPLETE_INFO_TAG_NAME:
        return IncompleteInfoTag()
    return Tag(name)
