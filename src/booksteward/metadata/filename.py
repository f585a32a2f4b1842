# ABOUTME: Best-guess title/author extraction from a bare ebook filename.
# ABOUTME: Handles "Author - Title" and "Title - Author" naming, biased toward short author names.

from dataclasses import dataclass

# A leading segment shorter than this (and shorter than the rest) is read as the author.
_MAX_AUTHOR_LENGTH = 20


@dataclass(frozen=True)
class FilenameGuess:
    """Title and author inferred from a filename stem."""

    title: str
    author: str | None = None


def parse_filename(stem: str) -> FilenameGuess:
    """Guess title and author from a filename with its extension stripped.

    Splits on the first hyphen only. If the first part is shorter than the
    second and under 20 characters, it is taken as the author; otherwise the
    first part is the title and the second the author. Without a hyphen the
    whole stem is the title.

    Examples:
        "J.Doe - Book A"  -> title "Book A", author "J.Doe"
        "Book A - J.Doe"  -> title "Book A", author "J.Doe"
        "Dune"            -> title "Dune", no author
    """
    if "-" not in stem:
        return FilenameGuess(title=stem.strip())

    first, second = (part.strip() for part in stem.split("-", 1))
    if len(first) < len(second) and len(first) < _MAX_AUTHOR_LENGTH:
        return FilenameGuess(title=second, author=first)
    return FilenameGuess(title=first, author=second)
