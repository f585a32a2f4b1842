# ABOUTME: Import pipeline for cataloging ebook files into the BookSteward library.
# ABOUTME: Filters formats, skips already-known paths, builds records from filenames, and stores them.

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from booksteward.core.errors import require
from booksteward.core.scanner import file_size, format_file_size, is_book_file
from booksteward.db.repository import BookRepository
from booksteward.metadata.filename import parse_filename
from booksteward.metadata.tags import FormatTag, IncompleteInfoTag
from booksteward.metadata.types import BookRecord

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Structured outcome of an import batch.

    Every candidate ends up in exactly one of added, skipped (already known
    or repeated within the batch), unsupported (unrecognized format), or
    errors (failed to build or store).
    """

    added: list[BookRecord] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    unsupported: list[Path] = field(default_factory=list)
    errors: list[tuple[Path, str]] = field(default_factory=list)
    total: int = 0

    @property
    def added_count(self) -> int:
        return len(self.added)

    @property
    def not_added_count(self) -> int:
        """Candidates that did not produce a record, for any reason."""
        return self.total - len(self.added)


def _path_key(path: str | Path) -> str:
    """Case-insensitive dedup key for a file path."""
    return str(path).casefold()


def build_record(
    path: Path,
    *,
    now: datetime | None = None,
    describe_size: bool = False,
) -> BookRecord:
    """Build a new, unsaved BookRecord for an ebook file.

    Title and author come from the filename. The record is flagged as new,
    tagged with its format, and tagged as incomplete when title, author, or
    publisher is blank. With describe_size, the file's size is read from
    disk and put in the description.

    Raises:
        OSError: If describe_size is set and the file cannot be stat'ed.
    """
    guess = parse_filename(path.stem)
    extension = path.suffix.lower()

    record = BookRecord(
        title=guess.title,
        author=guess.author,
        file_path=path,
        file_extensions=[extension],
        import_date=now or datetime.now(),
        is_new=True,
    )
    if describe_size:
        record.description = f"File size: {format_file_size(file_size(path))}"

    record.add_tag(FormatTag(extension))
    record.is_info_incomplete = record.missing_core_info()
    if record.is_info_incomplete:
        record.add_tag(IncompleteInfoTag())

    return record


def import_candidates(
    paths: Iterable[str | Path],
    repository: BookRepository,
) -> ImportResult:
    """Import ebook files into the library, skipping ones already cataloged.

    Known paths are read from the repository once, before the batch starts.
    Candidates are processed strictly in order: unrecognized formats are
    set aside, paths matching a known or earlier-accepted path (ignoring
    case) are skipped, and the rest are built into records and added. A
    failure on one file is logged and recorded without stopping the batch.

    Args:
        paths: Candidate file paths.
        repository: Where records are looked up and stored.

    Returns:
        ImportResult with the added records and every skipped or failed path.

    Raises:
        ValidationError: If paths or repository is None.
    """
    require(paths, "paths")
    require(repository, "repository")

    candidates = [Path(p) for p in paths]
    result = ImportResult(total=len(candidates))

    known_paths = frozenset(_path_key(r.file_path) for r in repository.list_all())
    accepted: set[str] = set()

    logger.info(
        "Importing %d candidate file(s); %d already cataloged",
        len(candidates), len(known_paths),
    )

    for path in candidates:
        if not is_book_file(path):
            result.unsupported.append(path)
            continue

        key = _path_key(path)
        if key in known_paths or key in accepted:
            logger.info("Skipping already imported file: %s", path)
            result.skipped.append(path)
            continue

        try:
            record = build_record(path)
            record.id = repository.add_book(record)
        except Exception as exc:
            logger.error("Failed to import %s: %s", path, exc, exc_info=True)
            result.errors.append((path, str(exc)))
            continue

        accepted.add(key)
        result.added.append(record)
        logger.info("Imported %r from %s", record.title, path)

    logger.info(
        "Import finished: %d/%d added, %d skipped, %d unsupported, %d error(s)",
        len(result.added), result.total, len(result.skipped),
        len(result.unsupported), len(result.errors),
    )
    return result


def parse_candidates(paths: Iterable[str | Path]) -> list[BookRecord]:
    """Build transient records for a directory comparison. Nothing is stored.

    Unrecognized formats are dropped. Files whose size cannot be read are
    logged and left out.

    Raises:
        ValidationError: If paths is None.
    """
    require(paths, "paths")

    records: list[BookRecord] = []
    for path in (Path(p) for p in paths):
        if not is_book_file(path):
            continue
        try:
            records.append(build_record(path, describe_size=True))
        except OSError as exc:
            logger.error("Failed to read %s: %s", path, exc)

    logger.debug("Parsed %d book record(s)", len(records))
    return records
