# ABOUTME: Unit tests for display merging and browse view selection.
# ABOUTME: Validates title grouping, format/tag unions, immutability of inputs, and idempotence.

from datetime import datetime
from pathlib import Path

import pytest

from booksteward.core.aggregator import BookView, merge_by_title, select_view
from booksteward.core.errors import ValidationError
from booksteward.metadata.tags import FormatTag, Tag
from booksteward.metadata.types import BookRecord


def _book(title: str, ext: str = ".epub", tags=None, **kwargs) -> BookRecord:
    return BookRecord(
        title=title,
        file_path=Path(f"/books/{title}{ext}"),
        file_extensions=[ext],
        tags=list(tags or [FormatTag(ext)]),
        **kwargs,
    )


class TestMergeByTitle:
    """Tests for merge_by_title."""

    def test_merges_formats_ignoring_case(self) -> None:
        records = [_book("foo", ".pdf"), _book("Foo", ".epub")]

        merged = merge_by_title(records)

        assert len(merged) == 1
        assert merged[0].title == "foo"
        assert merged[0].file_extensions == [".pdf", ".epub"]

    def test_unions_tags_by_name(self) -> None:
        records = [
            _book("Dune", ".pdf", tags=[FormatTag("pdf"), Tag("classic")]),
            _book("Dune", ".epub", tags=[FormatTag("epub"), Tag("classic"), Tag("sci-fi")]),
        ]

        merged = merge_by_title(records)

        assert merged[0].tag_names == ["format:pdf", "classic", "format:epub", "sci-fi"]

    def test_skips_duplicate_extensions(self) -> None:
        records = [_book("Dune", ".epub"), _book("Dune", ".epub"), _book("Dune", ".mobi")]
        merged = merge_by_title(records)
        assert merged[0].file_extensions == [".epub", ".mobi"]

    def test_first_record_is_primary(self) -> None:
        first = _book("Dune", ".pdf", author="Frank Herbert")
        second = _book("DUNE", ".epub", author="Someone Else")

        merged = merge_by_title([first, second])

        assert merged[0].author == "Frank Herbert"
        assert merged[0].file_path == first.file_path

    def test_singletons_pass_through(self) -> None:
        record = _book("Dune")
        assert merge_by_title([record])[0] is record

    def test_groups_in_first_seen_order(self) -> None:
        records = [_book("B"), _book("A"), _book("b", ".pdf"), _book("C")]
        assert [r.title for r in merge_by_title(records)] == ["B", "A", "C"]

    def test_does_not_mutate_inputs(self) -> None:
        first = _book("Dune", ".pdf")
        second = _book("Dune", ".epub")

        merge_by_title([first, second])

        assert first.file_extensions == [".pdf"]
        assert first.tag_names == ["format:pdf"]

    def test_similar_titles_are_not_merged(self) -> None:
        merged = merge_by_title([_book("Dune"), _book("Dune!")])
        assert len(merged) == 2

    def test_idempotent(self) -> None:
        records = [_book("foo", ".pdf"), _book("Foo", ".epub"), _book("Bar")]

        once = merge_by_title(records)
        twice = merge_by_title(once)

        assert len(twice) == len(once)
        assert all(a is b for a, b in zip(once, twice))

    def test_empty(self) -> None:
        assert merge_by_title([]) == []

    def test_none_raises(self) -> None:
        with pytest.raises(ValidationError):
            merge_by_title(None)  # type: ignore[arg-type]


class TestSelectView:
    """Tests for select_view."""

    @pytest.fixture()
    def records(self) -> list[BookRecord]:
        return [
            _book("New", is_new=True),
            _book("Fav", is_new=False, is_favorite=True),
            _book("Old", is_new=False, is_info_incomplete=False,
                  last_opened=datetime(2024, 1, 1)),
            _book("Recent", is_new=False, last_opened=datetime(2024, 6, 1)),
        ]

    def test_all(self, records) -> None:
        assert select_view(records, BookView.ALL) == records

    def test_new(self, records) -> None:
        assert [r.title for r in select_view(records, BookView.NEW)] == ["New"]

    def test_favorites(self, records) -> None:
        assert [r.title for r in select_view(records, BookView.FAVORITES)] == ["Fav"]

    def test_recent_sorted_newest_first(self, records) -> None:
        assert [r.title for r in select_view(records, BookView.RECENT)] == ["Recent", "Old"]

    def test_incomplete(self, records) -> None:
        titles = [r.title for r in select_view(records, BookView.INCOMPLETE)]
        assert titles == ["New", "Fav", "Recent"]
