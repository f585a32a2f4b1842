# ABOUTME: End-to-end tests for the `booksteward ls` and `booksteward search` commands.
# ABOUTME: Imports a sample tree, then lists and searches it through CliRunner.

from pathlib import Path

import pytest
from click.testing import CliRunner

from booksteward.cli import cli


@pytest.fixture()
def imported_db(book_tree: Path, tmp_path: Path) -> Path:
    """A library database with the sample tree already imported."""
    db_path = tmp_path / "e2e.db"
    result = CliRunner().invoke(cli, ["import", str(book_tree), "--db", str(db_path)])
    assert result.exit_code == 0
    return db_path


class TestLsCli:
    """E2e tests for `booksteward ls`."""

    def test_merges_formats_by_default(self, imported_db: Path) -> None:
        """The two Name of the Rose files show as one book."""
        runner = CliRunner()
        result = runner.invoke(cli, ["ls", "--db", str(imported_db)])
        assert result.exit_code == 0
        assert "3 book(s)" in result.output
        assert "The Name of the Rose" in result.output

    def test_no_merge_lists_every_file(self, imported_db: Path) -> None:
        """--no-merge shows one row per stored record."""
        runner = CliRunner()
        result = runner.invoke(cli, ["ls", "--no-merge", "--db", str(imported_db)])
        assert result.exit_code == 0
        assert "4 book(s)" in result.output

    def test_new_view(self, imported_db: Path) -> None:
        """Freshly imported books are all new."""
        runner = CliRunner()
        result = runner.invoke(cli, ["ls", "--view", "new", "--db", str(imported_db)])
        assert result.exit_code == 0
        assert "3 book(s)" in result.output

    def test_favorites_view_empty(self, imported_db: Path) -> None:
        """Nothing is a favorite after import."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["ls", "--view", "favorites", "--db", str(imported_db)]
        )
        assert result.exit_code == 0
        assert "No books in the library" in result.output

    def test_invalid_view_rejected(self, imported_db: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["ls", "--view", "popular", "--db", str(imported_db)])
        assert result.exit_code != 0

    def test_filter_by_format_tag(self, imported_db: Path) -> None:
        """Format tags assigned at import can be used as a filter."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["ls", "--tag", "format:mobi", "--db", str(imported_db)]
        )
        assert result.exit_code == 0
        assert "Dune" in result.output
        assert "1 book(s)" in result.output

    def test_unknown_tag_fails(self, imported_db: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["ls", "--tag", "nope", "--db", str(imported_db)])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_empty_library(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["ls", "--db", str(tmp_path / "empty.db")])
        assert result.exit_code == 0
        assert "No books in the library" in result.output


class TestSearchCli:
    """E2e tests for `booksteward search`."""

    def test_search_by_author(self, imported_db: Path) -> None:
        """Author names parsed from filenames are searchable."""
        runner = CliRunner()
        result = runner.invoke(cli, ["search", "Eco", "--db", str(imported_db)])
        assert result.exit_code == 0
        assert "The Name of the Rose" in result.output
        assert "2 book(s)" in result.output

    def test_search_no_results(self, imported_db: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["search", "Tolstoy", "--db", str(imported_db)])
        assert result.exit_code == 0
        assert "No results found" in result.output
