# ABOUTME: End-to-end tests for the `booksteward open` and `booksteward favorite` commands.
# ABOUTME: Checks that opening and favoriting books fill the recent and favorites views.

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from booksteward.cli import cli
from booksteward.db.catalog import LibraryCatalog


@pytest.fixture()
def db(book_tree: Path, tmp_path: Path) -> list[str]:
    """--db arguments for a library with the sample tree imported."""
    args = ["--db", str(tmp_path / "e2e.db")]
    result = CliRunner().invoke(cli, ["import", str(book_tree), *args])
    assert result.exit_code == 0
    return args


class TestOpenCli:
    """E2e tests for `booksteward open`."""

    def test_open_fills_recent_view(self, db: list[str]) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["ls", "--view", "recent", *db])
        assert "No books in the library" in result.output

        result = runner.invoke(cli, ["open", "1", "--no-launch", *db])
        assert result.exit_code == 0
        assert "Opened" in result.output

        result = runner.invoke(cli, ["ls", "--view", "recent", *db])
        assert result.exit_code == 0
        assert "1 book(s)" in result.output

    def test_open_clears_new_flag(self, db: list[str]) -> None:
        runner = CliRunner()
        runner.invoke(cli, ["open", "1", "--no-launch", *db])

        result = runner.invoke(cli, ["ls", "--view", "new", "--no-merge", *db])
        assert result.exit_code == 0
        assert "3 book(s)" in result.output

    def test_open_launches_file(self, db: list[str]) -> None:
        runner = CliRunner()
        with patch("booksteward.cli.commands.open_cmd.click.launch", return_value=0) as launch:
            result = runner.invoke(cli, ["open", "1", *db])

        assert result.exit_code == 0
        launch.assert_called_once()
        assert Path(launch.call_args.args[0]).exists()

    def test_open_unknown_book_fails(self, db: list[str]) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["open", "99", "--no-launch", *db])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestFavoriteCli:
    """E2e tests for `booksteward favorite`."""

    def test_favorite_fills_favorites_view(self, db: list[str]) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["favorite", "3", *db])
        assert result.exit_code == 0
        assert "to favorites" in result.output

        result = runner.invoke(cli, ["ls", "--view", "favorites", *db])
        assert result.exit_code == 0
        assert "1 book(s)" in result.output

    def test_favorite_off(self, db: list[str]) -> None:
        runner = CliRunner()
        runner.invoke(cli, ["favorite", "3", *db])

        result = runner.invoke(cli, ["favorite", "3", "--off", *db])
        assert result.exit_code == 0
        assert "from favorites" in result.output

        result = runner.invoke(cli, ["ls", "--view", "favorites", *db])
        assert "No books in the library" in result.output

    def test_favorite_after_open(self, db: list[str]) -> None:
        """Opening bumps the stored version; favoriting afterwards still succeeds."""
        runner = CliRunner()
        runner.invoke(cli, ["open", "3", "--no-launch", *db])

        result = runner.invoke(cli, ["favorite", "3", *db])
        assert result.exit_code == 0

    def test_version_conflict_reported(self, db: list[str]) -> None:
        runner = CliRunner()
        with patch.object(LibraryCatalog, "update_book", return_value=False):
            result = runner.invoke(cli, ["favorite", "3", *db])

        assert result.exit_code == 1
        assert "changed by another update" in result.output

        result = runner.invoke(cli, ["ls", "--view", "favorites", *db])
        assert "No books in the library" in result.output

    def test_favorite_unknown_book_fails(self, db: list[str]) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["favorite", "99", *db])
        assert result.exit_code == 1
        assert "not found" in result.output
