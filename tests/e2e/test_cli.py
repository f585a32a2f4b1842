# ABOUTME: End-to-end tests for the BookSteward root command group.
# ABOUTME: Covers help output, the version flag, and command registration.

from click.testing import CliRunner

from booksteward.cli import cli


class TestCliRoot:
    """E2e tests for `booksteward` itself."""

    def test_help_lists_commands(self) -> None:
        """Top-level help names every subcommand."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("import", "compare", "ls", "search", "tag", "category", "open", "favorite"):
            assert name in result.output

    def test_version(self) -> None:
        """--version prints the installed package version."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_unknown_command_fails(self) -> None:
        """An unregistered subcommand is a usage error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["inspect"])
        assert result.exit_code != 0
