"""Unit tests for the tree command."""

import re
from collections.abc import Callable
from pathlib import Path

from pathwalk.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _count(output: str, label: str) -> int:
    """Extract the count printed next to a row label."""
    match = re.search(rf"{label}\W+(\d+)", output)
    assert match is not None, output
    return int(match.group(1))


class TestTreeCommand:
    """Tests for pathwalk tree."""

    def test_summary(self, sample_tree: Path) -> None:
        """Directories, files and failures are counted."""
        result = runner.invoke(app, ["tree", str(sample_tree)])

        assert result.exit_code == 0
        assert _count(result.stdout, "Directories") == 3
        assert _count(result.stdout, "Files") == 2
        assert _count(result.stdout, "Failures") == 0

    def test_max_depth(self, sample_tree: Path) -> None:
        """--max-depth stops the descent."""
        result = runner.invoke(app, ["tree", str(sample_tree), "-d", "1"])

        assert result.exit_code == 0
        assert _count(result.stdout, "Directories") == 1
        assert _count(result.stdout, "Files") == 2

    def test_loop_is_reported(self, sample_tree: Path) -> None:
        """A symlink cycle is listed and skipped."""
        (sample_tree / "sub" / "up").symlink_to(sample_tree, target_is_directory=True)

        result = runner.invoke(app, ["tree", str(sample_tree)])

        assert result.exit_code == 0
        assert "Loop skipped" in result.stdout
        assert _count(result.stdout, "Failures") == 1

    def test_no_follow(self, sample_tree: Path) -> None:
        """With --no-follow a directory link counts as a file."""
        (sample_tree / "sub" / "up").symlink_to(sample_tree, target_is_directory=True)

        result = runner.invoke(app, ["tree", str(sample_tree), "--no-follow"])

        assert result.exit_code == 0
        assert _count(result.stdout, "Files") == 3
        assert "Loop skipped" not in result.stdout

    def test_missing_root_tolerated(self, tmp_path: Path) -> None:
        """Without --strict an unavailable root is reported as a failure."""
        result = runner.invoke(app, ["tree", str(tmp_path / "missing")])

        assert result.exit_code == 0
        assert "Unavailable" in result.output

    def test_unreadable_directory_tolerated(
        self, sample_tree: Path, deny_listing: Callable[[str], None]
    ) -> None:
        """An unreadable directory is counted as a failure."""
        deny_listing("sub")

        result = runner.invoke(app, ["tree", str(sample_tree)])

        assert result.exit_code == 0
        assert _count(result.stdout, "Failures") == 1
        assert "Unavailable" in result.output

    def test_missing_root_strict(self, tmp_path: Path) -> None:
        """With --strict the walk aborts."""
        result = runner.invoke(app, ["tree", str(tmp_path / "missing"), "--strict"])

        assert result.exit_code == 1
        assert "Could not visit file" in result.output
