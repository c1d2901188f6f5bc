"""Unit tests for the cat command."""

from collections.abc import Callable
from pathlib import Path

import pytest
from pathwalk.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()

MakeZip = Callable[[Path, dict[str, bytes]], Path]


@pytest.fixture
def archive(tmp_path: Path, make_zip: MakeZip) -> Path:
    """Create a jar with one source entry."""
    return make_zip(tmp_path / "src.jar", {"pkg/Hello.java": b"class Hello {}\n"})


class TestCatCommand:
    """Tests for pathwalk cat."""

    def test_prints_entry(self, archive: Path) -> None:
        """The entry content is written to stdout unchanged."""
        result = runner.invoke(app, ["cat", str(archive), "pkg/Hello.java"])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"class Hello {}\n"

    def test_writes_output_file(self, archive: Path, tmp_path: Path) -> None:
        """--output saves the entry to a file."""
        target = tmp_path / "out" / "Hello.java"

        result = runner.invoke(app, ["cat", str(archive), "pkg/Hello.java", "-o", str(target)])

        assert result.exit_code == 0
        assert target.read_bytes() == b"class Hello {}\n"
        assert "Wrote 15 bytes" in result.stdout

    def test_missing_entry(self, archive: Path) -> None:
        """A missing entry exits with code 1."""
        result = runner.invoke(app, ["cat", str(archive), "pkg/Nope.java"])

        assert result.exit_code == 1
        assert "unavailable" in result.output

    def test_not_an_archive(self, tmp_path: Path) -> None:
        """A file that is not a zip exits with code 1."""
        bogus = tmp_path / "bogus.jar"
        bogus.write_text("nope")

        result = runner.invoke(app, ["cat", str(bogus), "x"])

        assert result.exit_code == 1
        assert "Cannot open archive" in result.output
