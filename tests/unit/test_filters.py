"""Tests for extension predicates and directory filters."""

from pathlib import Path, PurePath
from unittest.mock import patch

import pytest
from pathwalk.core.errors import EntryUnavailableError
from pathwalk.filters import (
    IS_CLASS_FILE,
    IS_JAR_OR_ZIP_FILE,
    IS_JAVA_FILE,
    IS_JAVA_OR_CLASS_FILE,
    DirectoryFilter,
    ExtensionFilter,
    has_extension,
    is_class_file,
    is_java_file,
    matches_any,
)


class TestHasExtension:
    """Tests for has_extension and matches_any."""

    def test_matching_extension(self) -> None:
        """Foo.java has extension java."""
        assert has_extension("Foo.java", "java") is True

    def test_partial_extension(self) -> None:
        """Foo.java does not have extension jav."""
        assert has_extension("Foo.java", "jav") is False

    def test_no_extension(self) -> None:
        """Foo has no extension java."""
        assert has_extension("Foo", "java") is False

    def test_case_sensitive(self) -> None:
        """Matching is case-sensitive."""
        assert has_extension("Foo.JAVA", "java") is False

    def test_path_uses_final_segment(self) -> None:
        """Only the last path segment is considered."""
        assert has_extension(PurePath("src.java/Foo"), "java") is False
        assert has_extension(PurePath("src/Foo.java"), "java") is True

    def test_matches_any(self) -> None:
        """matches_any accepts any of several extensions."""
        assert matches_any("A.class", ("java", "class")) is True
        assert matches_any("A.kt", ("java", "class")) is False
        assert matches_any("A.kt", ()) is False

    def test_name_predicates(self) -> None:
        """is_java_file and is_class_file check their extension."""
        assert is_java_file("A.java") is True
        assert is_java_file("A.class") is False
        assert is_class_file("A.class") is True


class TestExtensionFilter:
    """Tests for ExtensionFilter.accept."""

    def test_accepts_readable_regular_file(self, tmp_path: Path) -> None:
        """A readable regular file with a configured extension is accepted."""
        target = tmp_path / "Foo.java"
        target.write_text("class Foo {}")
        assert IS_JAVA_FILE.accept(target) is True
        assert IS_JAVA_OR_CLASS_FILE.accept(target) is True

    def test_rejects_other_extension(self, tmp_path: Path) -> None:
        """A file with another extension is rejected."""
        target = tmp_path / "Foo.kt"
        target.write_text("")
        assert IS_JAVA_OR_CLASS_FILE.accept(target) is False

    def test_rejects_directory_with_matching_name(self, tmp_path: Path) -> None:
        """A directory named like a matching file is rejected."""
        target = tmp_path / "lib.jar"
        target.mkdir()
        assert IS_JAR_OR_ZIP_FILE.accept(target) is False

    def test_rejects_missing_entry(self, tmp_path: Path) -> None:
        """An entry that no longer exists is rejected, not raised."""
        assert IS_CLASS_FILE.accept(tmp_path / "Gone.class") is False

    def test_rejects_unreadable_file(self, tmp_path: Path) -> None:
        """An unreadable file is rejected."""
        target = tmp_path / "Foo.java"
        target.write_text("")
        with patch("pathwalk.filters.os.access", return_value=False):
            assert IS_JAVA_FILE.accept(target) is False

    def test_query_errors_map_to_false(self, tmp_path: Path) -> None:
        """Errors raised while classifying count as rejection."""
        target = tmp_path / "Foo.java"
        target.write_text("")
        with patch.object(Path, "is_file", side_effect=PermissionError("denied")):
            assert IS_JAVA_FILE.accept(target) is False

    def test_first_matching_extension_decides(self, tmp_path: Path) -> None:
        """Only the first matching extension is checked, later ones are not retried."""
        target = tmp_path / "x.tar.gz"
        target.mkdir()
        with patch("pathwalk.filters.is_readable", return_value=True) as mock_readable:
            assert ExtensionFilter("gz", "tar.gz").accept(target) is False
        mock_readable.assert_called_once_with(target)

    def test_requires_extensions(self) -> None:
        """Constructing without extensions raises ValueError."""
        with pytest.raises(ValueError, match="At least one"):
            ExtensionFilter()

    def test_extensions_keep_order(self) -> None:
        """Configured extensions are kept in insertion order."""
        assert ExtensionFilter("zip", "jar").extensions == ("zip", "jar")


class TestDirectoryFilter:
    """Tests for DirectoryFilter.filter."""

    def test_feeds_accepted_entries(self, tmp_path: Path) -> None:
        """Accepted entries are passed to the callback in name order."""
        (tmp_path / "b.jar").write_bytes(b"")
        (tmp_path / "a.zip").write_bytes(b"")
        (tmp_path / "c.txt").write_bytes(b"")
        (tmp_path / "d.jar").mkdir()

        seen: list[Path] = []
        IS_JAR_OR_ZIP_FILE.filter(tmp_path, seen.append)

        assert seen == [tmp_path / "a.zip", tmp_path / "b.jar"]

    def test_does_not_descend(self, tmp_path: Path) -> None:
        """Only immediate entries are considered."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "a.zip").write_bytes(b"")

        seen: list[Path] = []
        IS_JAR_OR_ZIP_FILE.filter(tmp_path, seen.append)

        assert seen == []

    def test_ignores_non_directory(self, tmp_path: Path) -> None:
        """Filtering a file or missing path does nothing."""
        target = tmp_path / "file.zip"
        target.write_bytes(b"")

        seen: list[Path] = []
        IS_JAR_OR_ZIP_FILE.filter(target, seen.append)
        IS_JAR_OR_ZIP_FILE.filter(tmp_path / "missing", seen.append)

        assert seen == []

    def test_enumeration_error_raises(self, tmp_path: Path) -> None:
        """A directory that cannot be listed raises EntryUnavailableError."""
        with (
            patch.object(Path, "iterdir", side_effect=PermissionError("denied")),
            pytest.raises(EntryUnavailableError) as exc_info,
        ):
            IS_JAR_OR_ZIP_FILE.filter(tmp_path, lambda _p: None)

        assert exc_info.value.path == tmp_path

    def test_custom_subclass(self, tmp_path: Path) -> None:
        """Subclasses only need to implement accept."""

        class StartsWithA(DirectoryFilter):
            def accept(self, entry: Path) -> bool:
                return entry.name.startswith("a")

        (tmp_path / "apple").write_text("")
        (tmp_path / "banana").write_text("")

        seen: list[Path] = []
        StartsWithA().filter(tmp_path, seen.append)

        assert seen == [tmp_path / "apple"]
