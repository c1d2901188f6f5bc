"""File discovery across directory trees and the archives inside them.

The finder walks a tree, following symbolic links, and reports every
readable regular file carrying one of the wanted extensions. With archive
search enabled it also looks inside .jar and .zip files and reports their
matching entries under ``archive!/entry`` names. Unreadable entries are
logged and skipped rather than aborting the search.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pathwalk.archive import ArchiveEntry, iter_archive_entries, read_entry
from pathwalk.buffer import DEFAULT_BUFFER_SIZE, read_file
from pathwalk.core.errors import EntryUnavailableError
from pathwalk.filters import IS_JAR_OR_ZIP_FILE, ExtensionFilter
from pathwalk.walker.models import VisitFailure, WalkResult
from pathwalk.walker.visitor import CallbackVisitor
from pathwalk.walker.walker import TreeWalker

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FoundFile:
    """A file or archive entry matched by the finder.

    Attributes:
        path: File on disk (the archive itself for archive entries).
        display_name: Path string, or ``archive!/entry`` for archive entries.
        size_bytes: Size in bytes (None if unavailable).
        entry: Archive entry, None for plain files.
    """

    path: Path
    display_name: str
    size_bytes: int | None
    entry: ArchiveEntry | None = None

    @property
    def in_archive(self) -> bool:
        """Check if this is an entry inside an archive."""
        return self.entry is not None

    @classmethod
    def from_path(cls, path: Path) -> "FoundFile":
        """Create a FoundFile for a plain file, sizing it if possible."""
        try:
            size: int | None = path.stat().st_size
        except OSError:
            size = None
        return cls(path=path, display_name=str(path), size_bytes=size)

    @classmethod
    def from_entry(cls, entry: ArchiveEntry) -> "FoundFile":
        """Create a FoundFile for an archive entry."""
        return cls(
            path=entry.archive,
            display_name=entry.display_name,
            size_bytes=entry.size,
            entry=entry,
        )


class FileFinder:
    """Finds files by extension in a tree and, optionally, inside archives.

    Args:
        extensions: Extensions (without leading dot) to look for.
        follow_symlinks: Follow symbolic links while walking.
        include_archives: Also search .jar and .zip files.
    """

    def __init__(
        self,
        extensions: Iterable[str],
        *,
        follow_symlinks: bool = True,
        include_archives: bool = True,
    ) -> None:
        self._filter = ExtensionFilter(*extensions)
        self._walker = TreeWalker(follow_symlinks=follow_symlinks)
        self._include_archives = include_archives
        self._failures: list[VisitFailure] = []
        self._last_walk: WalkResult | None = None

    @property
    def failures(self) -> list[VisitFailure]:
        """Failures skipped during the last search, loops included."""
        return list(self._failures)

    @property
    def last_walk(self) -> WalkResult | None:
        """Summary of the last search's walk."""
        return self._last_walk

    def find(self, root: Path) -> list[FoundFile]:
        """Search the tree below ``root``.

        Args:
            root: File or directory to search.

        Returns:
            Matches in walk order; archive entries follow their archive's
            position in the walk.
        """
        self._failures = []
        found: list[FoundFile] = []

        def on_file(path: Path) -> None:
            if self._filter.accept(path):
                found.append(FoundFile.from_path(path))
            elif self._include_archives and IS_JAR_OR_ZIP_FILE.accept(path):
                found.extend(self._search_archive(path))

        visitor = CallbackVisitor(
            on_file=on_file,
            on_failure=self._on_failure,
            on_leave=self._on_leave,
        )
        self._last_walk = self._walker.walk(Path(root), visitor)
        logger.debug(
            "Searched %s: %d directories, %d files, %d matches",
            root,
            self._last_walk.directories,
            self._last_walk.files,
            len(found),
        )
        return found

    def _search_archive(self, archive: Path) -> list[FoundFile]:
        """List matching entries of one archive, skipping unreadable archives."""
        try:
            return [
                FoundFile.from_entry(entry)
                for entry in iter_archive_entries(archive, self._filter.extensions)
            ]
        except EntryUnavailableError as e:
            logger.warning("Cannot read archive %s: %s", archive, e.cause)
            return []

    def _on_failure(self, path: Path, failure: VisitFailure) -> None:
        self._failures.append(failure)
        if failure.is_loop:
            logger.debug("Skipping symlink loop at %s", path)
        else:
            logger.warning("Cannot access %s: %s", path, failure.cause)

    def _on_leave(self, directory: Path, error: OSError | None) -> None:
        if error is not None:
            logger.warning("Cannot list directory %s: %s", directory, error)


def read_found(found: FoundFile, buffer_size: int = DEFAULT_BUFFER_SIZE) -> bytes:
    """Read the content of a found file or archive entry.

    Raises:
        EntryUnavailableError: If the content cannot be read.
        CapacityExceededError: If the content is too large.
    """
    if found.entry is not None:
        return read_entry(found.entry, buffer_size)
    try:
        return read_file(found.path, buffer_size)
    except OSError as e:
        raise EntryUnavailableError(found.path, e) from e
