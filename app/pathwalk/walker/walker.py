"""Depth-first tree walker.

Walks a directory tree, calling a PathVisitor for every entry. Directory
entries are visited in name order. When symbolic links are followed, the
walker keeps a stack of the (device, inode) keys of the directories it is
currently inside; a directory whose key is already on that stack closes a
cycle, is reported as LOOP_DETECTED and is not entered.

A directory that cannot be opened is reported to visit_file_failed and
never entered. An error while reading an opened directory is passed to
post_visit_directory once the entries read before it were visited.
"""

import contextlib
import os
import stat
import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from pathwalk.core.errors import EntryUnavailableError, LoopDetectedError, PathwalkError
from pathwalk.walker.models import FailureKind, VisitFailure, VisitOutcome, WalkResult
from pathwalk.walker.visitor import CallbackVisitor, PathVisitor

# No practical depth limit
MAX_DEPTH = sys.maxsize

_DirectoryKey = tuple[int, int]


@dataclass(slots=True)
class _WalkCounters:
    """Running counts for a single walk."""

    directories: int = 0
    files: int = 0
    failures: int = 0


class TreeWalker:
    """Walks directory trees depth-first.

    Args:
        follow_symlinks: If True, symbolic links are resolved and linked
            directories are entered. Cycles are suppressed.
        max_depth: Deepest level whose directories are entered; entries at
            this depth are passed to ``visit_file`` as they are. The root is
            at depth 0.
    """

    def __init__(self, *, follow_symlinks: bool = False, max_depth: int = MAX_DEPTH) -> None:
        if max_depth < 0:
            msg = f"Maximum depth cannot be negative, got {max_depth}"
            raise ValueError(msg)
        self._follow_symlinks = follow_symlinks
        self._max_depth = max_depth

    @property
    def follow_symlinks(self) -> bool:
        """Whether symbolic links are followed."""
        return self._follow_symlinks

    def walk(self, root: Path, visitor: PathVisitor) -> WalkResult:
        """Walk the tree below ``root``.

        Args:
            root: File or directory to start from.
            visitor: Callbacks for each entry.

        Returns:
            WalkResult; ``terminated`` is set if a callback returned TERMINATE.

        Raises:
            Whatever the visitor raises; SimpleVisitor raises
            TraversalAbortedError on any failure other than a loop.
        """
        root = Path(root)
        counters = _WalkCounters()
        outcome = self._visit(root, 0, [], visitor, counters)
        return WalkResult(
            root=root,
            terminated=outcome == VisitOutcome.TERMINATE,
            directories=counters.directories,
            files=counters.files,
            failures=counters.failures,
        )

    def _visit(
        self,
        path: Path,
        depth: int,
        open_directories: list[_DirectoryKey],
        visitor: PathVisitor,
        counters: _WalkCounters,
    ) -> VisitOutcome:
        """Visit one entry and, for directories, everything below it.

        Returns:
            TERMINATE if the walk must stop, CONTINUE otherwise.
        """
        try:
            st = self._stat(path)
        except OSError as e:
            return self._report_failure(
                path,
                FailureKind.ENTRY_UNAVAILABLE,
                EntryUnavailableError(path, e),
                visitor,
                counters,
            )

        if depth >= self._max_depth or not stat.S_ISDIR(st.st_mode):
            counters.files += 1
            return self._settle(visitor.visit_file(path))

        key = (st.st_dev, st.st_ino)
        if self._follow_symlinks and key in open_directories:
            return self._report_failure(
                path, FailureKind.LOOP_DETECTED, LoopDetectedError(path), visitor, counters
            )

        try:
            listing = os.scandir(path)
        except OSError as e:
            return self._report_failure(
                path,
                FailureKind.ENTRY_UNAVAILABLE,
                EntryUnavailableError(path, e),
                visitor,
                counters,
            )

        counters.directories += 1
        with listing:
            outcome = visitor.pre_visit_directory(path)
            if outcome == VisitOutcome.TERMINATE:
                return VisitOutcome.TERMINATE
            if outcome == VisitOutcome.SKIP_SUBTREE:
                return VisitOutcome.CONTINUE
            children, error = _read_listing(path, listing)

        open_directories.append(key)
        try:
            for child in children:
                if self._visit(child, depth + 1, open_directories, visitor, counters) == (
                    VisitOutcome.TERMINATE
                ):
                    return VisitOutcome.TERMINATE
        finally:
            open_directories.pop()

        return self._settle(visitor.post_visit_directory(path, error))

    def _stat(self, path: Path) -> os.stat_result:
        """Stat an entry, following links if configured.

        A broken link under link following yields the link's own attributes.
        """
        if not self._follow_symlinks:
            return path.lstat()
        try:
            return path.stat()
        except FileNotFoundError:
            st = path.lstat()
            if not stat.S_ISLNK(st.st_mode):
                raise
            return st

    def _report_failure(
        self,
        path: Path,
        kind: FailureKind,
        error: Exception,
        visitor: PathVisitor,
        counters: _WalkCounters,
    ) -> VisitOutcome:
        """Pass a failure to the visitor.

        Loops always continue, whatever the visitor returns or raises.
        """
        counters.failures += 1
        failure = VisitFailure(path=path, kind=kind, error=error)
        if kind == FailureKind.LOOP_DETECTED:
            with contextlib.suppress(PathwalkError):
                visitor.visit_file_failed(path, failure)
            return VisitOutcome.CONTINUE
        return self._settle(visitor.visit_file_failed(path, failure))

    @staticmethod
    def _settle(outcome: VisitOutcome) -> VisitOutcome:
        """Reduce a callback outcome to TERMINATE or CONTINUE."""
        if outcome == VisitOutcome.TERMINATE:
            return VisitOutcome.TERMINATE
        return VisitOutcome.CONTINUE


def _read_listing(
    directory: Path, listing: Iterator[os.DirEntry[str]]
) -> tuple[list[Path], OSError | None]:
    """Drain an open directory listing into name-sorted child paths.

    An error raised partway through is returned with the entries read before it.
    """
    names: list[str] = []
    error: OSError | None = None
    try:
        for entry in listing:
            names.append(entry.name)
    except OSError as e:
        error = e
    return [directory / name for name in sorted(names)], error


def walk(
    root: Path,
    visitor: PathVisitor,
    follow_symlinks: bool = False,
    max_depth: int = MAX_DEPTH,
) -> WalkResult:
    """Walk the tree below ``root`` with a new TreeWalker.

    See TreeWalker.walk.
    """
    return TreeWalker(follow_symlinks=follow_symlinks, max_depth=max_depth).walk(root, visitor)


def find_files(
    root: Path,
    accept: Callable[[Path], bool],
    *,
    follow_symlinks: bool = True,
) -> list[Path]:
    """Collect every file below ``root`` accepted by ``accept``.

    Any failure other than a loop aborts the search.

    Args:
        root: Directory to search.
        accept: Predicate, e.g. ``ExtensionFilter.accept``.
        follow_symlinks: Follow symbolic links (cycles are suppressed).

    Returns:
        Accepted files in walk order.

    Raises:
        TraversalAbortedError: If an entry cannot be accessed.
    """
    found: list[Path] = []

    def on_file(path: Path) -> None:
        if accept(path):
            found.append(path)

    walk(root, CallbackVisitor(on_file=on_file), follow_symlinks=follow_symlinks)
    return found
