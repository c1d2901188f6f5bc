"""Visitor contract for the tree walker.

A visitor is anything with the four callbacks of ``PathVisitor``. Two
ready-made shapes are provided: ``SimpleVisitor``, whose defaults continue
everywhere and treat any failure other than a loop as fatal, and
``CallbackVisitor``, which assembles a visitor from plain functions.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from pathwalk.core.errors import TraversalAbortedError
from pathwalk.walker.models import VisitFailure, VisitOutcome


@runtime_checkable
class PathVisitor(Protocol):
    """Callbacks invoked by the walker for each entry.

    Example:
        >>> walk(Path("src"), SimpleVisitor())
    """

    def pre_visit_directory(self, directory: Path) -> VisitOutcome:
        """Called before the entries of ``directory`` are visited."""
        ...

    def visit_file(self, path: Path) -> VisitOutcome:
        """Called for each non-directory entry."""
        ...

    def visit_file_failed(self, path: Path, failure: VisitFailure) -> VisitOutcome:
        """Called for each entry that could not be processed."""
        ...

    def post_visit_directory(self, directory: Path, error: OSError | None) -> VisitOutcome:
        """Called after all entries of ``directory`` were visited.

        ``error`` is set if the directory could not be enumerated.
        """
        ...


class SimpleVisitor:
    """Visitor that continues everywhere and aborts on real failures.

    Loops continue; any other failure raises TraversalAbortedError, which
    propagates out of the walk. Subclasses override what they need.
    """

    def pre_visit_directory(self, directory: Path) -> VisitOutcome:
        return VisitOutcome.CONTINUE

    def visit_file(self, path: Path) -> VisitOutcome:
        return VisitOutcome.CONTINUE

    def visit_file_failed(self, path: Path, failure: VisitFailure) -> VisitOutcome:
        if failure.is_loop:
            return VisitOutcome.CONTINUE
        raise TraversalAbortedError(path, failure.cause) from failure.error

    def post_visit_directory(self, directory: Path, error: OSError | None) -> VisitOutcome:
        if error is not None:
            raise TraversalAbortedError(directory, error) from error
        return VisitOutcome.CONTINUE


@dataclass(slots=True)
class CallbackVisitor(SimpleVisitor):
    """Visitor built from optional plain functions.

    Missing callbacks fall back to SimpleVisitor behavior, so a visitor
    without ``on_failure`` aborts the walk on any non-loop failure.
    Callbacks returning None are treated as CONTINUE.

    Attributes:
        on_enter: Called with each directory before its entries.
        on_file: Called with each non-directory entry.
        on_failure: Called with each failure.
        on_leave: Called with each directory and its enumeration error.
    """

    on_enter: Callable[[Path], VisitOutcome | None] | None = None
    on_file: Callable[[Path], VisitOutcome | None] | None = None
    on_failure: Callable[[Path, VisitFailure], VisitOutcome | None] | None = None
    on_leave: Callable[[Path, OSError | None], VisitOutcome | None] | None = None

    def pre_visit_directory(self, directory: Path) -> VisitOutcome:
        if self.on_enter is None:
            return SimpleVisitor.pre_visit_directory(self, directory)
        return self.on_enter(directory) or VisitOutcome.CONTINUE

    def visit_file(self, path: Path) -> VisitOutcome:
        if self.on_file is None:
            return SimpleVisitor.visit_file(self, path)
        return self.on_file(path) or VisitOutcome.CONTINUE

    def visit_file_failed(self, path: Path, failure: VisitFailure) -> VisitOutcome:
        if self.on_failure is None:
            return SimpleVisitor.visit_file_failed(self, path, failure)
        return self.on_failure(path, failure) or VisitOutcome.CONTINUE

    def post_visit_directory(self, directory: Path, error: OSError | None) -> VisitOutcome:
        if self.on_leave is None:
            return SimpleVisitor.post_visit_directory(self, directory, error)
        return self.on_leave(directory, error) or VisitOutcome.CONTINUE
