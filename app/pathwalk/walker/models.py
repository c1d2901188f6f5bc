"""Walk domain models.

This module defines the values exchanged between the walker and its
visitors: the outcome a callback returns, the failures the walker reports,
and the summary of a finished walk.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class VisitOutcome(str, Enum):
    """Value returned by a visitor callback to steer the walk.

    Attributes:
        CONTINUE: Carry on with the walk.
        SKIP_SUBTREE: Do not descend into the directory just entered.
            Treated as CONTINUE when returned from any other callback.
        TERMINATE: Stop the whole walk without visiting anything else.
    """

    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"
    TERMINATE = "terminate"


class FailureKind(str, Enum):
    """Classification of an entry the walker could not process.

    Attributes:
        LOOP_DETECTED: A followed symlink leads back to an open ancestor directory.
        ENTRY_UNAVAILABLE: The entry could not be stat'ed or enumerated
            (permission denied, vanished, I/O error).
    """

    LOOP_DETECTED = "loop_detected"
    ENTRY_UNAVAILABLE = "entry_unavailable"


@dataclass(frozen=True, slots=True)
class VisitFailure:
    """A failure reported to a visitor.

    Attributes:
        path: Path of the entry that failed.
        kind: Failure classification.
        error: Exception describing the failure.
    """

    path: Path
    kind: FailureKind
    error: Exception

    @property
    def is_loop(self) -> bool:
        """Check if this failure is a symlink loop."""
        return self.kind == FailureKind.LOOP_DETECTED

    @property
    def cause(self) -> BaseException:
        """The underlying OS error if there is one, else the error itself."""
        return getattr(self.error, "cause", None) or self.error


@dataclass(frozen=True, slots=True)
class WalkResult:
    """Summary of a finished walk.

    Attributes:
        root: Path the walk started from.
        terminated: True if a visitor returned TERMINATE before the walk ended.
        directories: Number of directories entered.
        files: Number of non-directory entries visited.
        failures: Number of failures reported, loops included.
    """

    root: Path
    terminated: bool
    directories: int = 0
    files: int = 0
    failures: int = 0

    @property
    def completed(self) -> bool:
        """Check if the walk ran to the end."""
        return not self.terminated
