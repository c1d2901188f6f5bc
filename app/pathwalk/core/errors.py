"""Exception hierarchy for pathwalk.

All errors raised by the traversal, deletion, and read operations derive
from PathwalkError so callers can catch them in one place. Every error
carries the offending path and underlying cause where one exists; message
presentation is left to the caller.
"""

from pathlib import Path


class PathwalkError(Exception):
    """Base exception for all pathwalk errors."""


class LoopDetectedError(PathwalkError):
    """Raised internally when a followed symlink leads back to an open ancestor.

    The walker reports this through the visitor and always continues; it
    never propagates out of a walk.

    Attributes:
        path: Path of the entry that closes the cycle.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File system loop detected at '{path}'")


class EntryUnavailableError(PathwalkError):
    """Raised when an entry cannot be stat'ed, opened, enumerated or read.

    Attributes:
        path: Path of the unavailable entry.
        cause: Underlying OS or archive error.
    """

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Entry '{path}' is unavailable because of '{cause}'")


class TraversalAbortedError(PathwalkError):
    """Raised when a walk is aborted by a visitor that does not tolerate failures.

    Attributes:
        path: Path of the entry whose failure aborted the walk.
        cause: Underlying error.
    """

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not visit file '{path}' because of '{cause}'")


class CapacityExceededError(PathwalkError):
    """Raised when an unknown-length read accumulates more than the byte limit.

    Attributes:
        limit: Maximum number of bytes that may be accumulated.
        total: Number of bytes read when the limit was crossed.
    """

    def __init__(self, limit: int, total: int) -> None:
        self.limit = limit
        self.total = total
        super().__init__(f"2Gb limit reached: read {total} bytes, limit is {limit}")


class DeletionFailedError(PathwalkError):
    """Raised when a file or directory cannot be removed.

    Attributes:
        root: Root of the tree being deleted.
        path: First path that could not be removed or visited.
        cause: Underlying error.
    """

    def __init__(self, root: Path, path: Path, cause: BaseException) -> None:
        self.root = root
        self.path = path
        self.cause = cause
        super().__init__(
            f"Could not remove all folders and files below '{root}': "
            f"'{path}' failed because of '{cause}'"
        )


class PreconditionViolatedError(PathwalkError, ValueError):
    """Raised when an argument violates a documented precondition."""


class ConfigError(PathwalkError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""
