"""Unit tests for the exception hierarchy."""

from pathlib import Path

import pytest
from pathwalk.core.errors import (
    CapacityExceededError,
    ConfigNotFoundError,
    DeletionFailedError,
    EntryUnavailableError,
    LoopDetectedError,
    PathwalkError,
    PreconditionViolatedError,
    TraversalAbortedError,
)


class TestErrors:
    """Tests for error attributes and messages."""

    @pytest.mark.parametrize(
        "error",
        [
            LoopDetectedError(Path("a")),
            EntryUnavailableError(Path("a"), OSError("io")),
            TraversalAbortedError(Path("a"), OSError("io")),
            CapacityExceededError(10, 11),
            DeletionFailedError(Path("r"), Path("r/a"), OSError("io")),
            PreconditionViolatedError("bad"),
            ConfigNotFoundError("missing"),
        ],
    )
    def test_all_are_pathwalk_errors(self, error: Exception) -> None:
        """Every error can be caught as PathwalkError."""
        assert isinstance(error, PathwalkError)

    def test_traversal_aborted_message(self) -> None:
        """The message names the file and the cause."""
        error = TraversalAbortedError(Path("x/y"), PermissionError("denied"))
        assert str(error) == "Could not visit file 'x/y' because of 'denied'"

    def test_deletion_failed_message(self) -> None:
        """The message names the root, the failing path and the cause."""
        cause = OSError("busy")
        error = DeletionFailedError(Path("r"), Path("r/sub"), cause)

        assert "below 'r'" in str(error)
        assert "'r/sub' failed because of 'busy'" in str(error)
        assert error.cause is cause

    def test_capacity_exceeded(self) -> None:
        """The limit and total are kept."""
        error = CapacityExceededError(100, 101)
        assert (error.limit, error.total) == (100, 101)
        assert str(error).startswith("2Gb limit reached")

    def test_precondition_is_value_error(self) -> None:
        """Precondition violations can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise PreconditionViolatedError("bad")
