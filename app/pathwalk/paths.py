"""Path arithmetic helpers."""

from pathlib import PurePath
from typing import TypeVar

from pathwalk.core.errors import PreconditionViolatedError

P = TypeVar("P", bound=PurePath)


def relativize(root: PurePath, descendant: P) -> P:
    """Return the segments of ``descendant`` that follow ``root``.

    ``descendant`` must start with every segment of ``root``; this is
    checked segment by segment rather than assumed.

    Args:
        root: Ancestor path.
        descendant: Path below (or equal to) ``root``.

    Returns:
        Path of the same flavour as ``descendant`` holding only the trailing
        segments. Empty (no parts) when both paths are equal.

    Raises:
        PreconditionViolatedError: If ``descendant`` is not below ``root``.

    Example:
        >>> relativize(PurePath("/r"), PurePath("/r/sub/b.txt")).parts
        ('sub', 'b.txt')
    """
    size = len(root.parts)
    if descendant.parts[:size] != root.parts:
        msg = f"'{descendant}' is not below '{root}'"
        raise PreconditionViolatedError(msg)
    return type(descendant)(*descendant.parts[size:])
