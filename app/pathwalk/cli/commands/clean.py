"""Clean command implementation.

Deletes a file or directory tree bottom-up.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from pathwalk.core.errors import DeletionFailedError, PathwalkError, TraversalAbortedError
from pathwalk.utils.formatting import print_error, print_info, print_success
from pathwalk.walker.deleter import delete_tree
from pathwalk.walker.models import VisitFailure
from pathwalk.walker.visitor import CallbackVisitor
from pathwalk.walker.walker import TreeWalker


def clean(
    root: Annotated[
        Path,
        typer.Argument(help="File or directory to delete."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete ROOT and everything below it. Symbolic links are not followed."""
    label = escape(str(root))
    if not root.exists() and not root.is_symlink():
        print_info(f"Nothing to delete: {label} does not exist.")
        return

    visitor = CallbackVisitor(on_failure=_skip_vanished)
    try:
        result = TreeWalker(follow_symlinks=False).walk(root, visitor)
    except PathwalkError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    summary = f"{result.files} file(s) and {result.directories} directory(ies)"
    if dry_run:
        print_info(f"Dry-run: would delete {summary} below {label}.")
        return

    if not yes:
        confirmed = typer.confirm(f"Delete {summary} below {root}?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        deleted = delete_tree(root)
    except DeletionFailedError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Deleted {deleted} entries below {label}.")


def _skip_vanished(path: Path, failure: VisitFailure) -> None:
    """Ignore entries removed while counting, as delete_tree does."""
    if failure.is_loop or isinstance(failure.cause, FileNotFoundError):
        return
    raise TraversalAbortedError(path, failure.cause) from failure.error
