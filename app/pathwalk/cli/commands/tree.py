"""Tree command implementation.

Walks a directory tree and summarizes what was visited.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from pathwalk.core.config import load_config_or_default
from pathwalk.core.errors import ConfigError, PathwalkError
from pathwalk.utils.formatting import console, print_error, print_warning
from pathwalk.walker.models import FailureKind, VisitFailure
from pathwalk.walker.visitor import CallbackVisitor
from pathwalk.walker.walker import MAX_DEPTH, TreeWalker


def tree(
    root: Annotated[
        Path,
        typer.Argument(help="File or directory to walk."),
    ],
    no_follow: Annotated[
        bool,
        typer.Option("--no-follow", help="Do not follow symbolic links."),
    ] = False,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-d", min=0, help="Do not descend below this depth."),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Abort on the first unreadable entry."),
    ] = False,
) -> None:
    """Walk a directory tree and summarize directories, files and failures."""
    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    walker = TreeWalker(
        follow_symlinks=config.follow_symlinks and not no_follow,
        max_depth=MAX_DEPTH if max_depth is None else max_depth,
    )

    failures: list[VisitFailure] = []

    def on_failure(_path: Path, failure: VisitFailure) -> None:
        failures.append(failure)

    def on_leave(directory: Path, error: OSError | None) -> None:
        if error is not None:
            failures.append(VisitFailure(directory, FailureKind.ENTRY_UNAVAILABLE, error))

    if strict:
        visitor = CallbackVisitor()
    else:
        visitor = CallbackVisitor(on_failure=on_failure, on_leave=on_leave)

    try:
        result = walker.walk(root, visitor)
    except PathwalkError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    table = Table(
        title=f"Walk of {escape(str(root))}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Entries")
    table.add_column("Count", justify="right")
    table.add_row("[directory]Directories[/directory]", str(result.directories))
    table.add_row("[file]Files[/file]", str(result.files))
    table.add_row("Failures", str(result.failures if strict else len(failures)))
    console.print(table)

    for failure in failures:
        if failure.is_loop:
            console.print(f"[muted]Loop skipped: {escape(str(failure.path))}[/muted]")
        else:
            print_warning(f"Unavailable: {escape(str(failure.path))} ({failure.cause})")
