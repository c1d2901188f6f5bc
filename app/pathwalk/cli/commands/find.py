"""Find command implementation.

Searches a directory tree, and the zip/jar archives inside it, for files
with the given extensions.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from pathwalk.core.config import load_config_or_default
from pathwalk.core.errors import ConfigError, PathwalkError
from pathwalk.finder import FileFinder, FoundFile
from pathwalk.paths import relativize
from pathwalk.utils.formatting import (
    console,
    format_size,
    print_error,
    print_success,
    print_warning,
)


class OutputFormat(str, Enum):
    """Output format options for find."""

    TABLE = "table"
    JSON = "json"


def find(
    root: Annotated[
        Path,
        typer.Argument(help="Directory to search."),
    ],
    extensions: Annotated[
        list[str] | None,
        typer.Option(
            "--ext",
            "-e",
            help="Extension to look for, without dot (repeatable). Defaults to config.",
        ),
    ] = None,
    no_archives: Annotated[
        bool,
        typer.Option("--no-archives", help="Do not search inside .jar/.zip files."),
    ] = False,
    no_follow: Annotated[
        bool,
        typer.Option("--no-follow", help="Do not follow symbolic links."),
    ] = False,
    relative: Annotated[
        bool,
        typer.Option("--relative", "-r", help="Show paths relative to ROOT."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Limit number of results.",
        ),
    ] = None,
) -> None:
    """Find files by extension, including entries inside archives."""
    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    wanted = [ext.lstrip(".") for ext in extensions] if extensions else config.extensions
    if not root.is_dir():
        print_error(f"Not a directory: {escape(str(root))}")
        raise typer.Exit(code=1)

    finder = FileFinder(
        wanted,
        follow_symlinks=config.follow_symlinks and not no_follow,
        include_archives=config.include_archives and not no_archives,
    )
    try:
        found = finder.find(root)
    except PathwalkError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    unavailable = [f for f in finder.failures if not f.is_loop]
    if unavailable:
        print_warning(f"Skipped {len(unavailable)} unreadable entries")

    if not found:
        print_success(f"No files matching {', '.join(wanted)} found.")
        return

    display = found[:limit] if limit is not None else found
    names = [_display_name(root, f, relative) for f in display]

    if output_format == OutputFormat.JSON:
        data = [
            {
                "path": name,
                "size_bytes": f.size_bytes,
                "in_archive": f.in_archive,
            }
            for name, f in zip(names, display, strict=True)
        ]
        typer.echo(json.dumps(data, indent=2))
        return

    _print_table(names, display)

    total_size = sum(f.size_bytes or 0 for f in found)
    console.print(f"\n[muted]Found {len(found)} matches ({format_size(total_size)} total)[/muted]")
    if limit is not None and len(display) < len(found):
        shown = f"showing {len(display)} of {len(found)}, limited to {limit}"
        console.print(f"[muted]({shown})[/muted]")


# === Private helper functions ===


def _display_name(root: Path, found: FoundFile, relative: bool) -> str:
    """Name to show for a match, optionally relative to the search root."""
    if not relative:
        return found.display_name
    rel = str(relativize(root, found.path))
    if found.entry is not None:
        return f"{rel}!/{found.entry.name}"
    return rel


def _print_table(names: list[str], found: list[FoundFile]) -> None:
    """Display matches as a Rich table."""
    table = Table(
        title="Matching Files",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", overflow="fold")
    table.add_column("Size", justify="right", width=10)

    for name, f in zip(names, found, strict=True):
        style = "archive_entry" if f.in_archive else "file"
        size_str = format_size(f.size_bytes) if f.size_bytes is not None else "-"
        table.add_row(f"[{style}]{escape(name)}[/{style}]", size_str)

    console.print(table)
