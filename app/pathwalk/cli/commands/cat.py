"""Cat command implementation.

Reads a single entry of a zip or jar archive.
"""

import zipfile
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from pathwalk.archive import format_entry_name, read_archive_entry
from pathwalk.core.config import load_config_or_default
from pathwalk.core.errors import ConfigError, PathwalkError
from pathwalk.utils.formatting import print_error, print_info


def cat(
    archive: Annotated[
        Path,
        typer.Argument(help="Zip or jar file."),
    ],
    entry: Annotated[
        str,
        typer.Argument(help="Entry name inside the archive."),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the entry to this file instead of stdout."),
    ] = None,
) -> None:
    """Print (or save) the content of an archive entry."""
    try:
        config = load_config_or_default()
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    try:
        with zipfile.ZipFile(archive) as zf:
            data = read_archive_entry(zf, entry, config.buffer_size)
    except (zipfile.BadZipFile, OSError) as e:
        print_error(f"Cannot open archive {escape(str(archive))}: {e}")
        raise typer.Exit(code=1) from e
    except PathwalkError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    if output is None:
        typer.echo(data, nl=False)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(data)
    except OSError as e:
        print_error(f"Failed to write {escape(str(output))}: {e}")
        raise typer.Exit(code=1) from e
    print_info(f"Wrote {len(data)} bytes of {escape(format_entry_name(archive, entry))}")
