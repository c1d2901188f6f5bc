"""pathwalk command line.

Global options set up logging; each command lives in cli/commands.
"""

from typing import Annotated

import typer

from pathwalk import __version__
from pathwalk.cli.commands import cat, clean, config, find, tree
from pathwalk.utils.formatting import configure_logging

app = typer.Typer(
    name="pathwalk",
    help="Find, read and delete files in directory trees and archives.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"pathwalk version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=_show_version,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug messages to stderr."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Log errors only."),
    ] = False,
) -> None:
    """Walk, search and clean directory trees, looking inside zip/jar archives."""
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet cannot be combined")
    configure_logging(verbose=verbose, quiet=quiet)


app.command(name="find")(find.find)
app.command(name="tree")(tree.tree)
app.command(name="clean")(clean.clean)
app.command(name="cat")(cat.cat)
app.add_typer(config.app, name="config")
