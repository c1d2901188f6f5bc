"""Config command implementation.

Shows and initializes the pathwalk configuration file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from pathwalk.core.config import WalkConfig, load_config_or_default, save_config
from pathwalk.core.errors import ConfigError
from pathwalk.core.paths import ensure_config_dir, get_config_path
from pathwalk.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    path = get_config_path()
    try:
        config = load_config_or_default(path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "defaults"
    console.print(f"[muted]# {escape(source)}[/muted]")
    console.print(escape(tomli_w.dumps(config.model_dump())), highlight=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_info(f"Config already exists: {escape(str(path))} (use --force to overwrite)")
        return

    try:
        ensure_config_dir()
        saved = save_config(WalkConfig(), path)
    except (ConfigError, RuntimeError) as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {escape(str(saved))}")
