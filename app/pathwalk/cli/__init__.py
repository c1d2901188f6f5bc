"""CLI package for pathwalk.

This package contains the Typer application and all subcommands.
"""

from pathwalk.cli.main import app

__all__ = ["app"]
