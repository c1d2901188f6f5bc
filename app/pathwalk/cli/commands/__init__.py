"""CLI commands for pathwalk.

This package contains all subcommand implementations.
"""

from pathwalk.cli.commands import cat, clean, config, find, tree

__all__ = ["cat", "clean", "config", "find", "tree"]
