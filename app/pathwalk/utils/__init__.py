"""Utility modules for pathwalk.

This module exports commonly used utility functions.
"""

from pathwalk.utils.formatting import (
    configure_logging,
    console,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "configure_logging",
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
