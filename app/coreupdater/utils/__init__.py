"""Utility modules for coreupdater.

This module exports commonly used utility functions.
"""

from coreupdater.utils.formatting import (
    console,
    create_core_table,
    err_console,
    format_core_row,
    print_error,
    print_info,
    print_success,
)

__all__ = [
    "console",
    "create_core_table",
    "err_console",
    "format_core_row",
    "print_error",
    "print_info",
    "print_success",
]
