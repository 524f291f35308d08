"""CLI commands for coreupdater.

This package contains all subcommand implementations.
"""

from coreupdater.cli.commands import classify, config, list_cores, pfd

__all__ = ["classify", "config", "list_cores", "pfd"]
