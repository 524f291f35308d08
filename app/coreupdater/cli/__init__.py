"""CLI package for coreupdater.

This package contains the Typer application and all subcommands.
"""

from coreupdater.cli.main import app

__all__ = ["app"]
