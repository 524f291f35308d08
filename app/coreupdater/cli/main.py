"""Command-line entry point for coreupdater.

Defines the Typer application, global options, and command registration.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from coreupdater import __version__
from coreupdater.cli.commands import classify, config, list_cores, pfd
from coreupdater.utils.formatting import err_console

app = typer.Typer(
    name="coreupdater",
    help="Build and browse core update lists for emulation frontends.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"coreupdater version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to the error console.

    Warnings are always shown; --verbose adds the debug records that
    explain why individual listing lines or cores were skipped.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log skipped listing lines and cores."),
    ] = False,
) -> None:
    """coreupdater - Core update lists for emulation frontends.

    Parses build service listings or feature delivery core names into
    a list grouped by manufacturer and console.
    """
    configure_logging(verbose)


app.command(name="list")(list_cores.list_cores)
app.command(name="pfd")(pfd.list_pfd_cores)
app.command(name="classify")(classify.classify_names)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
