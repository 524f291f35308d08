"""Config command implementation.

Shows and initializes the updater configuration file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer

from coreupdater.core.config import (
    ConfigError,
    UpdaterConfig,
    load_config_or_default,
    save_config,
)
from coreupdater.core.paths import ensure_config_dir, get_config_path
from coreupdater.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the updater configuration.",
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Configuration file to show."),
    ] = None,
) -> None:
    """Print the effective configuration as TOML."""
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    path = config_path or get_config_path()
    if not path.exists():
        print_info(f"No config file at {path}, showing defaults.")

    console.print(tomli_w.dumps(config.model_dump(mode="json")), markup=False, highlight=False)


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Configuration file to write."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file with default settings."""
    if config_path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
    path = config_path or get_config_path()

    if path.exists() and not force:
        print_error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(UpdaterConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
