"""List command implementation.

Builds the core updater list from a network build service listing.
"""

import sys
from pathlib import Path
from typing import Annotated

import typer

from coreupdater.cli.display import print_core_list
from coreupdater.cli.types import OutputFormat, resolve_config
from coreupdater.core.sorting import SortMode
from coreupdater.core.updater_list import CoreListError, CoreUpdaterList
from coreupdater.utils.formatting import print_error


def _read_listing(listing: Path) -> bytes:
    """Read raw listing bytes from a file, or stdin for '-'."""
    if str(listing) == "-":
        return sys.stdin.buffer.read()
    return listing.read_bytes()


def list_cores(
    listing: Annotated[
        Path,
        typer.Argument(
            help="Listing file (.index-extended format), or '-' for stdin.",
        ),
    ],
    cores_dir: Annotated[
        str | None,
        typer.Option("--cores-dir", help="Core installation directory."),
    ] = None,
    info_dir: Annotated[
        str | None,
        typer.Option("--info-dir", help="Core info file directory."),
    ] = None,
    buildbot_url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="Build service base URL."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Configuration file to use."),
    ] = None,
    alphabetical: Annotated[
        bool,
        typer.Option(
            "--alphabetical",
            "-a",
            help="Sort by name only, without manufacturer/console groups.",
        ),
    ] = False,
    hide_experimental: Annotated[
        bool,
        typer.Option("--hide-experimental", "-x", help="Hide experimental cores."),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Limit number of cores to display."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Parse a buildbot core listing and display the resulting list.

    Each listing line has the form '<date> <crc> <filename>'.

    Examples:
        coreupdater list .index-extended
        coreupdater list - < .index-extended
        coreupdater list .index-extended --alphabetical
        coreupdater list .index-extended --format json
    """
    config = resolve_config(
        config_path,
        cores_dir=cores_dir,
        info_dir=info_dir,
        buildbot_url=buildbot_url,
    )

    try:
        data = _read_listing(listing)
    except OSError as e:
        print_error(f"Failed to read listing: {e}")
        raise typer.Exit(code=1) from e

    sort_mode = SortMode.ALPHABETICAL if alphabetical else config.sort_mode
    core_list = CoreUpdaterList()

    try:
        core_list.parse_network_data(
            data,
            config.cores_dir,
            config.info_dir,
            config.buildbot_url,
            sort_mode=sort_mode,
        )
    except CoreListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_core_list(
        core_list,
        output_format,
        show_experimental=config.show_experimental and not hide_experimental,
        limit=limit,
    )
