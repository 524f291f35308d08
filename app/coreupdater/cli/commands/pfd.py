"""PFD command implementation.

Builds the core updater list from cores available via play feature
delivery.
"""

from pathlib import Path
from typing import Annotated

import typer

from coreupdater.cli.display import print_core_list
from coreupdater.cli.types import OutputFormat, resolve_config
from coreupdater.core.sorting import SortMode
from coreupdater.core.updater_list import CoreListError, CoreUpdaterList
from coreupdater.utils.formatting import print_error


def list_pfd_cores(
    filenames: Annotated[
        list[str],
        typer.Argument(help="Core file names reported by feature delivery."),
    ],
    cores_dir: Annotated[
        str | None,
        typer.Option("--cores-dir", help="Core installation directory."),
    ] = None,
    info_dir: Annotated[
        str | None,
        typer.Option("--info-dir", help="Core info file directory."),
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
    """Build and display the core list for feature delivery cores.

    Examples:
        coreupdater pfd libsnes9x_libretro_android.so libmgba_libretro_android.so
    """
    config = resolve_config(config_path, cores_dir=cores_dir, info_dir=info_dir)

    sort_mode = SortMode.ALPHABETICAL if alphabetical else config.sort_mode
    core_list = CoreUpdaterList()

    try:
        core_list.parse_pfd_data(
            filenames,
            config.cores_dir,
            config.info_dir,
            sort_mode=sort_mode,
        )
    except CoreListError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_core_list(core_list, output_format, show_experimental=config.show_experimental)
