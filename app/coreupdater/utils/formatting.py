"""Rich output helpers.

Shared consoles, the core list table layout, and status messages.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coreupdater.core.theme import get_theme

if TYPE_CHECKING:
    from coreupdater.models.entry import CoreEntry


def _make_console(stderr: bool = False) -> Console:
    # truecolor only on an interactive stream
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def create_core_table(title: str = "Available Cores") -> Table:
    """Create a pre-configured table for displaying core list entries.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for core display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    # Status column: minimal width, icon only, no header text
    table.add_column("", width=2, justify="center")
    table.add_column("Core", no_wrap=True)
    table.add_column("File", style="muted")
    table.add_column("Date", style="info", justify="right")
    table.add_column("CRC", style="muted")
    table.add_column("License", style="text", overflow="ellipsis")
    return table


def format_core_row(entry: CoreEntry) -> tuple[str, str, str, str, str, str]:
    """Format a core list entry as a table row with proper styling.

    Header rows span the name column only and are styled by kind.
    Experimental cores are marked with an empty circle.

    Args:
        entry: The entry to format.

    Returns:
        Tuple of (icon, name, file, date, crc, licenses) with Rich markup.
    """
    name = escape(entry.display_name)

    if entry.is_manufacturer_header:
        return ("", f"[manufacturer_header]{name}[/]", "", "", "", "")
    if entry.is_console_header:
        return ("", f"[console_header]{name}[/]", "", "", "", "")

    if entry.is_experimental:
        icon = "[core_experimental]○[/]"  # Empty circle
        name = f"[core_experimental]{name}[/]"
    else:
        icon = "[core_stable]●[/]"  # Filled circle
        name = f"[core_stable]{name}[/]"

    date = str(entry.date) if entry.date.is_set else "-"

    return (
        icon,
        name,
        escape(entry.remote_filename),
        date,
        entry.crc_hex or "-",
        escape(entry.licenses_display) or "-",
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
