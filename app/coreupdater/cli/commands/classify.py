"""Classify command implementation.

Shows which manufacturer and console model a core name is grouped under.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from coreupdater.core.classifier import classify
from coreupdater.utils.formatting import console


def classify_names(
    names: Annotated[
        list[str],
        typer.Argument(help="Core display names to classify."),
    ],
) -> None:
    """Classify core display names.

    Examples:
        coreupdater classify "Nintendo - SNES / SFC (Snes9x - Current)"
    """
    table = Table(
        title="Core Classification",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("Manufacturer")
    table.add_column("Console")
    table.add_column("Type", style="muted")
    table.add_column("Year", style="info", justify="right")
    table.add_column("Matched", style="muted")

    for name in names:
        rule = classify(name)
        table.add_row(
            escape(name),
            f"[manufacturer_header]{escape(rule.manufacturer)}[/]",
            f"[console_header]{escape(rule.console_model)}[/]",
            rule.console_type,
            str(rule.release_year),
            escape(rule.pattern) if rule.pattern else "-",
        )

    console.print(table)
