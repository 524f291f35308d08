"""Shared Rich display functions for core updater lists.

Provides the table and JSON renderers used by the commands that build
a core list (list, pfd).
"""

import json

from coreupdater.cli.types import OutputFormat
from coreupdater.core.updater_list import CoreUpdaterList
from coreupdater.models.entry import CoreEntry, ListProvenance
from coreupdater.utils.formatting import console, create_core_table, format_core_row

_TITLES: dict[ListProvenance, str] = {
    ListProvenance.BUILDBOT: "Available Cores (Buildbot)",
    ListProvenance.PFD: "Available Cores (Play Feature Delivery)",
    ListProvenance.UNKNOWN: "Available Cores",
}


def select_entries(
    core_list: CoreUpdaterList,
    *,
    show_experimental: bool = True,
    limit: int | None = None,
) -> list[CoreEntry]:
    """Select the rows to display from a core list.

    Hidden experimental cores are removed together with any header
    left without cores beneath it. The limit counts cores only.

    Args:
        core_list: List to select from.
        show_experimental: Whether experimental cores are kept.
        limit: Maximum number of cores to keep.

    Returns:
        Entries to display, in list order.
    """
    selected: list[CoreEntry] = []
    pending_headers: list[CoreEntry] = []
    shown = 0

    for entry in core_list:
        if entry.is_manufacturer_header:
            pending_headers = [entry]
            continue
        if entry.is_console_header:
            # A new console replaces an unused console header of the same manufacturer
            pending_headers = [h for h in pending_headers if h.is_manufacturer_header]
            pending_headers.append(entry)
            continue

        if not show_experimental and entry.is_experimental:
            continue
        if limit is not None and shown >= limit:
            break

        selected.extend(pending_headers)
        pending_headers = []
        selected.append(entry)
        shown += 1

    return selected


def print_core_list(
    core_list: CoreUpdaterList,
    output_format: OutputFormat = OutputFormat.TABLE,
    *,
    show_experimental: bool = True,
    limit: int | None = None,
) -> None:
    """Render a core list to the console.

    Args:
        core_list: List to render.
        output_format: Table or JSON output.
        show_experimental: Whether experimental cores are shown.
        limit: Maximum number of cores to show.
    """
    entries = select_entries(core_list, show_experimental=show_experimental, limit=limit)

    if output_format == OutputFormat.JSON:
        data = core_list.to_dict()
        data["entries"] = [entry.to_dict() for entry in entries]
        console.print_json(json.dumps(data))
        return

    table = create_core_table(_TITLES[core_list.provenance])
    for entry in entries:
        table.add_row(*format_core_row(entry))
    console.print(table)

    shown = sum(1 for e in entries if not e.is_header)
    summary = f"Showing {shown} of {core_list.package_count} cores"
    if limit is not None and shown < core_list.package_count:
        summary += f" (limited to {limit})"
    console.print(f"\n[dim]{summary}[/]")
