"""Process-wide cached core updater list.

Prefer passing a CoreUpdaterList explicitly. This slot exists for call
sites that cannot thread a list through, such as menu callbacks that
refresh the list and later display it. It holds at most one list and
is not thread-safe; callers sharing it across threads must serialize
access themselves.
"""

from coreupdater.core.info import InfoReader
from coreupdater.core.resolver import PathUtils
from coreupdater.core.updater_list import CoreUpdaterList

# Module-level cached list instance
_cached_list: CoreUpdaterList | None = None


def init_cached_list(
    max_entries: int | None = None,
    path_utils: PathUtils | None = None,
    info_reader: InfoReader | None = None,
) -> CoreUpdaterList:
    """Create a new, empty cached list, discarding any existing one.

    Args:
        max_entries: Optional capacity limit for the list.
        path_utils: Path operations used during ingestion.
        info_reader: Core info reader used during ingestion.

    Returns:
        The newly cached list.
    """
    global _cached_list
    free_cached_list()
    _cached_list = CoreUpdaterList(
        max_entries=max_entries,
        path_utils=path_utils,
        info_reader=info_reader,
    )
    return _cached_list


def get_cached_list() -> CoreUpdaterList | None:
    """Get the cached list, or None if none has been created."""
    return _cached_list


def free_cached_list() -> None:
    """Discard the cached list and clear the slot."""
    global _cached_list
    if _cached_list is not None:
        _cached_list.reset()
    _cached_list = None
