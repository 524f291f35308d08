"""Data models for coreupdater.

This module exports the core data structures used throughout the application.
"""

from coreupdater.models.entry import CoreEntry, ListProvenance, ReleaseDate

__all__ = [
    "CoreEntry",
    "ListProvenance",
    "ReleaseDate",
]
