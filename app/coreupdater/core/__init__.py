"""Core updater list building.

This module exports the list container, its ingestion errors, and the
ordering modes.
"""

from coreupdater.core.classifier import CLASSIFIER_RULES, FALLBACK_RULE, ClassifierRule, classify
from coreupdater.core.sorting import SortMode
from coreupdater.core.updater_list import (
    CoreListError,
    CoreUpdaterList,
    EmptyListingError,
    NoEntriesError,
)

__all__ = [
    "CLASSIFIER_RULES",
    "FALLBACK_RULE",
    "ClassifierRule",
    "CoreListError",
    "CoreUpdaterList",
    "EmptyListingError",
    "NoEntriesError",
    "SortMode",
    "classify",
]
