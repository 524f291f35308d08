"""coreupdater - Core update list builder for emulation frontends.

Builds, enriches, deduplicates, and orders the list of installable
cores offered by a network build service or on-device feature delivery.
"""

__version__ = "0.3.0"
