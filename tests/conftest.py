"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import pytest
from coreupdater.core.info import CoreInfoRecord, StaticInfoReader


@pytest.fixture
def buildbot_url() -> str:
    """Build service base URL used across tests."""
    return "https://buildbot.example.com/nightly/linux/x86_64/latest"


@pytest.fixture
def sample_listing() -> str:
    """Sample buildbot .index-extended listing."""
    return """2021-07-04 1a2b3c4d snes9x_libretro.so.zip
2021-07-05 2b3c4d5e mgba_libretro.so.zip
2021-07-06 3c4d5e6f mupen64plus_next_libretro.so.zip
2021-07-07 4d5e6f70 pcsx_rearmed_libretro.so.zip
2021-07-08 5e6f7081 genesis_plus_gx_libretro.so.zip
"""


@pytest.fixture
def sample_info_records() -> dict[str, CoreInfoRecord]:
    """Core info records keyed by info file name."""
    return {
        "snes9x_libretro.info": CoreInfoRecord(
            display_name="Nintendo - SNES / SFC (Snes9x - Current)",
            description="A portable SNES emulator",
            licenses="Non-commercial",
        ),
        "mgba_libretro.info": CoreInfoRecord(
            display_name="Nintendo - Game Boy Advance (mGBA)",
            licenses="MPLv2.0",
        ),
        "mupen64plus_next_libretro.info": CoreInfoRecord(
            display_name="Nintendo - Nintendo 64 (Mupen64Plus-Next)",
            licenses="GPLv2",
        ),
        "pcsx_rearmed_libretro.info": CoreInfoRecord(
            display_name="Sony - PlayStation (PCSX ReARMed)",
            licenses="GPLv2",
        ),
        "genesis_plus_gx_libretro.info": CoreInfoRecord(
            display_name="Sega - MS/GG/MD/CD (Genesis Plus GX)",
            licenses="Non-commercial",
            is_experimental=True,
        ),
    }


@pytest.fixture
def info_reader(sample_info_records: dict[str, CoreInfoRecord]) -> StaticInfoReader:
    """In-memory info reader serving the sample records."""
    return StaticInfoReader(sample_info_records)
