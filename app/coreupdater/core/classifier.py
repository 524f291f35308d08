"""Core classification rules for manufacturer and console grouping.

This module maps a core display name to the manufacturer and console
model it emulates. Rules are matched by case-sensitive substring in
table order and the first match wins, so a console-family pattern
listed before a more specific name shadows it (e.g. 'Game Boy' before
'Game Boy Advance'). The last rule is the universal fallback.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClassifierRule:
    """Classification metadata for a group of cores.

    Attributes:
        pattern: Substring matched against the display name (None = fallback).
        manufacturer: Manufacturer name (Nintendo, Sony, Sega, etc.).
        console_model: Specific console model name.
        console_type: Console type ('home', 'portable', 'arcade', 'computer').
        release_year: Console release year.
        manufacturer_priority: Manufacturer ordering (lower sorts first).
        console_priority: Console ordering within a manufacturer.
    """

    pattern: str | None
    manufacturer: str
    console_model: str
    console_type: str
    release_year: int
    manufacturer_priority: int
    console_priority: int

    def matches(self, display_name: str) -> bool:
        """Check if this rule's pattern occurs in the display name."""
        return self.pattern is not None and self.pattern in display_name


def _rule(
    pattern: str | None,
    manufacturer: str,
    console_model: str,
    console_type: str,
    release_year: int,
    manufacturer_priority: int,
    console_priority: int,
) -> ClassifierRule:
    return ClassifierRule(
        pattern,
        manufacturer,
        console_model,
        console_type,
        release_year,
        manufacturer_priority,
        console_priority,
    )


# Ordered rule table. Order is the tie-break for overlapping patterns.
CLASSIFIER_RULES: tuple[ClassifierRule, ...] = (
    # Nintendo - Home consoles
    _rule("Family Computer", "Nintendo", "Nintendo Entertainment System", "home", 1983, 1, 10),
    _rule("Famicom", "Nintendo", "Nintendo Entertainment System", "home", 1983, 1, 10),
    _rule("FCEUmm", "Nintendo", "Nintendo Entertainment System", "home", 1983, 1, 10),
    _rule("Nestopia", "Nintendo", "Nintendo Entertainment System", "home", 1983, 1, 10),
    _rule("QuickNES", "Nintendo", "Nintendo Entertainment System", "home", 1983, 1, 10),
    _rule("Super Nintendo", "Nintendo", "Super Nintendo Entertainment System", "home", 1990, 1, 20),
    _rule("Snes9x", "Nintendo", "Super Nintendo Entertainment System", "home", 1990, 1, 20),
    _rule("bsnes", "Nintendo", "Super Nintendo Entertainment System", "home", 1990, 1, 20),
    _rule("higan", "Nintendo", "Super Nintendo Entertainment System", "home", 1990, 1, 20),
    _rule("Nintendo 64", "Nintendo", "Nintendo 64", "home", 1996, 1, 30),
    _rule("Mupen64Plus", "Nintendo", "Nintendo 64", "home", 1996, 1, 30),
    _rule("ParaLLEl", "Nintendo", "Nintendo 64", "home", 1996, 1, 30),
    _rule("GameCube", "Nintendo", "Nintendo GameCube", "home", 2001, 1, 40),
    _rule("Dolphin", "Nintendo", "Nintendo GameCube", "home", 2001, 1, 40),
    _rule("Wii", "Nintendo", "Nintendo Wii", "home", 2006, 1, 50),
    # Nintendo - Portable consoles
    _rule("Game Boy", "Nintendo", "Game Boy", "portable", 1989, 1, 100),
    _rule("SameBoy", "Nintendo", "Game Boy", "portable", 1989, 1, 100),
    _rule("Gambatte", "Nintendo", "Game Boy", "portable", 1989, 1, 100),
    _rule("TGB Dual", "Nintendo", "Game Boy", "portable", 1989, 1, 100),
    _rule("Game Boy Color", "Nintendo", "Game Boy Color", "portable", 1998, 1, 110),
    _rule("Game Boy Advance", "Nintendo", "Game Boy Advance", "portable", 2001, 1, 120),
    _rule("mGBA", "Nintendo", "Game Boy Advance", "portable", 2001, 1, 120),
    _rule("VBA", "Nintendo", "Game Boy Advance", "portable", 2001, 1, 120),
    _rule("VBA-M", "Nintendo", "Game Boy Advance", "portable", 2001, 1, 120),
    _rule("Nintendo DS", "Nintendo", "Nintendo DS", "portable", 2004, 1, 130),
    _rule("DeSmuME", "Nintendo", "Nintendo DS", "portable", 2004, 1, 130),
    _rule("melonDS", "Nintendo", "Nintendo DS", "portable", 2004, 1, 130),
    _rule("Nintendo 3DS", "Nintendo", "Nintendo 3DS", "portable", 2011, 1, 140),
    _rule("Citra", "Nintendo", "Nintendo 3DS", "portable", 2011, 1, 140),
    # Sony - Home consoles
    _rule("PlayStation", "Sony", "PlayStation", "home", 1994, 2, 10),
    _rule("PCSX", "Sony", "PlayStation", "home", 1994, 2, 10),
    _rule("Beetle PSX", "Sony", "PlayStation", "home", 1994, 2, 10),
    _rule("SwanStation", "Sony", "PlayStation", "home", 1994, 2, 10),
    _rule("PlayStation 2", "Sony", "PlayStation 2", "home", 2000, 2, 20),
    _rule("PCSX2", "Sony", "PlayStation 2", "home", 2000, 2, 20),
    _rule("PlayStation 3", "Sony", "PlayStation 3", "home", 2006, 2, 30),
    _rule("RPCS3", "Sony", "PlayStation 3", "home", 2006, 2, 30),
    # Sony - Portable consoles
    _rule("PlayStation Portable", "Sony", "PlayStation Portable", "portable", 2004, 2, 100),
    _rule("PPSSPP", "Sony", "PlayStation Portable", "portable", 2004, 2, 100),
    _rule("PlayStation Vita", "Sony", "PlayStation Vita", "portable", 2011, 2, 110),
    _rule("Vita3K", "Sony", "PlayStation Vita", "portable", 2011, 2, 110),
    # Sega - Home consoles
    _rule("Master System", "Sega", "Sega Master System", "home", 1986, 3, 10),
    _rule("SMS Plus", "Sega", "Sega Master System", "home", 1986, 3, 10),
    _rule("Genesis", "Sega", "Sega Genesis/Mega Drive", "home", 1988, 3, 20),
    _rule("Mega Drive", "Sega", "Sega Genesis/Mega Drive", "home", 1988, 3, 20),
    _rule("Genesis Plus GX", "Sega", "Sega Genesis/Mega Drive", "home", 1988, 3, 20),
    _rule("PicoDrive", "Sega", "Sega Genesis/Mega Drive", "home", 1988, 3, 20),
    _rule("Sega CD", "Sega", "Sega CD", "home", 1991, 3, 25),
    _rule("32X", "Sega", "Sega 32X", "home", 1994, 3, 28),
    _rule("Saturn", "Sega", "Sega Saturn", "home", 1994, 3, 30),
    _rule("Beetle Saturn", "Sega", "Sega Saturn", "home", 1994, 3, 30),
    _rule("Yabause", "Sega", "Sega Saturn", "home", 1994, 3, 30),
    _rule("Kronos", "Sega", "Sega Saturn", "home", 1994, 3, 30),
    _rule("Dreamcast", "Sega", "Sega Dreamcast", "home", 1998, 3, 40),
    _rule("Flycast", "Sega", "Sega Dreamcast", "home", 1998, 3, 40),
    _rule("Redream", "Sega", "Sega Dreamcast", "home", 1998, 3, 40),
    # Sega - Portable consoles
    _rule("Game Gear", "Sega", "Sega Game Gear", "portable", 1990, 3, 100),
    # Atari - Home consoles
    _rule("Atari 2600", "Atari", "Atari 2600", "home", 1977, 4, 10),
    _rule("Stella", "Atari", "Atari 2600", "home", 1977, 4, 10),
    _rule("Atari 5200", "Atari", "Atari 5200", "home", 1982, 4, 20),
    _rule("Atari 7800", "Atari", "Atari 7800", "home", 1986, 4, 30),
    _rule("ProSystem", "Atari", "Atari 7800", "home", 1986, 4, 30),
    _rule("Atari Jaguar", "Atari", "Atari Jaguar", "home", 1993, 4, 40),
    _rule("Virtual Jaguar", "Atari", "Atari Jaguar", "home", 1993, 4, 40),
    # Atari - Portable consoles
    _rule("Atari Lynx", "Atari", "Atari Lynx", "portable", 1989, 4, 100),
    _rule("Handy", "Atari", "Atari Lynx", "portable", 1989, 4, 100),
    # SNK
    _rule("Neo Geo", "SNK", "Neo Geo", "home", 1990, 5, 10),
    _rule("FinalBurn Neo", "SNK", "Neo Geo", "home", 1990, 5, 10),
    _rule("Neo Geo Pocket", "SNK", "Neo Geo Pocket", "portable", 1998, 5, 100),
    _rule("RACE", "SNK", "Neo Geo Pocket", "portable", 1998, 5, 100),
    # NEC
    _rule("PC Engine", "NEC", "PC Engine/TurboGrafx-16", "home", 1987, 6, 10),
    _rule("Beetle PCE", "NEC", "PC Engine/TurboGrafx-16", "home", 1987, 6, 10),
    _rule("TurboGrafx", "NEC", "PC Engine/TurboGrafx-16", "home", 1987, 6, 10),
    _rule("PC-FX", "NEC", "PC-FX", "home", 1994, 6, 20),
    # Bandai
    _rule("WonderSwan", "Bandai", "WonderSwan", "portable", 1999, 7, 100),
    _rule("Beetle Cygne", "Bandai", "WonderSwan", "portable", 1999, 7, 100),
    # Arcade
    _rule("MAME", "Arcade", "Multiple Arcade Systems", "arcade", 1972, 8, 10),
    _rule("Final Burn", "Arcade", "Multiple Arcade Systems", "arcade", 1972, 8, 10),
    _rule("FBNeo", "Arcade", "Multiple Arcade Systems", "arcade", 1972, 8, 10),
    # Computer systems
    _rule("Commodore 64", "Commodore", "Commodore 64", "computer", 1982, 9, 10),
    _rule("VICE", "Commodore", "Commodore 64", "computer", 1982, 9, 10),
    _rule("Amiga", "Commodore", "Amiga", "computer", 1985, 9, 20),
    _rule("PUAE", "Commodore", "Amiga", "computer", 1985, 9, 20),
    _rule("MSX", "Microsoft", "MSX", "computer", 1983, 10, 10),
    _rule("blueMSX", "Microsoft", "MSX", "computer", 1983, 10, 10),
    _rule("DOS", "IBM", "IBM PC Compatible", "computer", 1981, 11, 10),
    _rule("DOSBox", "IBM", "IBM PC Compatible", "computer", 1981, 11, 10),
    # Fallback (must stay last)
    _rule(None, "Unknown", "Unknown System", "unknown", 9999, 999, 999),
)

FALLBACK_RULE: ClassifierRule = CLASSIFIER_RULES[-1]


def classify(display_name: str) -> ClassifierRule:
    """Find the classification rule for a core display name.

    Scans the rule table from the start and returns the first rule whose
    pattern is a substring of the display name.

    Args:
        display_name: Human-readable core name.

    Returns:
        The first matching rule, or FALLBACK_RULE if none match
        (or the name is empty).
    """
    if not display_name:
        return FALLBACK_RULE

    for rule in CLASSIFIER_RULES:
        if rule.matches(display_name):
            return rule

    return FALLBACK_RULE
