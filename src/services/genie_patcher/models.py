"""Data models for the Game Genie patcher.

NES Game Genie codes are 6 or 8 letters drawn from a 16-symbol alphabet.
Each letter carries one nibble; the nibbles are shuffled to produce a
15-bit CPU address, a replacement byte and (8-letter codes only) a compare
byte that must match the ROM before the replacement takes effect.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


# Letter position is its 4-bit value
GENIE_ALPHABET = "APZLGITYEOXUKSVN"

SHORT_CODE_LENGTH = 6   # address + value
LONG_CODE_LENGTH = 8    # address + value + compare

# iNES file header precedes PRG data
NES_HEADER_SIZE = 0x10

# One 32 KiB PRG window; each code in a run targets the next one
NES_BANK_SIZE = 0x8000


class Platform(Enum):
    """Cartridge platforms the Game Genie was sold for."""

    GAMEBOY = "gameboy"
    GAMEGEAR = "gamegear"
    MASTERSYSTEM = "mastersystem"
    GENESIS = "genesis"
    NES = "nes"
    SNES = "snes"


# CLI selector names -> platform
PLATFORM_ALIASES = {
    "game-boy": Platform.GAMEBOY,
    "gb": Platform.GAMEBOY,
    "game-gear": Platform.GAMEGEAR,
    "gg": Platform.GAMEGEAR,
    "master-system": Platform.MASTERSYSTEM,
    "sms": Platform.MASTERSYSTEM,
    "genesis": Platform.GENESIS,
    "sg": Platform.GENESIS,
    "mega-drive": Platform.GENESIS,
    "md": Platform.GENESIS,
    "nintendo": Platform.NES,
    "nes": Platform.NES,
    "super-nintendo": Platform.SNES,
    "snes": Platform.SNES,
}


def parse_platform(name: str) -> Platform:
    """Resolve a selector name (e.g. "nes", "Mega-Drive") to a Platform."""
    key = name.strip().lower()
    if key in PLATFORM_ALIASES:
        return PLATFORM_ALIASES[key]
    for platform in Platform:
        if platform.value == key:
            return platform
    raise ValueError(f"Unknown platform: {name!r}")


@dataclass(frozen=True)
class GenieCode:
    """A decoded code, before it is resolved against a ROM image."""

    code: str
    address: int                   # 0x0000-0x7FFF, relative to PRG start
    value: int                     # replacement byte
    compare: Optional[int] = None  # 8-letter codes only

    @property
    def has_compare(self) -> bool:
        return self.compare is not None


@dataclass(frozen=True)
class Patch:
    """One byte write produced by a code."""

    code: str
    offset: int          # file offset: address + base offset
    value: int
    applied: bool = True  # False when the compare byte did not match


@dataclass
class PatchResult:
    """Result of a patch operation."""

    success: bool
    output_path: str = ""
    error: str = ""
    exit_code: int = 0
    patches: List[Patch] = field(default_factory=list)

    @property
    def codes_applied(self) -> int:
        return sum(1 for p in self.patches if p.applied)
