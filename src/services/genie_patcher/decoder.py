"""Game Genie code decoder for NES.

Letter-to-nibble table and bit layout:
  - https://tuxnes.sourceforge.net/gamegenie.html
  - https://www.nesdev.org/wiki/Game_Genie

Each letter maps to a nibble (its position in GENIE_ALPHABET). The nibbles
are rearranged so that bit 3 of one letter lands on bit 3 of another:

   6 letters:  0000 1111 2222 3333 4444 5555
            -> -333 4555 1222 3444 0111 5000
               |---- address ----| |-value-|

   8 letters:  0000 1111 2222 3333 4444 5555 6666 7777
            -> -333 4555 1222 3444 0111 7000 6777 5666
               |---- address ----| |-value-| |-compare|

The CPU address normally has bit 15 set ($8000-$FFFF); it is dropped here
because patching happens on the ROM file, not the CPU bus.
"""

from typing import Tuple

from services.genie_patcher.errors import (
    InvalidCharacterError,
    InvalidCodeLengthError,
)
from services.genie_patcher.models import (
    GENIE_ALPHABET,
    LONG_CODE_LENGTH,
    SHORT_CODE_LENGTH,
    GenieCode,
    Patch,
)

_NIBBLE_OF = {char: index for index, char in enumerate(GENIE_ALPHABET)}


def _check_length(code: str) -> None:
    if len(code) not in (SHORT_CODE_LENGTH, LONG_CODE_LENGTH):
        raise InvalidCodeLengthError(code)


def decode_nibbles(code: str) -> Tuple[int, ...]:
    """Map each letter of a code to its 4-bit value, keeping letter order."""
    nibbles = []
    for char in code:
        if char not in _NIBBLE_OF:
            raise InvalidCharacterError(code, char)
        nibbles.append(_NIBBLE_OF[char])
    return tuple(nibbles)


def rearrange_nibbles(nibbles: Tuple[int, ...]) -> Tuple[int, ...]:
    """Interleave the letter nibbles into address/value(/compare) order."""
    n = nibbles
    if len(n) not in (SHORT_CODE_LENGTH, LONG_CODE_LENGTH):
        raise InvalidCodeLengthError("".join(GENIE_ALPHABET[x & 0xF] for x in n))

    # Bit 3 of the value low nibble comes from the last letter
    last = n[-1]

    rearranged = [
        n[3] & 0x7,
        (n[5] & 0x7) | (n[4] & 0x8),
        (n[2] & 0x7) | (n[1] & 0x8),
        (n[4] & 0x7) | (n[3] & 0x8),
        (n[1] & 0x7) | (n[0] & 0x8),
        (n[0] & 0x7) | (last & 0x8),
    ]

    if len(n) == LONG_CODE_LENGTH:
        rearranged.append((n[7] & 0x7) | (n[6] & 0x8))
        rearranged.append((n[6] & 0x7) | (n[5] & 0x8))

    return tuple(rearranged)


def decode_code(code: str) -> GenieCode:
    """Decode a code into address, value and optional compare byte.

    Pure: never touches a ROM image. Raises InvalidCodeLengthError or
    InvalidCharacterError.
    """
    _check_length(code)
    r = rearrange_nibbles(decode_nibbles(code))

    address = (r[0] << 12) | (r[1] << 8) | (r[2] << 4) | r[3]
    value = (r[4] << 4) | r[5]
    compare = None
    if len(r) == LONG_CODE_LENGTH:
        compare = (r[6] << 4) | r[7]

    return GenieCode(code=code, address=address, value=value, compare=compare)


def resolve_patch(genie_code: GenieCode, image, base_offset: int) -> Patch:
    """Turn a decoded code into the byte write for a given base offset.

    For codes with a compare byte the live byte at the target offset is read
    from ``image``: when it differs from the compare byte the patch writes
    the live byte back unchanged.
    """
    offset = genie_code.address + base_offset

    if not genie_code.has_compare:
        return Patch(code=genie_code.code, offset=offset, value=genie_code.value)

    live = image.read_byte(offset)
    if live != genie_code.compare:
        return Patch(code=genie_code.code, offset=offset, value=live, applied=False)
    return Patch(code=genie_code.code, offset=offset, value=genie_code.value)


def decode_nes(code: str, image, base_offset: int) -> Patch:
    """Decode an NES code against ``image`` at ``base_offset``."""
    return resolve_patch(decode_code(code), image, base_offset)
