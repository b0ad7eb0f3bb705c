"""Tests for the NES Game Genie decoder.

Known codes are checked against published decodings (with the CPU-bus
bit 15 dropped, since patching is done on the ROM file):

    GOSSIP    -> address $D1DD, value $14
    ZEXPYGLA  -> address $94A7, value $02, compare $03

Run:
    python -m pytest tests/test_genie_decoder.py
    # or directly:
    python tests/test_genie_decoder.py
"""

import os
import random
import sys

# Add src to path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from services.genie_patcher.decoder import (
    decode_code,
    decode_nes,
    decode_nibbles,
    rearrange_nibbles,
    resolve_patch,
)
from services.genie_patcher.errors import (
    GenieDecodeError,
    InvalidCharacterError,
    InvalidCodeLengthError,
    exit_code_for,
)
from services.genie_patcher.models import (
    GENIE_ALPHABET,
    NES_HEADER_SIZE,
    GenieCode,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _FakeImage:
    """Minimal read-capable image backed by a dict; records every read."""

    def __init__(self, contents=None, default=0xEA):
        self.contents = dict(contents or {})
        self.default = default
        self.reads = []

    def read_byte(self, offset):
        self.reads.append(offset)
        return self.contents.get(offset, self.default)


def _random_code(rng, length):
    return "".join(rng.choice(GENIE_ALPHABET) for _ in range(length))


# ---------------------------------------------------------------------------
# Nibble mapping
# ---------------------------------------------------------------------------

def test_alphabet_maps_to_positions():
    """Each letter decodes to its position in the alphabet."""
    assert decode_nibbles(GENIE_ALPHABET[:8]) == (0, 1, 2, 3, 4, 5, 6, 7)
    assert decode_nibbles(GENIE_ALPHABET[8:]) == (8, 9, 10, 11, 12, 13, 14, 15)
    assert decode_nibbles("GOSSIP") == (4, 9, 13, 13, 5, 1)
    print("  PASS: test_alphabet_maps_to_positions")


def test_invalid_character_rejected():
    """Letters outside the alphabet, lowercase, digits and spaces all fail."""
    for code in ("GOSSIB", "gossip", "GOSS1P", "GOS IP"):
        try:
            decode_nibbles(code)
        except InvalidCharacterError as e:
            assert e.code == code
            assert e.char not in GENIE_ALPHABET
        else:
            raise AssertionError(f"{code!r} should not decode")
    print("  PASS: test_invalid_character_rejected")


# ---------------------------------------------------------------------------
# Rearrangement
# ---------------------------------------------------------------------------

def test_rearrange_six_letters():
    """GOSSIP: 4 9 D D 5 1 -> 5 1 D D 1 4."""
    assert rearrange_nibbles((4, 9, 13, 13, 5, 1)) == (5, 1, 13, 13, 1, 4)
    print("  PASS: test_rearrange_six_letters")


def test_rearrange_eight_letters():
    """ZEXPYGLA: 2 8 A 1 7 4 3 0 -> 1 4 A 7 0 2 0 3."""
    assert rearrange_nibbles((2, 8, 10, 1, 7, 4, 3, 0)) == (1, 4, 10, 7, 0, 2, 0, 3)
    print("  PASS: test_rearrange_eight_letters")


def test_rearrange_value_bit3_from_last_letter():
    """Bit 3 of the value low nibble comes from the last letter (d5 or d7)."""
    six = rearrange_nibbles((0, 0, 0, 0, 0, 8))
    assert six[5] == 8

    # Only d7 contributes bit 3 of r5 in an 8-letter code, not d5
    eight = rearrange_nibbles((0, 0, 0, 0, 0, 0, 0, 8))
    assert eight[5] == 8
    eight = rearrange_nibbles((0, 0, 0, 0, 0, 8, 0, 0))
    assert eight[5] == 0
    assert eight[7] == 8
    print("  PASS: test_rearrange_value_bit3_from_last_letter")


def test_rearrange_bad_length():
    for nibbles in ((), (0,) * 5, (0,) * 7, (0,) * 9):
        try:
            rearrange_nibbles(nibbles)
        except InvalidCodeLengthError:
            pass
        else:
            raise AssertionError(f"{len(nibbles)} nibbles should fail")
    print("  PASS: test_rearrange_bad_length")


# ---------------------------------------------------------------------------
# decode_code
# ---------------------------------------------------------------------------

def test_decode_all_zero_code():
    """AAAAAA decodes to address 0, value 0."""
    result = decode_code("AAAAAA")
    assert result == GenieCode(code="AAAAAA", address=0x0000, value=0x00)
    assert not result.has_compare
    print("  PASS: test_decode_all_zero_code")


def test_decode_gossip():
    result = decode_code("GOSSIP")
    assert result.address == 0x51DD, f"address 0x{result.address:x}"
    assert result.value == 0x14, f"value 0x{result.value:x}"
    assert result.compare is None
    print("  PASS: test_decode_gossip")


def test_decode_zexpygla():
    result = decode_code("ZEXPYGLA")
    assert result.address == 0x14A7, f"address 0x{result.address:x}"
    assert result.value == 0x02, f"value 0x{result.value:x}"
    assert result.compare == 0x03, f"compare 0x{result.compare:x}"
    print("  PASS: test_decode_zexpygla")


def test_decode_address_fits_15_bits():
    """The top address bit never comes out of the decoder."""
    assert decode_code("NNNNNN").address == 0x7FFF
    assert decode_code("NNNNNNNN").address == 0x7FFF
    assert decode_code("NNNNNNNN").value == 0xFF
    assert decode_code("NNNNNNNN").compare == 0xFF
    print("  PASS: test_decode_address_fits_15_bits")


def test_decode_length_checked_first():
    """Wrong-length codes report a length error even with bad letters."""
    for code in ("", "GOSSI", "GOSSIPA", "ZEXPYGLAA", "abc"):
        try:
            decode_code(code)
        except InvalidCodeLengthError as e:
            assert e.code == code
            assert exit_code_for(e) == 1
        else:
            raise AssertionError(f"{code!r} should fail")
    print("  PASS: test_decode_length_checked_first")


def test_decode_invalid_character_exit_code():
    try:
        decode_code("ZEXPYGL!")
    except GenieDecodeError as e:
        assert isinstance(e, InvalidCharacterError)
        assert e.char == "!"
        assert exit_code_for(e) == 32
    else:
        raise AssertionError("ZEXPYGL! should fail")
    print("  PASS: test_decode_invalid_character_exit_code")


def test_decode_is_deterministic():
    """Same code, same result; 6-letter decoding never needs an image."""
    rng = random.Random(1987)
    for _ in range(200):
        code = _random_code(rng, 6)
        first = decode_code(code)
        assert decode_code(code) == first
        assert 0 <= first.address <= 0x7FFF
        assert 0 <= first.value <= 0xFF
    print("  PASS: test_decode_is_deterministic")


# ---------------------------------------------------------------------------
# resolve_patch / decode_nes
# ---------------------------------------------------------------------------

def test_six_letter_offset_is_additive():
    """Base offset shifts the target offset and nothing else."""
    rng = random.Random(42)
    image = _FakeImage()
    for _ in range(100):
        code = _random_code(rng, 6)
        low = decode_nes(code, image, 0)
        for base in (NES_HEADER_SIZE, 0x8010, 0x18010):
            patch = decode_nes(code, image, base)
            assert patch.offset == low.offset + base
            assert patch.value == low.value
            assert patch.applied
    assert image.reads == [], "6-letter codes must not read the image"
    print("  PASS: test_six_letter_offset_is_additive")


def test_eight_letter_compare_match():
    """Live byte equal to compare -> candidate value is written."""
    offset = 0x14A7 + NES_HEADER_SIZE
    image = _FakeImage({offset: 0x03})
    patch = decode_nes("ZEXPYGLA", image, NES_HEADER_SIZE)
    assert patch.offset == offset
    assert patch.value == 0x02
    assert patch.applied
    assert image.reads == [offset], "compare must read the final offset"
    print("  PASS: test_eight_letter_compare_match")


def test_eight_letter_compare_mismatch():
    """Live byte different from compare -> live byte is written back."""
    offset = 0x14A7 + NES_HEADER_SIZE
    image = _FakeImage({offset: 0x7C})
    patch = decode_nes("ZEXPYGLA", image, NES_HEADER_SIZE)
    assert patch.offset == offset
    assert patch.value == 0x7C
    assert not patch.applied
    print("  PASS: test_eight_letter_compare_mismatch")


def test_eight_letter_property():
    """For any 8-letter code the written value is candidate or live byte."""
    rng = random.Random(7)
    for _ in range(200):
        code = _random_code(rng, 8)
        decoded = decode_code(code)
        offset = decoded.address + NES_HEADER_SIZE

        hit = resolve_patch(decoded, _FakeImage({offset: decoded.compare}), NES_HEADER_SIZE)
        assert hit.value == decoded.value and hit.applied

        live = (decoded.compare + 1) & 0xFF
        miss = resolve_patch(decoded, _FakeImage({offset: live}), NES_HEADER_SIZE)
        assert miss.value == live and not miss.applied
    print("  PASS: test_eight_letter_property")


if __name__ == "__main__":
    tests = [
        test_alphabet_maps_to_positions,
        test_invalid_character_rejected,
        test_rearrange_six_letters,
        test_rearrange_eight_letters,
        test_rearrange_value_bit3_from_last_letter,
        test_rearrange_bad_length,
        test_decode_all_zero_code,
        test_decode_gossip,
        test_decode_zexpygla,
        test_decode_address_fits_15_bits,
        test_decode_length_checked_first,
        test_decode_invalid_character_exit_code,
        test_decode_is_deterministic,
        test_six_letter_offset_is_additive,
        test_eight_letter_compare_match,
        test_eight_letter_compare_mismatch,
        test_eight_letter_property,
    ]

    print(f"Running {len(tests)} decoder tests...\n")
    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            failed += 1
            print(f"  FAIL: {test.__name__}: {e}")

    print(f"\nResults: {len(tests) - failed} passed, {failed} failed")
    if failed:
        sys.exit(1)
