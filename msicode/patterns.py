"""Pattern tables for MSI (Modified Plessey) barcodes.

Every MSI symbol is a sequence of alternating bar/space runs, each either
narrow (1 module) or wide (2 modules). Digits use four bar/space pairs,
the start sentinel two runs and the end sentinel three runs.

Pattern codes are built most-significant-run-first: a narrow run shifts
in a single bit, a wide run shifts in two bits. The single bit alternates
1, 0, 1, 0 ... and the double bit 0b11, 0b00, 0b11 ... by run position,
so a narrow bar reads as "1" and a wide space as "00".
"""

from __future__ import annotations

from collections.abc import Iterable

ALPHABET = "0123456789"

START_WIDTHS: tuple[int, ...] = (2, 1)
END_WIDTHS: tuple[int, ...] = (1, 2, 1)

NUMBER_WIDTHS: tuple[tuple[int, ...], ...] = (
    (1, 2, 1, 2, 1, 2, 1, 2),  # 0
    (1, 2, 1, 2, 1, 2, 2, 1),  # 1
    (1, 2, 1, 2, 2, 1, 1, 2),  # 2
    (1, 2, 1, 2, 2, 1, 2, 1),  # 3
    (1, 2, 2, 1, 1, 2, 1, 2),  # 4
    (1, 2, 2, 1, 1, 2, 2, 1),  # 5
    (1, 2, 2, 1, 2, 1, 1, 2),  # 6
    (1, 2, 2, 1, 2, 1, 2, 1),  # 7
    (2, 1, 1, 2, 1, 2, 1, 2),  # 8
    (2, 1, 1, 2, 1, 2, 2, 1),  # 9
)

# Codes of the width tables above, as produced by pattern_code()
CHARACTER_ENCODINGS: tuple[int, ...] = (
    0x924, 0x926, 0x934, 0x936, 0x9A4, 0x9A6, 0x9B4, 0x9B6, 0xD24, 0xD26,
)
START_ENCODING = 0x06
END_ENCODING = 0x09

_CHAR_BY_ENCODING: dict[int, str] = dict(zip(CHARACTER_ENCODINGS, ALPHABET))


def pattern_code(narrow_flags: Iterable[bool]) -> int:
    """Accumulate a pattern code from per-run narrow/wide decisions.

    Args:
        narrow_flags: One flag per run, True for narrow, first run first.

    Returns:
        Integer pattern code.
    """
    pattern = 0
    bit = 1
    double_bit = 3
    for narrow in narrow_flags:
        if narrow:
            pattern = (pattern << 1) | bit
        else:
            pattern = (pattern << 2) | double_bit
        bit ^= 1
        double_bit ^= 3
    return pattern


def widths_to_code(widths: Iterable[int]) -> int:
    """Pattern code of a canonical width sequence (1 = narrow, 2 = wide)."""
    return pattern_code(width == 1 for width in widths)


def pattern_to_char(pattern: int) -> str | None:
    """Look up the digit for a pattern code, or None if no digit matches."""
    return _CHAR_BY_ENCODING.get(pattern)


def char_to_widths(char: str) -> tuple[int, ...]:
    """Return the eight-element width sequence for a digit character.

    Raises:
        ValueError: If char is not one of '0'..'9'.
    """
    index = ALPHABET.find(char) if len(char) == 1 else -1
    if index < 0:
        raise ValueError(f"Requested contents contains a not encodable character: '{char}'")
    return NUMBER_WIDTHS[index]
