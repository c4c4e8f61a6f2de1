"""Row decoder for MSI barcodes.

Decodes one binarized scanline by:
1. Finding the start sentinel (a wide bar followed by a narrow space)
   preceded by enough quiet whitespace
2. Reading groups of eight runs and translating each to a digit
3. Stopping when a group is not a digit (or the row runs out) and the
   same position holds the end sentinel followed by whitespace
4. Optionally validating the trailing modulo-10 check digit

Narrow and wide runs are told apart per group: the threshold is the
midpoint between the shortest and the longest run of the group being
classified, so the decoder follows gradual changes in module width
across the symbol without ever estimating the module width itself.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import structlog

from .checksum import compute_check_digit
from .patterns import END_ENCODING, START_ENCODING, pattern_code, pattern_to_char
from .scanline import Scanline

logger = structlog.get_logger(__name__)

# Runs per symbol group
START_RUNS = 2
DIGIT_RUNS = 8
END_RUNS = 3

# Fractional bits of the fixed-point average run width
_FIXED_POINT_SHIFT = 8


class NotFoundError(Exception):
    """No MSI symbol could be located in the row."""


@dataclass(frozen=True)
class ResultPoint:
    """A reference point of a decoded symbol, in row coordinates."""

    x: float
    y: float


@dataclass
class DecodeResult:
    """Result of decoding one MSI row.

    Attributes:
        text: Decoded digits, including the check digit if present.
        left: Midpoint of the start sentinel.
        right: Midpoint of the end sentinel.
        row_number: Row the symbol was read from.
        format: Symbology name.
    """

    text: str
    left: ResultPoint
    right: ResultPoint
    row_number: int
    format: str = "MSI"


@dataclass(frozen=True)
class _Digit:
    char: str
    width: int


@dataclass(frozen=True)
class _EndSentinel:
    start: int
    end: int


def average_run_width(runs: Sequence[int]) -> int:
    """Midpoint of the shortest and longest run, in 8-bit fixed point."""
    low = min(runs)
    high = max(runs)
    return ((high << _FIXED_POINT_SHIFT) + (low << _FIXED_POINT_SHIFT)) // 2


def to_pattern(runs: Sequence[int], average: int) -> int:
    """Classify runs against the average width and build their pattern code.

    A run strictly shorter than the average is narrow; ties are wide.
    """
    return pattern_code((run << _FIXED_POINT_SHIFT) < average for run in runs)


def _classify(runs: Sequence[int]) -> int:
    return to_pattern(runs, average_run_width(runs))


def _find_start_pattern(row: Scanline) -> tuple[int, int]:
    """Locate the start sentinel.

    Returns:
        (start, end) sample positions of the sentinel, end exclusive.

    Raises:
        NotFoundError: If no start sentinel with leading whitespace exists.
    """
    offset = row.next_set(0)
    # The last run reaches the row end and never closes a window
    runs = row.run_lengths(offset)[:-1]

    pattern_start = offset
    for index in range(0, len(runs) - START_RUNS + 1, START_RUNS):
        window = runs[index : index + START_RUNS]
        pattern_end = pattern_start + sum(window)
        if _classify(window) == START_ENCODING:
            # Whitespace before the start pattern, >= 50% of its width
            quiet_start = max(0, pattern_start - ((pattern_end - pattern_start) >> 1))
            if row.is_range(quiet_start, pattern_start, False):
                return pattern_start, pattern_end
        pattern_start = pattern_end

    raise NotFoundError("No start pattern found")


def _find_end_pattern(row: Scanline, offset: int) -> _EndSentinel | None:
    """Match the end sentinel starting exactly at offset."""
    runs = row.run_lengths(offset, limit=END_RUNS + 1)
    if len(runs) <= END_RUNS:
        return None
    runs = runs[:END_RUNS]

    if _classify(runs) != END_ENCODING:
        return None

    pattern_end = offset + sum(runs)
    # Whitespace after the end pattern, >= 50% of its width
    quiet_end = min(row.size - 1, pattern_end + ((pattern_end - offset) >> 1))
    if not row.is_range(pattern_end, quiet_end, False):
        return None
    return _EndSentinel(offset, pattern_end)


def _read_symbol(row: Scanline, offset: int) -> _Digit | _EndSentinel | None:
    """Read the symbol group at offset: a digit, the end sentinel, or nothing."""
    # Fresh counters per group
    runs = row.run_lengths(offset, limit=DIGIT_RUNS)
    if len(runs) == DIGIT_RUNS:
        char = pattern_to_char(_classify(runs))
        if char is not None:
            return _Digit(char, sum(runs))

    # Not enough runs for a digit, or not a digit pattern: the end
    # sentinel may start here, possibly followed by other dark areas
    return _find_end_pattern(row, offset)


def decode_row(
    row_number: int,
    row: Scanline | Sequence[bool] | np.ndarray,
    *,
    use_check_digit: bool = False,
    result_point_callback: Callable[[ResultPoint], None] | None = None,
) -> DecodeResult | None:
    """Decode an MSI barcode from a single scanline.

    Args:
        row_number: Index of the row, used only for result coordinates.
        row: Binarized row samples (True = bar).
        use_check_digit: Treat the last digit as a modulo-10 check digit
            and verify it.
        result_point_callback: Called with the left and then the right
            result point after a successful decode.

    Returns:
        DecodeResult, or None if the check digit does not match.

    Raises:
        NotFoundError: If the row holds no readable MSI symbol.
    """
    if not isinstance(row, Scanline):
        row = Scanline(row)

    start_begin, start_end = _find_start_pattern(row)
    logger.debug("start_pattern_found", row=row_number, start=start_begin, end=start_end)

    # Read off white space
    next_start = row.next_set(start_end)
    last_start = next_start
    digits: list[str] = []

    while True:
        symbol = _read_symbol(row, next_start)
        if symbol is None:
            raise NotFoundError(f"No digit or end pattern at position {next_start}")
        if isinstance(symbol, _EndSentinel):
            last_start = symbol.start
            next_start = symbol.end
            break
        digits.append(symbol.char)
        last_start = next_start
        next_start = row.next_set(next_start + symbol.width)

    if not digits:
        raise NotFoundError("No digits between start and end pattern")

    text = "".join(digits)

    if use_check_digit:
        if len(text) < 2:
            raise NotFoundError("Too few digits for a check digit")
        expected = compute_check_digit(text[:-1])
        if str(expected) != text[-1]:
            logger.warning(
                "decode_check_digit_mismatch",
                row=row_number,
                expected=expected,
                actual=text[-1],
            )
            return None

    left = ResultPoint((start_begin + start_end) / 2.0, float(row_number))
    right = ResultPoint((next_start + last_start) / 2.0, float(row_number))

    if result_point_callback is not None:
        result_point_callback(left)
        result_point_callback(right)

    logger.info("decode_success", row=row_number, digits=len(text), left=left.x, right=right.x)
    return DecodeResult(text=text, left=left, right=right, row_number=row_number)
