"""Encoder for MSI barcodes.

Converts a digit string into the canonical bar/space sample sequence:

    start sentinel | one 8-run pattern per digit | end sentinel

Each width value w becomes w consecutive samples, with the colour
alternating inside each pattern starting at bar. The encoder never adds a
check digit; callers that want one append it first (see
msicode.checksum.append_check_digit).
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from .patterns import END_WIDTHS, NUMBER_WIDTHS, START_WIDTHS, char_to_widths
from .scanline import Scanline

logger = structlog.get_logger(__name__)

# Quiet zone on each side of a row built by encode_row(), in modules
DEFAULT_QUIET_ZONE = 10


def code_width(length: int) -> int:
    """Number of modules in the pattern for a code of the given length."""
    digit_width = sum(NUMBER_WIDTHS[0])
    return sum(START_WIDTHS) + length * digit_width + sum(END_WIDTHS)


def append_pattern(target: list[bool], widths: Iterable[int], start_color: bool = True) -> int:
    """Append a width pattern to target as runs of alternating colour.

    Args:
        target: Sample list to extend in place.
        widths: Run widths in modules.
        start_color: Colour of the first run (True = bar).

    Returns:
        Number of samples added.
    """
    color = start_color
    added = 0
    for width in widths:
        target.extend([color] * width)
        added += width
        color = not color
    return added


def encode(contents: str) -> list[bool]:
    """Encode a digit string as MSI bar/space samples.

    Args:
        contents: Digits '0'..'9'. A check digit, if wanted, must already
            be appended.

    Returns:
        Samples (True = bar), one per module, of length code_width(len(contents)).

    Raises:
        ValueError: If contents contains a character other than a digit.
    """
    # Validate everything before producing output
    digit_widths = [char_to_widths(char) for char in contents]

    result: list[bool] = []
    append_pattern(result, START_WIDTHS)
    for widths in digit_widths:
        append_pattern(result, widths)
    append_pattern(result, END_WIDTHS)

    logger.debug("encoded_pattern", digits=len(contents), modules=len(result))
    return result


def encode_row(
    contents: str,
    module_width: int = 1,
    quiet_zone: int = DEFAULT_QUIET_ZONE,
) -> Scanline:
    """Encode contents into a scanline with quiet zones.

    Args:
        contents: Digit string to encode.
        module_width: Samples per module.
        quiet_zone: Modules of space added on each side.

    Returns:
        Scanline ready for decoding.

    Raises:
        ValueError: If contents is not encodable or a size is out of range.
    """
    if module_width < 1:
        raise ValueError(f"module_width must be >= 1, got {module_width}")
    if quiet_zone < 0:
        raise ValueError(f"quiet_zone must be >= 0, got {quiet_zone}")

    pattern = encode(contents)
    samples: list[bool] = [False] * (quiet_zone * module_width)
    for bar in pattern:
        samples.extend([bar] * module_width)
    samples.extend([False] * (quiet_zone * module_width))
    return Scanline(samples)
