"""Modulo-10 check digit for MSI barcodes.

Starting from the rightmost digit, every second digit is doubled and its
decimal digits summed (via a lookup table); the remaining digits are added
as they are. The check digit brings the total up to a multiple of ten.
"""

from __future__ import annotations

# Doubled digit with its two decimal digits summed: 7 -> 14 -> 5
DOUBLE_AND_CROSS_SUM = (0, 2, 4, 6, 8, 1, 3, 5, 7, 9)


def compute_check_digit(digits: str) -> int:
    """Calculate the MSI modulo-10 check digit.

    Args:
        digits: Digit string without a check digit.

    Returns:
        Check digit (0-9).

    Raises:
        ValueError: If digits contains a non-digit character.
    """
    for char in digits:
        if char not in "0123456789":
            raise ValueError(f"Invalid character in code: {char}")

    total = 0
    for index in range(len(digits) - 2, -1, -2):
        total += int(digits[index])
    for index in range(len(digits) - 1, -1, -2):
        total += DOUBLE_AND_CROSS_SUM[int(digits[index])]

    return (10 - (total % 10)) % 10


def append_check_digit(digits: str) -> str:
    """Return digits with their check digit appended."""
    return digits + str(compute_check_digit(digits))


def validate_check_digit(code: str) -> bool:
    """Validate the trailing check digit of a code.

    Args:
        code: Digit string whose last character is the check digit.

    Returns:
        True if the check digit matches.
    """
    if len(code) < 2 or not all(c in "0123456789" for c in code):
        return False
    return compute_check_digit(code[:-1]) == int(code[-1])
