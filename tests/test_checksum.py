"""Tests for the MSI modulo-10 check digit."""

import pytest

from msicode.checksum import (
    DOUBLE_AND_CROSS_SUM,
    append_check_digit,
    compute_check_digit,
    validate_check_digit,
)


def _by_positions(digits: str) -> int:
    """Check digit summed by position from the right, written out longhand."""
    total = 0
    for position, char in enumerate(reversed(digits), start=1):
        digit = int(char)
        if position % 2 == 1:
            doubled = digit * 2
            total += doubled // 10 + doubled % 10
        else:
            total += digit
    return (10 - total % 10) % 10


class TestComputeCheckDigit:
    def test_hand_computed_1234(self):
        # doubled 4, 2 -> 8, 4 (12); plain 3, 1 (4); total 16
        assert compute_check_digit("1234") == 4

    def test_known_value_1234567(self):
        assert compute_check_digit("1234567") == 4

    def test_known_value_80523(self):
        assert compute_check_digit("80523") == 4

    def test_single_digit(self):
        assert compute_check_digit("0") == 0
        assert compute_check_digit("5") == 9

    def test_empty(self):
        assert compute_check_digit("") == 0

    def test_table_is_doubled_cross_sum(self):
        for digit, value in enumerate(DOUBLE_AND_CROSS_SUM):
            doubled = digit * 2
            assert value == doubled // 10 + doubled % 10

    def test_matches_positional_definition(self):
        for number in range(0, 5000, 7):
            digits = str(number)
            assert compute_check_digit(digits) == _by_positions(digits)

    def test_always_single_digit(self):
        for number in range(1000):
            assert 0 <= compute_check_digit(f"{number:04d}") <= 9

    def test_deterministic(self):
        assert compute_check_digit("31415926") == compute_check_digit("31415926")

    def test_rejects_non_digit(self):
        with pytest.raises(ValueError, match="Invalid character"):
            compute_check_digit("12a4")


class TestAppendAndValidate:
    def test_append(self):
        assert append_check_digit("1234") == "12344"

    def test_validate_valid(self):
        for code in ["12344", "12345674", "805234"]:
            assert validate_check_digit(code), f"Expected {code} to be valid"

    def test_validate_invalid(self):
        for code in ["12345", "12345670", "4", "", "12a44"]:
            assert not validate_check_digit(code), f"Expected {code} to be invalid"

    def test_append_then_validate(self):
        for digits in ["0", "7", "42", "999999", "0123456789"]:
            assert validate_check_digit(append_check_digit(digits))
