"""Tests for MSI pattern tables."""

import pytest

from msicode.patterns import (
    ALPHABET,
    CHARACTER_ENCODINGS,
    END_ENCODING,
    END_WIDTHS,
    NUMBER_WIDTHS,
    START_ENCODING,
    START_WIDTHS,
    char_to_widths,
    pattern_code,
    pattern_to_char,
    widths_to_code,
)


class TestPatternCode:
    def test_empty(self):
        assert pattern_code([]) == 0

    def test_single_narrow_is_one_bit(self):
        assert pattern_code([True]) == 0b1

    def test_single_wide_is_two_bits(self):
        assert pattern_code([False]) == 0b11

    def test_bits_alternate(self):
        # narrow bar "1", narrow space "0"
        assert pattern_code([True, True]) == 0b10
        # wide bar "11", wide space "00"
        assert pattern_code([False, False]) == 0b1100


class TestTables:
    def test_digit_codes_match_width_table(self):
        derived = [widths_to_code(widths) for widths in NUMBER_WIDTHS]
        assert derived == list(CHARACTER_ENCODINGS)

    def test_start_code_matches_width_table(self):
        assert widths_to_code(START_WIDTHS) == START_ENCODING == 0x06

    def test_end_code_matches_width_table(self):
        assert widths_to_code(END_WIDTHS) == END_ENCODING == 0x09

    def test_digit_codes_unique(self):
        assert len(set(CHARACTER_ENCODINGS)) == 10

    def test_sentinel_codes_are_not_digits(self):
        assert START_ENCODING not in CHARACTER_ENCODINGS
        assert END_ENCODING not in CHARACTER_ENCODINGS

    def test_every_digit_is_four_narrow_four_wide(self):
        for widths in NUMBER_WIDTHS:
            assert len(widths) == 8
            assert widths.count(1) == 4
            assert widths.count(2) == 4
            assert sum(widths) == 12

    def test_alphabet(self):
        assert ALPHABET == "0123456789"


class TestLookups:
    def test_pattern_to_char(self):
        assert pattern_to_char(0x924) == "0"
        assert pattern_to_char(0x9A6) == "5"
        assert pattern_to_char(0xD26) == "9"

    def test_pattern_to_char_unknown(self):
        assert pattern_to_char(0x123) is None
        assert pattern_to_char(START_ENCODING) is None
        assert pattern_to_char(END_ENCODING) is None

    def test_char_to_widths(self):
        assert char_to_widths("7") == (1, 2, 2, 1, 2, 1, 2, 1)
        assert char_to_widths("0") == NUMBER_WIDTHS[0]

    def test_char_roundtrip_through_code(self):
        for char in ALPHABET:
            assert pattern_to_char(widths_to_code(char_to_widths(char))) == char

    @pytest.mark.parametrize("char", ["A", "*", " ", "", "12"])
    def test_char_to_widths_rejects_non_digit(self, char):
        with pytest.raises(ValueError, match="not encodable"):
            char_to_widths(char)
