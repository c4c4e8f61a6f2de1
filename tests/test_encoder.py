"""Tests for the MSI encoder."""

import pytest

from msicode.encoder import DEFAULT_QUIET_ZONE, append_pattern, code_width, encode, encode_row
from msicode.scanline import Scanline


def _bits(text: str) -> list[bool]:
    return [c == "1" for c in text]


class TestEncode:
    def test_encode_single_digit(self):
        # start "110" | digit 0 "100100100100" | end "1001"
        assert encode("0") == _bits("110" + "100100100100" + "1001")

    def test_encode_digit_nine(self):
        # 9 = widths 2,1,1,2,1,2,2,1
        assert encode("9") == _bits("110" + "110100100110" + "1001")

    def test_encode_empty_is_sentinels_only(self):
        assert encode("") == _bits("110" + "1001")

    def test_length_matches_code_width(self):
        for length in range(0, 25):
            pattern = encode("7" * length)
            assert len(pattern) == code_width(length)
            assert len(pattern) == 3 + 12 * length + 4

    def test_starts_with_bar_ends_with_bar(self):
        pattern = encode("31415")
        assert pattern[0] is True
        assert pattern[-1] is True

    def test_no_check_digit_appended(self):
        assert len(encode("1234")) == code_width(4)

    def test_rejects_non_digit(self):
        with pytest.raises(ValueError, match="'a'"):
            encode("12a4")

    def test_rejects_asterisk(self):
        with pytest.raises(ValueError, match="not encodable"):
            encode("*")

    def test_deterministic(self):
        assert encode("8675309") == encode("8675309")

    def test_different_digits_different_patterns(self):
        assert encode("1") != encode("2")


class TestAppendPattern:
    def test_returns_added_count(self):
        target: list[bool] = []
        assert append_pattern(target, [2, 1, 3]) == 6
        assert target == _bits("110111")

    def test_start_with_space(self):
        target = [True]
        append_pattern(target, [1, 2], start_color=False)
        assert target == _bits("1011")


class TestEncodeRow:
    def test_default_quiet_zone(self):
        row = encode_row("1234")
        assert isinstance(row, Scanline)
        assert row.size == code_width(4) + 2 * DEFAULT_QUIET_ZONE
        assert row.next_set(0) == DEFAULT_QUIET_ZONE

    def test_module_width_scales_everything(self):
        row = encode_row("1", module_width=2, quiet_zone=3)
        assert row.size == (code_width(1) + 6) * 2
        assert row.next_set(0) == 6
        # wide start bar is 2 modules of 2 samples
        assert row.run_lengths(6, limit=2) == [4, 2]

    def test_no_quiet_zone(self):
        row = encode_row("5", quiet_zone=0)
        assert row.to_string() == "".join("1" if b else "0" for b in encode("5"))

    def test_rejects_bad_module_width(self):
        with pytest.raises(ValueError, match="module_width"):
            encode_row("1", module_width=0)

    def test_rejects_negative_quiet_zone(self):
        with pytest.raises(ValueError, match="quiet_zone"):
            encode_row("1", quiet_zone=-1)

    def test_rejects_non_digit(self):
        with pytest.raises(ValueError):
            encode_row("12-34")
