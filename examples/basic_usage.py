#!/usr/bin/env python3
"""Basic usage example for msicode.

Demonstrates encoding digits as an MSI barcode and decoding them back.

Usage:
    python examples/basic_usage.py
"""

import sys
import os

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from msicode.checksum import append_check_digit
from msicode.decoder import NotFoundError, decode_row
from msicode.encoder import encode, encode_row
from msicode.renderer import render_matrix, render_svg


def example_basic_roundtrip():
    """Encode digits into a scanline and decode them back."""
    print("=" * 60)
    print("Example 1: Basic Encode/Decode Roundtrip")
    print("=" * 60)

    digits = "8675309"
    row = encode_row(digits, module_width=3)
    print(f"  Input digits: {digits}")
    print(f"  Row samples:  {row.size}")

    result = decode_row(0, row)
    print(f"  Decoded:      {result.text}")
    print(f"  Left x:       {result.left.x}")
    print(f"  Right x:      {result.right.x}")
    print(f"  Match:        {result.text == digits}")
    print()


def example_check_digit():
    """Append a check digit and verify it while decoding."""
    print("=" * 60)
    print("Example 2: Modulo-10 Check Digit")
    print("=" * 60)

    full = append_check_digit("1234")
    print(f"  With check digit: {full}")

    result = decode_row(0, encode_row(full), use_check_digit=True)
    print(f"  Verified decode:  {result.text}")

    tampered = full[:-1] + "0"
    result = decode_row(0, encode_row(tampered), use_check_digit=True)
    print(f"  Tampered decode:  {result}")
    print()


def example_rendering():
    """Render a barcode as a matrix and as SVG."""
    print("=" * 60)
    print("Example 3: Rendering")
    print("=" * 60)

    pattern = encode("31415")
    matrix = render_matrix(pattern, width=240, height=40)
    svg = render_svg(pattern, width=240, height=40)
    print(f"  Pattern modules: {len(pattern)}")
    print(f"  Matrix shape:    {matrix.shape}")
    print(f"  SVG length:      {len(svg)} chars")
    print("  " + "".join("#" if bar else " " for bar in matrix[0][::2]))
    print()


def example_not_found():
    """A row without a barcode is reported, not repaired."""
    print("=" * 60)
    print("Example 4: Row Without a Barcode")
    print("=" * 60)

    try:
        decode_row(0, [False] * 100)
    except NotFoundError as e:
        print(f"  NotFoundError: {e}")
    print()


if __name__ == "__main__":
    example_basic_roundtrip()
    example_check_digit()
    example_rendering()
    example_not_found()
    print("All examples completed successfully.")
