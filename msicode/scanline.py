"""Scanline data structure for one-dimensional barcode rows.

A scanline is one binarized image row: True samples are bars (dark),
False samples are spaces. The decoder only reads it through a handful
of queries -- next bar/space from a position, uniform-range checks and
run lengths -- which are answered from a precomputed transition index.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np


class Scanline:
    """Immutable row of bar/space samples.

    Attributes:
        bits: Read-only boolean array, True = bar.
    """

    def __init__(self, bits: Sequence[bool] | np.ndarray) -> None:
        array = np.array(bits, dtype=bool)
        if array.ndim != 1:
            raise ValueError(f"Scanline must be one-dimensional, got shape {array.shape}")
        array.setflags(write=False)
        self.bits = array
        # Indices where a new run begins (sample differs from its predecessor)
        self._edges = np.flatnonzero(array[1:] != array[:-1]) + 1

    @classmethod
    def from_string(cls, text: str, bar: str = "1") -> Scanline:
        """Build a scanline from a string such as "0011010".

        Args:
            text: One character per sample.
            bar: Character that marks a bar; every other character is space.
        """
        return cls([c == bar for c in text])

    @classmethod
    def from_runs(cls, runs: Iterable[int], quiet_zone: int = 0) -> Scanline:
        """Build a scanline from run lengths, starting with a bar.

        Args:
            runs: Alternating bar/space run lengths.
            quiet_zone: Space samples added on both sides.
        """
        bits: list[bool] = [False] * quiet_zone
        color = True
        for run in runs:
            bits.extend([color] * run)
            color = not color
        bits.extend([False] * quiet_zone)
        return cls(bits)

    @property
    def size(self) -> int:
        """Number of samples."""
        return int(self.bits.size)

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> bool:
        return bool(self.bits[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scanline):
            return NotImplemented
        return bool(np.array_equal(self.bits, other.bits))

    def __repr__(self) -> str:
        return f"Scanline(size={self.size})"

    def to_string(self, bar: str = "1", space: str = "0") -> str:
        """Render the samples as a string, one character per sample."""
        return "".join(bar if b else space for b in self.bits)

    def next_set(self, start: int) -> int:
        """Index of the first bar at or after start, or size if there is none."""
        return self._next(start, True)

    def next_unset(self, start: int) -> int:
        """Index of the first space at or after start, or size if there is none."""
        return self._next(start, False)

    def _next(self, start: int, value: bool) -> int:
        if start >= self.size:
            return self.size
        start = max(0, start)
        hits = np.flatnonzero(self.bits[start:] == value)
        return start + int(hits[0]) if hits.size else self.size

    def is_range(self, start: int, end: int, value: bool) -> bool:
        """Check that every sample in [start, end) equals value.

        An empty range is uniform.

        Raises:
            ValueError: If end < start.
        """
        if end < start or start < 0 or end > self.size:
            raise ValueError(f"Invalid range [{start}, {end}) for scanline of size {self.size}")
        if end == start:
            return True
        return bool(np.all(self.bits[start:end] == value))

    def run_lengths(self, offset: int = 0, limit: int | None = None) -> list[int]:
        """Lengths of consecutive runs starting at offset.

        Every run except possibly the last is terminated by a transition;
        the last run may extend to the end of the row. When limit is given
        and the row holds more runs, exactly limit terminated runs are
        returned.

        Args:
            offset: First sample of the first run.
            limit: Maximum number of runs to return.

        Returns:
            Run lengths, first run first. Empty if offset is past the row.
        """
        if offset >= self.size:
            return []
        first = int(np.searchsorted(self._edges, offset, side="right"))
        if limit is None:
            edges = self._edges[first:]
        else:
            edges = self._edges[first : first + limit]
        bounds = [offset, *edges.tolist()]
        if limit is None or len(bounds) <= limit:
            bounds.append(self.size)
        return np.diff(bounds).tolist()

    def reversed(self) -> Scanline:
        """Scanline with the samples in reverse order."""
        return Scanline(self.bits[::-1])
