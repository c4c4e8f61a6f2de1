"""Matrix, SVG and PNG rendering for MSI barcodes.

The canonical bar/space pattern from the encoder is laid out as a bit
matrix first: the pattern is scaled by the largest integer multiple that
fits the requested width (plus the side margin) and centered, and every
row of the matrix is identical. SVG output draws one rectangle per bar of
that matrix; PNG output is the SVG rasterized by CairoSVG.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import structlog

logger = structlog.get_logger(__name__)

# Total quiet-zone modules, split between both sides
DEFAULT_MARGIN = 10


def render_matrix(
    pattern: Sequence[bool],
    width: int = 0,
    height: int = 0,
    margin: int = DEFAULT_MARGIN,
) -> np.ndarray:
    """Lay out a bar/space pattern as a 2D boolean matrix.

    Args:
        pattern: Encoded samples, one per module (True = bar).
        width: Preferred width in pixels; widened to fit pattern + margin.
        height: Preferred height in pixels (at least 1).
        margin: Total quiet-zone modules around the pattern.

    Returns:
        Boolean array of shape (height, width), True = bar.

    Raises:
        ValueError: If the pattern is empty or a size is negative.
    """
    if len(pattern) == 0:
        raise ValueError("Found empty contents")
    if width < 0 or height < 0:
        raise ValueError(f"Negative size is not allowed. Input: {width}x{height}")
    if margin < 0:
        raise ValueError(f"Negative margin is not allowed: {margin}")

    input_width = len(pattern)
    full_width = input_width + margin
    output_width = max(width, full_width)
    output_height = max(1, height)

    multiple = output_width // full_width
    left_padding = (output_width - input_width * multiple) // 2

    row = np.zeros(output_width, dtype=bool)
    bars = np.repeat(np.asarray(pattern, dtype=bool), multiple)
    row[left_padding : left_padding + bars.size] = bars

    return np.tile(row, (output_height, 1))


def _bar_spans(row: np.ndarray) -> list[tuple[int, int]]:
    """(x, width) of every bar in a matrix row."""
    padded = np.concatenate(([False], row, [False]))
    changes = np.flatnonzero(padded[1:] != padded[:-1])
    starts = changes[0::2]
    ends = changes[1::2]
    return [(int(s), int(e - s)) for s, e in zip(starts, ends)]


def render_svg(
    pattern: Sequence[bool],
    width: int = 0,
    height: int = 0,
    margin: int = DEFAULT_MARGIN,
    color: str = "#000000",
) -> str:
    """Render a bar/space pattern as an SVG string.

    Args:
        pattern: Encoded samples, one per module (True = bar).
        width: Preferred width in pixels.
        height: Preferred height in pixels.
        margin: Total quiet-zone modules around the pattern.
        color: Bar fill colour.

    Returns:
        Complete SVG document as a string.
    """
    matrix = render_matrix(pattern, width, height, margin)
    out_h, out_w = matrix.shape
    spans = _bar_spans(matrix[0])

    svg_parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {out_w} {out_h}" '
        f'width="{out_w}" height="{out_h}" shape-rendering="crispEdges">',
        f'  <rect width="{out_w}" height="{out_h}" fill="white"/>',
    ]
    for x, bar_width in spans:
        svg_parts.append(
            f'  <rect x="{x}" y="0" width="{bar_width}" height="{out_h}" fill="{color}"/>'
        )
    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug("svg_rendered", bars=len(spans), width=out_w, height=out_h)
    return svg_content


def render_png(
    pattern: Sequence[bool],
    width: int = 0,
    height: int = 0,
    margin: int = DEFAULT_MARGIN,
    color: str = "#000000",
) -> bytes:
    """Render a bar/space pattern as a PNG image.

    Generates SVG first, then converts to PNG via CairoSVG.

    Returns:
        PNG image bytes.
    """
    import cairosvg

    svg = render_svg(pattern, width, height, margin, color)
    out_h, out_w = render_matrix(pattern, width, height, margin).shape
    png_bytes = cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=out_w,
        output_height=out_h,
    )

    logger.debug("png_rendered", width=out_w, height=out_h, bytes=len(png_bytes))
    return png_bytes
