"""Roughness -> RGB mapping.

Colors stay ``(r, g, b)`` int tuples through the whole pipeline; the string
formatters at the bottom are for the output boundary only.
"""
from __future__ import annotations

from math import floor
from typing import Tuple

RGB = Tuple[int, int, int]

# Sub-segments with no sample anywhere near them ("steady blue")
FALLBACK_COLOR: RGB = (59, 130, 246)

GREEN: RGB = (0, 255, 0)
YELLOW: RGB = (255, 255, 0)
ORANGE: RGB = (255, 165, 0)
RED: RGB = (255, 0, 0)


def round_half_up(x: float) -> int:
    return int(floor(x + 0.5))


def clamp_roughness(roughness: float) -> float:
    return max(0.0, min(10.0, float(roughness)))


def color_for(roughness: float) -> RGB:
    """
    Continuous gradient: 0 -> green, 5 -> yellow, 10 -> red.

    Red rises over the first half while green stays at 255, then green falls
    over the second half while red stays at 255. Blue is always 0.
    """
    r_val = clamp_roughness(roughness)
    if r_val <= 5:
        return (round_half_up((r_val / 5) * 255), 255, 0)
    return (255, round_half_up((1 - (r_val - 5) / 5) * 255), 0)


def bucket_color_for(roughness: float) -> RGB:
    """Four-step marker palette (green / yellow / orange / red)."""
    if roughness < 2:
        return GREEN
    if roughness < 5:
        return YELLOW
    if roughness < 8:
        return ORANGE
    return RED


def lerp_color(a: RGB, b: RGB, ratio: float) -> RGB:
    """Blend red and green channels; blue is pinned to 0 like the gradient."""
    r = round_half_up(a[0] + (b[0] - a[0]) * ratio)
    g = round_half_up(a[1] + (b[1] - a[1]) * ratio)
    return (r, g, 0)


# ---------------------------------------------------------------------------
# Output boundary
# ---------------------------------------------------------------------------

def to_css_rgb(rgb: RGB) -> str:
    return f"rgb({rgb[0]}, {rgb[1]}, {rgb[2]})"


def to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)
