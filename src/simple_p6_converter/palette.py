"""Fixed PC-6001 4-color palettes and nearest-color lookup."""

# Reference: PC-6001 SCREEN 3 color sets
# Set | Index 0 | Index 1 | Index 2 | Index 3
# ----|---------|---------|---------|--------
#  1  | Green   | Yellow  | Blue    | Red
#  2  | Buff    | Cyan    | Magenta | Orange
# The color set is chosen on the device (SCREEN 3,,,1 / 2); the VRAM bytes
# only carry the 2-bit index, so the palette here only steers quantization.

from __future__ import annotations

from typing import Dict, Sequence, Tuple

Color = Tuple[int, int, int]
Palette = Tuple[Color, Color, Color, Color]

COLOR_SET_1: Palette = (
    (0, 255, 0),  # green
    (255, 255, 0),  # yellow
    (0, 0, 255),  # blue
    (255, 0, 0),  # red
)

COLOR_SET_2: Palette = (
    (255, 255, 255),  # buff
    (0, 255, 255),  # cyan
    (255, 0, 255),  # magenta
    (255, 128, 0),  # orange
)

PALETTES: Dict[int, Palette] = {
    1: COLOR_SET_1,
    2: COLOR_SET_2,
}


def nearest_palette_index(rgb: Color, palette: Sequence[Color]) -> int:
    """
    Return the palette entry closest to ``rgb`` using squared distance.

    Entries are visited in definition order and only a strictly smaller
    distance replaces the current best, so on ties the lowest index wins.
    """
    r, g, b = rgb
    best_idx = 0
    best_dist = float("inf")
    for i, (pr, pg, pb) in enumerate(palette):
        dist = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if dist < best_dist:
            best_idx = i
            best_dist = dist
    return best_idx


def format_palette_text(palette: Sequence[Color]) -> str:
    entries = [f"{idx}: ({r},{g},{b})" for idx, (r, g, b) in enumerate(palette)]
    return ", ".join(entries)
