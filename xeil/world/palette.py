"""Colour tables, surface glyphs and colour arithmetic for body patterns."""

from __future__ import annotations

import math
from typing import Callable, Tuple

Draw = Callable[[], float]

PASTELS: Tuple[str, ...] = (
    "#FFD1DC", "#FFECB8", "#B5EAD7", "#C7CEEA", "#E2F0CB",
    "#FFDAC1", "#B5EAD7", "#FF9AA2", "#FFB7B2", "#FFDAC1",
    "#E2F0CB", "#B5EAD7", "#C7CEEA", "#F8B195", "#F67280",
    "#C06C84", "#6C5B7B", "#355C7D", "#A8E6CE", "#DCEDC2",
    "#FFD3B5", "#FFAAA6", "#FF8C94", "#F6CD61", "#4DD0E1",
    "#FFEE58", "#FFCA28", "#FFA000", "#FF8F00", "#FF6F00",
    "#E0BBE4", "#957DAD", "#D291BC", "#FFC72C", "#FDCA40",
    "#F79C81", "#FC94AF", "#BDE0FE", "#A2D2FF", "#FFEDD8",
    "#C3F8FA", "#FFFD98", "#FFD1DC", "#FFECB8", "#B5EAD7",
    "#FFDAC1", "#B5EAD7", "#FF9AA2", "#FFB7B2", "#FFDAC1",
    "#E2F0CB", "#B5EAD7", "#C7CEEA", "#F8B195", "#F67280",
    "#C06C84", "#6C5B7B", "#355C7D", "#A8E6CE", "#DCEDC2",
    "#FFD3B5", "#FFAAA6", "#FF8C94", "#F6CD61", "#4DD0E1",
    "#FFEE58", "#FFCA28", "#FFA000", "#FF8F00", "#FF6F00",
    "#E0BBE4", "#957DAD", "#D291BC", "#FFC72C", "#FDCA40",
    "#F79C81", "#FC94AF", "#BDE0FE", "#A2D2FF", "#FFEDD8",
    "#C3F8FA", "#FFFD98", "#FFB347", "#FFCC99", "#FFDDC1",
    "#FFEEBB", "#FFFACD", "#F0FFF0", "#E6E6FA", "#FFE4E1",
    "#F5F5DC", "#FAFAD2", "#F0F8FF", "#F8F8FF", "#F5F5F5",
    "#FFF5EE", "#F5FFFA", "#F0FFFF", "#F0F0F0", "#FFF0F5",
    "#FAF0E6", "#FFF8DC", "#FFFAF0", "#FFFFF0", "#F8F0E6",
)

BRIGHTS: Tuple[str, ...] = (
    "#FF5733", "#33FF57", "#3357FF", "#F3FF33", "#FF33F3",
    "#33FFF3", "#8A2BE2", "#FF6347", "#7CFC00", "#FFD700",
    "#FF8C00", "#E6E6FA", "#40E0D0", "#F08080", "#90EE90",
    "#FF69B4", "#00FFFF", "#FFA07A", "#98FB98", "#DDA0DD",
    "#FFA500", "#7B68EE", "#00FA9A", "#FF4500", "#DA70D6",
    "#FF00FF", "#1E90FF", "#FFDAB9", "#00BFFF", "#FF1493",
    "#7FFFD4", "#FF00FF", "#FF7F50", "#6495ED", "#DC143C",
    "#00FFFF", "#0000FF", "#8B0000", "#9932CC", "#8FBC8F",
    "#483D8B", "#2F4F4F", "#00CED1", "#9400D3", "#FF8C00",
    "#E9967A", "#8A2BE2", "#A52A2A", "#DEB887", "#5F9EA0",
    "#7FFF00", "#D2691E", "#FF7F50", "#6495ED", "#FFF8DC",
)

# One entry spans two terminal columns.
SURFACE_GLYPHS: Tuple[str, ...] = ("@", "⋮⋮", "#", "-", "•", "+", "=", "8", "~", ".", ":", "o")

CRATER_COLOR = "#888"

PASTEL_PROBABILITY = 0.8

ColorTriple = Tuple[str, str, str]

DISTINGUISHED_PALETTES: dict[str, ColorTriple] = {
    "mao": ("#FFC0CB", "#FFFFFF", "#FFFFFF"),
    "mo": ("#FFFFFF", "#E0E0E0", "#C0C0C0"),
}


def pick(table: Tuple[str, ...], draw: Draw) -> str:
    return table[math.floor(draw() * len(table))]


def random_color(draw: Draw) -> str:
    """Pick a pastel (80%) or bright (20%) colour, consuming two draws."""

    if draw() < PASTEL_PROBABILITY:
        return pick(PASTELS, draw)
    return pick(BRIGHTS, draw)


def random_glyph(draw: Draw) -> str:
    return pick(SURFACE_GLYPHS, draw)


def parse_hex(color: str) -> Tuple[int, int, int]:
    """Read the first three channel pairs of a ``#rrggbb`` colour."""

    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def mix_colors(first: str, second: str, weight: float) -> str:
    """Linearly blend two colours; ``weight`` 1 yields ``first``, 0 yields ``second``."""

    channels = [
        _round_half_up(a * weight + b * (1 - weight))
        for a, b in zip(parse_hex(first), parse_hex(second))
    ]
    red, green, blue = channels
    return f"#{(red << 16) + (green << 8) + blue:06x}"


__all__ = [
    "BRIGHTS",
    "CRATER_COLOR",
    "ColorTriple",
    "DISTINGUISHED_PALETTES",
    "Draw",
    "PASTELS",
    "SURFACE_GLYPHS",
    "mix_colors",
    "parse_hex",
    "pick",
    "random_color",
    "random_glyph",
]
