from __future__ import annotations

from xeil.world.palette import (
    BRIGHTS,
    PASTELS,
    SURFACE_GLYPHS,
    mix_colors,
    parse_hex,
    random_color,
    random_glyph,
)


def _constant(value: float):
    return lambda: value


def test_mix_colors_blends_channels_linearly() -> None:
    assert mix_colors("#ffffff", "#000000", 1.0) == "#ffffff"
    assert mix_colors("#ffffff", "#000000", 0.0) == "#000000"
    assert mix_colors("#FF0000", "#0000FF", 0.5) == "#800080"
    assert mix_colors("#102030", "#102030", 0.37) == "#102030"


def test_parse_hex_reads_upper_and_lower_case() -> None:
    assert parse_hex("#FFC0CB") == (255, 192, 203)
    assert parse_hex("#ffc0cb") == (255, 192, 203)


def test_random_color_prefers_pastels() -> None:
    assert random_color(_constant(0.0)) == PASTELS[0]
    assert random_color(_constant(0.99)) == BRIGHTS[-1]


def test_random_glyph_indexes_surface_table() -> None:
    assert random_glyph(_constant(0.0)) == SURFACE_GLYPHS[0]
    assert random_glyph(_constant(0.999)) == SURFACE_GLYPHS[-1]
