"""Reference values for the first planet of tile (0, 0).

Every number and glyph below is pinned, so any drift in the draw order
shows up here.
"""

from __future__ import annotations

import pytest

from xeil.world.bodies import BodyFactory, Planet
from xeil.world.patterns import Cell, Texture
from xeil.world.rng import WorldRandomness

PLANET_LINES = [
    "                    ",
    "       ×××××××      ",
    "     ×××××××××××    ",
    "    8888888888888   ",
    "   ×××××××××××××××  ",
    "  ××××××××××××××××× ",
    "  OO888888888888888 ",
    " OOOo×××××××××××××××",
    " OOOO×××××××××××××××",
    " Ooo8888888888888888",
    " ×××××××××××××××××××",
    " ×××××××××××××××××××",
    " 8888888888888888888",
    " 8888888888888888888",
    "  ××××××××××××××××× ",
    "  88888888888888888 ",
    "   888888888888888  ",
    "    ×××××××××××××   ",
    "     88888888888    ",
    "       8888888      ",
]

# (size, orbit radius, orbit phase, inclination, pattern lines)
MOONS = [
    (2, 13.8418556060642, 1.4711927813360004, 0.00679626462312969, [" O", "&O"]),
    (
        6,
        17.21308976598084,
        4.878041351922306,
        -0.4345535931680793,
        ["   ×  ", " OO×××", " OOOO×", "oOOOO×", " ×oOO×", " ×ooO×"],
    ),
    (2, 13.84181756619364, 6.06516889627526, 0.4914115091399304, [" O", "OO"]),
    (
        6,
        17.21305148396641,
        3.1882689537764786,
        0.12800804735565127,
        ["   O  ", " OOoO×", " oOOo×", "OOoOO×", " OOOO×", " OOOO×"],
    ),
    (2, 13.841778967529535, 5.005936508571796, 0.007002947639925994, [" O", "×O"]),
    (
        6,
        17.213470928370953,
        2.128982642912613,
        -0.27843151556545925,
        ["   %  ", " %##~~", " ~OOo~", "~~OOOO", " %OOOO", " oOOOO"],
    ),
]


@pytest.fixture(scope="module")
def first_tile_planet() -> Planet:
    randomness = WorldRandomness()
    stream = randomness.planet_stream(0, 0, 0)
    x = stream.next() * 1000
    y = stream.next() * 1000
    return BodyFactory(randomness=randomness).make_planet(
        randomness.planet_seed(0, 0, 0),
        identifier="planet-0-0-0",
        x=x,
        y=y,
        stream=stream,
        moon_prefix="moon-0-0-0",
    )


def test_first_tile_planet_layout(first_tile_planet: Planet) -> None:
    planet = first_tile_planet
    assert planet.seed == 45687352
    assert planet.x == 92.01642172411084
    assert planet.y == 220.0233235489577
    assert planet.size == 19
    assert not planet.pattern.has_rings
    assert planet.pattern.texture is Texture.BANDS


def test_first_tile_planet_pattern(first_tile_planet: Planet) -> None:
    pattern = first_tile_planet.pattern
    assert pattern.lines() == PLANET_LINES
    assert pattern.cell(0, 7) is None
    assert [pattern.cell(x, 7) for x in range(1, 5)] == [
        Cell("O", "#888"),
        Cell("O", "#888"),
        Cell("O", "#888"),
        Cell("o", "#888"),
    ]
    assert pattern.cell(5, 7) == Cell("×", "#FFB347")
    assert pattern.cell(4, 3) == Cell("8", "#DCEDC2")


def test_first_tile_planet_moons(first_tile_planet: Planet) -> None:
    moons = first_tile_planet.moons
    assert [moon.identifier for moon in moons] == [f"moon-0-0-0-{index}" for index in range(6)]
    for moon, (size, radius, phase, inclination, lines) in zip(moons, MOONS):
        assert moon.size == size
        assert moon.orbit_radius == pytest.approx(radius, abs=1e-12)
        assert moon.orbit_phase == pytest.approx(phase, abs=1e-12)
        assert moon.orbit_inclination == pytest.approx(inclination, abs=1e-12)
        assert moon.pattern.lines() == lines

    first = moons[0].pattern
    assert first.cell(0, 0) is None
    assert first.cell(1, 0) == Cell("O", "#888")
    assert first.cell(0, 1) == Cell("&", "#00BFFF")
