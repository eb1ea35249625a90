"""Per-body surface pattern synthesis.

A pattern is a square grid of glyph/colour cells describing how a planet or
moon looks: craters, bands, cellular (nearest-site) regions, swirls and an
optional tilted ring.  Synthesis is a pure function of the body size, its
identity and the draws taken from the supplied stream, so the exact order in
which values are drawn below is part of the output contract.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Tuple

from .palette import (
    CRATER_COLOR,
    DISTINGUISHED_PALETTES,
    ColorTriple,
    Draw,
    mix_colors,
    random_color,
    random_glyph,
)
from .rng import Mulberry32


class Texture(str, Enum):
    """Surface texture modes selected by the pattern type draw."""

    GAS_ANGULAR = "gas_angular"
    GAS_BANDS = "gas_bands"
    GAS_SWIRL = "gas_swirl"
    GAS_SPECKLE = "gas_speckle"
    STAR_BANDS = "star_bands"
    BANDS = "bands"
    CELLULAR = "cellular"
    WAVES = "waves"
    SPIRAL = "spiral"


@dataclass(frozen=True, slots=True)
class Cell:
    """A single rendered glyph and its ``#rrggbb`` colour."""

    glyph: str
    color: str


Row = Tuple[Cell | None, ...]


@dataclass(frozen=True, slots=True)
class Crater:
    x: float
    y: float
    radius: float

    def contains(self, x: float, y: float) -> bool:
        dx = x - self.x
        dy = y - self.y
        return dx * dx + dy * dy < self.radius * self.radius


@dataclass(frozen=True, slots=True)
class Site:
    """Seed point of a nearest-site (cellular) region."""

    x: float
    y: float
    color: str
    glyph: str


@dataclass(frozen=True)
class Pattern:
    """Immutable glyph grid produced for one body."""

    rows: Tuple[Row, ...]
    size: int
    texture: Texture
    colors: ColorTriple
    has_rings: bool = False
    ring_tilt: float = 1.0
    is_gas_giant: bool = False
    pattern_type: float = 0.0
    craters: Tuple[Crater, ...] = field(default=(), repr=False)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def cell(self, x: int, y: int) -> Cell | None:
        """Return the cell at column ``x`` and row ``y`` of the grid."""

        return self.rows[y][x]

    def is_empty(self, x: int, y: int) -> bool:
        return self.rows[y][x] is None

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        for y, row in enumerate(self.rows):
            for x, cell in enumerate(row):
                if cell is not None:
                    yield x, y, cell

    def lines(self) -> list[str]:
        """Return the glyph rows as plain strings with spaces for empty cells."""

        return ["".join(cell.glyph if cell else " " for cell in row) for row in self.rows]

    def __str__(self) -> str:
        return "\n".join(self.lines())


def _solid_texture(pattern_type: float, cellular: bool) -> Texture:
    if cellular:
        return Texture.CELLULAR
    if pattern_type < 0.15:
        return Texture.STAR_BANDS
    if pattern_type < 0.45:
        return Texture.BANDS
    if pattern_type < 0.75:
        return Texture.WAVES
    return Texture.SPIRAL


def _gas_texture(pattern_type: float) -> Texture:
    if pattern_type < 0.25:
        return Texture.GAS_ANGULAR
    if pattern_type < 0.5:
        return Texture.GAS_BANDS
    if pattern_type < 0.75:
        return Texture.GAS_SWIRL
    return Texture.GAS_SPECKLE


class PatternSynthesizer:
    """Builds :class:`Pattern` grids from a deterministic stream."""

    RING_CHANCE = 0.7
    GAS_GIANT_CHANCE = 0.5
    RING_INNER = 1.1
    RING_OUTER = 1.7
    RING_WINDOW = 1.8
    MO_RING_TILT = 0.4
    CELLULAR_RANGE = (0.45, 0.6)

    def synthesize(
        self,
        size: int,
        *,
        stream: Mulberry32,
        is_moon: bool = False,
        identity: str | None = None,
        phase: float = 0.0,
    ) -> Pattern:
        """Synthesise the pattern of a body ``size`` cells across.

        ``phase`` is the host animation phase; with the default of zero the
        grid is static and rotation only affects the draw sequence.
        """

        if size <= 0:
            raise ValueError("size must be positive")
        draw: Draw = stream.next
        center = size / 2
        max_dist_sq = center * center

        pattern_type = draw()
        is_gas_giant = False
        has_rings = False
        ring_tilt = 1.0
        if not is_moon:
            if draw() > self.RING_CHANCE:
                has_rings = True
                ring_tilt = 0.3 + draw() * 0.3
            is_gas_giant = draw() > self.GAS_GIANT_CHANCE

        key = identity.lower() if identity else None
        if key in DISTINGUISHED_PALETTES:
            base, secondary, highlight = DISTINGUISHED_PALETTES[key]
            if key == "mo":
                has_rings = True
                ring_tilt = self.MO_RING_TILT
        else:
            base = random_color(draw)
            secondary = random_color(draw)
            highlight = random_color(draw)

        crater_count = math.floor(draw() * 5) + 1
        craters = tuple(
            Crater(
                x=draw() * size - center,
                y=draw() * size - center,
                radius=draw() * (size / 4) + 1,
            )
            for _ in range(crater_count)
        )

        low, high = self.CELLULAR_RANGE
        cellular = not is_gas_giant and low <= pattern_type < high
        sites: list[Site] = []
        if cellular:
            for _ in range(5 + math.floor(draw() * 10)):
                sites.append(
                    Site(
                        x=draw() * size - center,
                        y=draw() * size - center,
                        color=mix_colors(base, highlight, draw()),
                        glyph=random_glyph(draw),
                    )
                )

        rotation = phase * (0.5 + draw())
        cos_r = math.cos(rotation)
        sin_r = math.sin(rotation)
        window = math.ceil(center * self.RING_WINDOW) if has_rings else math.ceil(center)
        inner_sq = (center * self.RING_INNER) * (center * self.RING_INNER)
        outer_sq = (center * self.RING_OUTER) * (center * self.RING_OUTER)

        star_color = mix_colors(base, highlight, 0.7)
        rock_color = mix_colors(base, secondary, 0.5)

        rows: list[Row] = []
        for y in range(-window, window):
            row: list[Cell | None] = []
            for x in range(-window, window):
                dist_sq = x * x + y * y

                on_ring = False
                ring_in_front = False
                if has_rings:
                    ring_x = x * cos_r - y * sin_r
                    ring_y = x * sin_r + y * cos_r
                    ellipse_y = ring_y / ring_tilt
                    ring_dist_sq = ring_x * ring_x + ellipse_y * ellipse_y
                    on_ring = inner_sq < ring_dist_sq < outer_sq
                    ring_in_front = ring_y > 0

                if on_ring and ring_in_front:
                    row.append(Cell(":" if draw() > 0.6 else ".", highlight))
                elif dist_sq <= max_dist_sq:
                    if is_gas_giant:
                        row.append(
                            self._gas_cell(
                                x, y, dist_sq / max_dist_sq, size, center, rotation,
                                pattern_type, (base, secondary, highlight), draw,
                            )
                        )
                    else:
                        row.append(
                            self._solid_cell(
                                x, y, dist_sq, size, center, rotation, cos_r, sin_r,
                                pattern_type, (base, secondary, highlight),
                                craters, sites, star_color, rock_color, draw,
                            )
                        )
                elif on_ring:
                    row.append(Cell(":" if draw() > 0.6 else ".", highlight))
                else:
                    row.append(None)
            rows.append(tuple(row))

        texture = _gas_texture(pattern_type) if is_gas_giant else _solid_texture(pattern_type, cellular)
        return Pattern(
            rows=tuple(rows),
            size=size,
            texture=texture,
            colors=(base, secondary, highlight),
            has_rings=has_rings,
            ring_tilt=ring_tilt,
            is_gas_giant=is_gas_giant,
            pattern_type=pattern_type,
            craters=craters,
        )

    # ------------------------------------------------------------------
    @staticmethod
    def _gas_cell(
        x: int,
        y: int,
        dist_factor: float,
        size: int,
        center: float,
        rotation: float,
        pattern_type: float,
        colors: ColorTriple,
        draw: Draw,
    ) -> Cell:
        base, secondary, highlight = colors
        angle = math.atan2(y, x) + rotation
        noise = draw() * 0.4
        if pattern_type < 0.25:
            value = math.sin(angle * 10 + dist_factor * 20 + noise * 3)
            color = highlight if value > 0.7 else secondary if value > 0.4 else base
        elif pattern_type < 0.5:
            band = math.floor((y + center + rotation * 30) / (size / 10))
            color = base if band % 2 == 0 else secondary
        elif pattern_type < 0.75:
            value = math.sin(x * 0.4 + y * 0.4 + rotation * 20 + noise * 4)
            color = highlight if value > 0.5 else secondary if value > 0 else base
        else:
            value = draw()
            color = highlight if value > 0.6 else secondary if value > 0.3 else base
        return Cell(random_glyph(draw), color)

    @staticmethod
    def _solid_cell(
        x: int,
        y: int,
        dist_sq: int,
        size: int,
        center: float,
        rotation: float,
        cos_r: float,
        sin_r: float,
        pattern_type: float,
        colors: ColorTriple,
        craters: Tuple[Crater, ...],
        sites: list[Site],
        star_color: str,
        rock_color: str,
        draw: Draw,
    ) -> Cell:
        base, secondary, highlight = colors
        if any(crater.contains(x, y) for crater in craters):
            return Cell("o" if draw() > 0.7 else "O", CRATER_COLOR)

        if sites:
            local_x = x * cos_r + y * sin_r
            local_y = -x * sin_r + y * cos_r
            nearest = sites[0]
            best = math.inf
            for site in sites:
                dx = local_x - site.x
                dy = local_y - site.y
                site_dist_sq = dx * dx + dy * dy
                if site_dist_sq < best:
                    best = site_dist_sq
                    nearest = site
            return Cell(nearest.glyph, nearest.color)

        if pattern_type < 0.15:
            angle = math.atan2(y, x) + rotation
            noise = draw() * 0.3
            if math.sin(angle * 12 + noise * 2) > 0.7:
                return Cell("^" if draw() > 0.7 else "*", star_color)
            return Cell("#" if draw() > 0.7 else "%", rock_color)
        if pattern_type < 0.45:
            band = math.floor((y + center + rotation * 25) / (size / 12))
            if band % 2 == 0:
                return Cell("×", base)
            return Cell("8", secondary)
        if pattern_type < 0.75:
            noise = draw() * 0.5
            value = math.sin(x * 0.3 + y * 0.3 + rotation * 15 + noise * 3)
            if value > 0.5:
                return Cell("@", highlight)
            if value > 0:
                return Cell("&", secondary)
            return Cell("~", base)
        angle = math.atan2(y, x)
        spiral = math.sin(math.sqrt(dist_sq) * 0.4 + angle * 3 + rotation * 10)
        if spiral > 0.5:
            return Cell("#", highlight)
        if spiral > 0:
            return Cell("%", secondary)
        return Cell("~", base)


def window_radius(size: int, *, has_rings: bool) -> int:
    """Half-width of the grid produced for ``size`` with or without rings."""

    center = size / 2
    if has_rings:
        return math.ceil(center * PatternSynthesizer.RING_WINDOW)
    return math.ceil(center)


__all__ = [
    "Cell",
    "Crater",
    "Pattern",
    "PatternSynthesizer",
    "Row",
    "Site",
    "Texture",
    "window_radius",
]
