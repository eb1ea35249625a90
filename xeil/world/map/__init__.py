"""Tile partitioning of world space with memoised, streamed generation."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Hashable, Iterator, List, Sequence, Tuple

from loguru import logger

from ..bodies import BodyFactory, Moon, MoonPolicy, Planet
from ..config import RevisitPolicy, SpecialLocation, UniverseConfig, format_coordinate
from ..scan import ScanDataGenerator, ScanRecord, scan_data, scan_system
from ..specials import SpecialBodyRegistry
from ..stars import Star, StarBlinker, generate_ring_stars, generate_tile_stars

Clock = Callable[[], float]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def _require_finite(x: float, y: float) -> None:
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError("coordinates must be finite numbers")


@dataclass(frozen=True)
class TileKey:
    """Integer coordinate of a tile in the tile grid."""

    x: int
    y: int

    @classmethod
    def containing(cls, world_x: float, world_y: float, chunk_size: int) -> "TileKey":
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        return cls(math.floor(world_x / chunk_size), math.floor(world_y / chunk_size))

    def origin(self, chunk_size: int) -> Tuple[int, int]:
        """World coordinate of the tile's top-left corner."""

        return self.x * chunk_size, self.y * chunk_size

    def neighborhood(self, radius: int = 1) -> Iterator["TileKey"]:
        """Yield the square window of tiles around this one in row-major order."""

        if radius < 0:
            raise ValueError("radius must be non-negative")
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                yield TileKey(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


@dataclass
class ActiveSet:
    """Stars and planets currently within render distance of the observer."""

    stars: List[Star] = field(default_factory=list)
    planets: List[Planet] = field(default_factory=list)

    def planet_named(self, name: str) -> Planet | None:
        lowered = name.lower()
        for planet in self.planets:
            if planet.name and planet.name.lower() == lowered:
                return planet
        return None


@dataclass(frozen=True)
class Destination:
    """Result of jumping to a named body."""

    name: str
    target_x: float
    target_y: float
    planet: Planet


class ChunkManager:
    """Owns the generated universe around a moving observer.

    All mutable generation state (active stars and planets and the memo of
    visited tiles and special locations) lives on the instance; nothing is
    shared between managers.
    """

    def __init__(
        self,
        config: UniverseConfig | None = None,
        *,
        clock: Clock | None = None,
        factory: BodyFactory | None = None,
    ) -> None:
        self.config = config or UniverseConfig()
        self.settings = self.config.map
        self.randomness = self.config.randomness_factory()
        self.factory = factory or BodyFactory(self.config.bodies, randomness=self.randomness)
        self.registry = SpecialBodyRegistry(self.config.specials)
        self.scanner = ScanDataGenerator(self.registry.coordinate_names())
        self.blinker = StarBlinker(self.config.stars.blink_check_interval)
        self._clock: Clock = clock or _monotonic_ms
        self._stars: List[Star] = []
        self._planets: List[Planet] = []
        self._visited_tiles: set[TileKey] = set()
        self._visited_specials: set[str] = set()

    # ------------------------------------------------------------------
    @property
    def stars(self) -> Sequence[Star]:
        return tuple(self._stars)

    @property
    def planets(self) -> Sequence[Planet]:
        return tuple(self._planets)

    @property
    def visited_tiles(self) -> FrozenSet[TileKey]:
        return frozenset(self._visited_tiles)

    @property
    def visited_specials(self) -> FrozenSet[str]:
        return frozenset(self._visited_specials)

    @property
    def active(self) -> ActiveSet:
        return ActiveSet(stars=list(self._stars), planets=list(self._planets))

    def tile_of(self, x: float, y: float) -> TileKey:
        return TileKey.containing(x, y, self.settings.chunk_size)

    # ------------------------------------------------------------------
    def advance(self, observer_x: float, observer_y: float) -> ActiveSet:
        """Generate unvisited content around the observer and evict distant entities."""

        _require_finite(observer_x, observer_y)
        center = self.tile_of(observer_x, observer_y)
        now = self._clock()

        for location in self.registry.near(observer_x, observer_y, self.settings.special_radius):
            if location.key not in self._visited_specials:
                self._generate_special(location, now)
                self._visited_specials.add(location.key)

        self._populate_window(center, now)

        if self.settings.revisit_policy is RevisitPolicy.REGENERATE:
            self._forget_outside(center, observer_x, observer_y)
        self._evict(observer_x, observer_y)
        return self.active

    def request_named_destination(
        self, name: str, target_x: float, target_y: float, *, phase: float = 0.0
    ) -> Destination:
        """Reset the world and place the body seeded by ``name`` at the target.

        ``phase`` selects the animation frame of the destination patterns.
        """

        if not name or not name.strip():
            raise ValueError("destination name cannot be blank")
        _require_finite(target_x, target_y)
        name = name.strip()
        self.reset()

        seed = self.randomness.seed(name)
        planet = self.factory.make_planet(
            seed,
            identifier=f"planet-{name}",
            x=target_x,
            y=target_y,
            name=name,
            moon_policy=MoonPolicy.ROLL_FORCED,
            moon_prefix=f"moon-specific-{name}",
            phase=phase,
        )
        self._planets.append(planet)
        self._populate_window(self.tile_of(target_x, target_y), self._clock())
        logger.info(
            "destination {!r} placed at ({}, {}) with {} moons",
            name,
            target_x,
            target_y,
            len(planet.moons),
        )
        return Destination(name=name, target_x=target_x, target_y=target_y, planet=planet)

    def request_coordinate_destination(
        self, target_x: float, target_y: float, *, phase: float = 0.0
    ) -> Destination:
        """Jump to raw coordinates; the body is named ``coord-X-Y``."""

        _require_finite(target_x, target_y)
        name = f"coord-{format_coordinate(target_x)}-{format_coordinate(target_y)}"
        special = self.registry.by_coordinates(target_x, target_y)
        if special is not None:
            logger.info(
                "coordinates ({}, {}) resolve to special body {}", target_x, target_y, special.name
            )
        return self.request_named_destination(name, target_x, target_y, phase=phase)

    def reset(self) -> None:
        """Drop all generated content and forget every visited key."""

        self._stars.clear()
        self._planets.clear()
        self._visited_tiles.clear()
        self._visited_specials.clear()

    def scan_data(self, body: Planet | Moon) -> ScanRecord:
        return scan_data(body, self.scanner)

    def scan_system(self, planet: Planet) -> dict[str, ScanRecord]:
        return dict(scan_system(planet, self.scanner))

    def update_stars(self, delta: float) -> int:
        """Run the throttled blink step over the active stars."""

        return self.blinker.update(self._stars, delta, self._clock())

    # ------------------------------------------------------------------
    def _populate_window(self, center: TileKey, now: float) -> None:
        for tile in center.neighborhood():
            if tile not in self._visited_tiles:
                self._generate_tile(tile, now)
                self._visited_tiles.add(tile)

    def _generate_tile(self, tile: TileKey, now: float) -> None:
        chunk_size = self.settings.chunk_size
        origin_x, origin_y = tile.origin(chunk_size)

        stars = generate_tile_stars(
            self.randomness.tile_stream(tile.x, tile.y),
            count=self.settings.stars_per_chunk,
            origin_x=origin_x,
            origin_y=origin_y,
            chunk_size=chunk_size,
            now=now,
            settings=self.config.stars,
            origin=tile,
        )
        self._stars.extend(stars)

        planet_count = self.settings.planets_per_chunk
        for index in range(planet_count):
            seed = self.randomness.planet_seed(tile.x, tile.y, index)
            stream = self.randomness.planet_stream(tile.x, tile.y, index)
            x = origin_x + stream.next() * chunk_size
            y = origin_y + stream.next() * chunk_size
            self._planets.append(
                self.factory.make_planet(
                    seed,
                    identifier=f"planet-{tile.x}-{tile.y}-{index}",
                    x=x,
                    y=y,
                    stream=stream,
                    moon_prefix=f"moon-{tile.x}-{tile.y}-{index}",
                    origin=tile,
                )
            )
        logger.debug("generated tile {} ({} stars, {} planets)", tile, len(stars), planet_count)

    def _generate_special(self, location: SpecialLocation, now: float) -> None:
        seed = self.registry.seed_for(location)
        stream = self.randomness.stream_factory(seed)
        planet = self.factory.make_planet(
            seed,
            identifier=f"planet-{location.name}",
            x=location.x,
            y=location.y,
            stream=stream,
            name=location.name,
            moon_policy=MoonPolicy.ALWAYS,
            moon_prefix=f"moon-special-{location.name}",
            origin=location.key,
        )
        self._planets.append(planet)
        self._stars.extend(
            generate_ring_stars(
                stream,
                center_x=location.x,
                center_y=location.y,
                now=now,
                settings=self.config.stars,
                origin=location.key,
            )
        )
        logger.debug("generated special body {} at {}", location.name, location.key)

    def _forget_outside(self, center: TileKey, observer_x: float, observer_y: float) -> None:
        window = set(center.neighborhood())
        stale: set[Hashable] = {tile for tile in self._visited_tiles if tile not in window}
        nearby = {
            location.key
            for location in self.registry.near(observer_x, observer_y, self.settings.special_radius)
        }
        stale.update(key for key in self._visited_specials if key not in nearby)
        if not stale:
            return
        self._visited_tiles.difference_update(stale)
        self._visited_specials.difference_update(stale)
        self._stars = [star for star in self._stars if star.origin not in stale]
        self._planets = [planet for planet in self._planets if planet.origin not in stale]
        logger.debug("forgot {} keys outside the active window", len(stale))

    def _evict(self, observer_x: float, observer_y: float) -> None:
        limit = self.settings.render_distance
        before = len(self._stars) + len(self._planets)
        self._stars = [
            star
            for star in self._stars
            if abs(star.x - observer_x) < limit and abs(star.y - observer_y) < limit
        ]
        self._planets = [
            planet
            for planet in self._planets
            if abs(planet.x - observer_x) < limit and abs(planet.y - observer_y) < limit
        ]
        evicted = before - len(self._stars) - len(self._planets)
        if evicted:
            logger.debug("evicted {} entities beyond render distance", evicted)


__all__ = [
    "ActiveSet",
    "ChunkManager",
    "Clock",
    "Destination",
    "TileKey",
]
